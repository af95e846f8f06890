# jobportal/schema/company_schema.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from jobportal.models.company import CompanySize
from jobportal.models.job import JobRole, JobType
from jobportal.schema.common_schema import HttpUrlStr

MIN_FOUNDED_YEAR = 1800


def _check_founded_year(v: Optional[int]) -> Optional[int]:
    if v is None:
        return v
    current_year = datetime.now().year
    if v < MIN_FOUNDED_YEAR or v > current_year:
        raise ValueError(f"Founded year must be between {MIN_FOUNDED_YEAR} and {current_year}")
    return v


class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    industry: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    location: Optional[str] = Field(None, min_length=2, max_length=100)
    website: Optional[HttpUrlStr] = None
    logo: Optional[HttpUrlStr] = None
    size: Optional[CompanySize] = None
    founded_year: Optional[int] = None

    @field_validator("name", "industry")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Must be at least 2 characters")
        return v

    @field_validator("founded_year")
    @classmethod
    def validate_founded_year(cls, v: Optional[int]) -> Optional[int]:
        return _check_founded_year(v)


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    industry: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    location: Optional[str] = Field(None, min_length=2, max_length=100)
    website: Optional[HttpUrlStr] = None
    logo: Optional[HttpUrlStr] = None
    size: Optional[CompanySize] = None
    founded_year: Optional[int] = None

    @field_validator("name", "industry")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Must be at least 2 characters")
        return v

    @field_validator("founded_year")
    @classmethod
    def validate_founded_year(cls, v: Optional[int]) -> Optional[int]:
        return _check_founded_year(v)


class CompanySummary(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    name: str
    industry: str
    location: Optional[str] = None
    size: Optional[CompanySize] = None
    logo: Optional[str] = None


class CompanyResponse(CompanySummary):
    description: Optional[str] = None
    website: Optional[str] = None
    founded_year: Optional[int] = None
    is_active: bool
    created_at: datetime


class CompanyJobSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    title: str
    role: JobRole
    job_type: JobType
    location: Optional[str] = None
    created_at: datetime


class CompanyPublicResponse(CompanyResponse):
    recent_jobs: List[CompanyJobSummary] = []
