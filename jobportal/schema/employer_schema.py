# jobportal/schema/employer_schema.py
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from jobportal.models.employer import CompanyRole
from jobportal.schema.company_schema import CompanySummary
from jobportal.schema.user_schema import UserResponse


class EmployerProfileCreate(BaseModel):
    job_title: Optional[str] = Field(None, min_length=2, max_length=100)
    department: Optional[str] = Field(None, min_length=2, max_length=100)
    company_role: CompanyRole = CompanyRole.RECRUITER


class EmployerProfileUpdate(BaseModel):
    job_title: Optional[str] = Field(None, min_length=2, max_length=100)
    department: Optional[str] = Field(None, min_length=2, max_length=100)


class EmployerSettingsUpdate(EmployerProfileUpdate):
    company_role: Optional[CompanyRole] = None


class EmployerResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    user_id: UUID
    company_id: Optional[UUID] = None
    job_title: Optional[str] = None
    department: Optional[str] = None
    company_role: CompanyRole
    joined_at: Optional[datetime] = None
    created_at: datetime
    user: Optional[UserResponse] = None
    company: Optional[CompanySummary] = None


class EmployerStats(BaseModel):
    total_jobs: int
    active_jobs: int
    total_applications: int
    pending_applications: int
    has_company: bool
