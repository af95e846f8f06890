# jobportal/schema/job_schema.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from jobportal.models.job import OPTION_FIELD_TYPES, FieldType, JobRole, JobStatus, JobType
from jobportal.schema.common_schema import not_null
from jobportal.schema.company_schema import CompanySummary


def _check_salary(salary_min: Optional[int], salary_max: Optional[int]) -> None:
    if salary_min is not None and salary_max is not None and salary_max < salary_min:
        raise ValueError("salary_max must be greater than or equal to salary_min")


# ===== FORM FIELDS =====

class FormFieldInput(BaseModel):
    id: Optional[UUID] = None
    label: str = Field(..., min_length=1, max_length=200)
    field_type: FieldType
    is_required: bool = True
    order: Optional[int] = Field(None, ge=0)
    placeholder: Optional[str] = Field(None, max_length=200)
    options: List[str] = []

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Label cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_options(self):
        """Select-style fields need something to choose from"""
        self.options = [o.strip() for o in self.options if o.strip()]
        if self.field_type in OPTION_FIELD_TYPES and not self.options:
            raise ValueError(f"{self.field_type.value} fields require at least one option")
        return self


class FormRequest(BaseModel):
    fields: List[FormFieldInput] = []


class FormFieldResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    label: str
    field_type: FieldType
    is_required: bool
    is_default: bool
    order: int
    placeholder: Optional[str] = None
    options: List[str] = []


# ===== JOBS =====

class JobCreate(BaseModel):
    title: str = Field(..., min_length=2, max_length=200)
    role: JobRole
    description: str = Field(..., min_length=10)
    requirements: Optional[str] = None
    location: Optional[str] = Field(None, max_length=100)
    job_type: JobType
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    no_of_openings: int = Field(1, ge=1)

    @field_validator("title", "description")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate that string fields are not empty"""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @model_validator(mode='after')
    def validate_salary(self):
        """Validate salary_max >= salary_min"""
        _check_salary(self.salary_min, self.salary_max)
        return self


class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=2, max_length=200)
    role: Optional[JobRole] = None
    description: Optional[str] = Field(None, min_length=10)
    requirements: Optional[str] = None
    location: Optional[str] = Field(None, max_length=100)
    job_type: Optional[JobType] = None
    salary_min: Optional[int] = Field(None, ge=0)
    salary_max: Optional[int] = Field(None, ge=0)
    no_of_openings: Optional[int] = Field(None, ge=1)

    @field_validator("title", "role", "description", "job_type", "no_of_openings")
    @classmethod
    def required_fields_not_null(cls, v):
        return not_null(v)

    @model_validator(mode='after')
    def validate_salary(self):
        _check_salary(self.salary_min, self.salary_max)
        return self


class JobStatusUpdate(BaseModel):
    status: JobStatus


class JobSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    title: str
    role: JobRole
    job_type: JobType
    location: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    status: JobStatus
    company: Optional[CompanySummary] = None
    created_at: datetime


class JobResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    company_id: UUID
    employer_id: UUID
    title: str
    role: JobRole
    description: str
    requirements: Optional[str] = None
    location: Optional[str] = None
    job_type: JobType
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    no_of_openings: int
    status: JobStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    company: Optional[CompanySummary] = None

    # Filled per caller, not stored
    has_applied: bool = False
    application_status: Optional[str] = None
    application_count: Optional[int] = None


class JobDetailResponse(JobResponse):
    form_fields: List[FormFieldResponse] = []


def to_job_response(job, application_status: Optional[str] = None,
                    application_count: Optional[int] = None, detail: bool = False) -> JobResponse:
    """Serialize a job with the caller-specific fields filled in"""
    out = (JobDetailResponse if detail else JobResponse).model_validate(job)
    out.has_applied = application_status is not None
    out.application_status = application_status
    out.application_count = application_count
    return out
