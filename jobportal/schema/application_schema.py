# jobportal/schema/application_schema.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from jobportal.models.application import ApplicationStatus
from jobportal.schema.job_schema import JobSummary


class AnswerInput(BaseModel):
    field_id: UUID
    answer: str = Field("", max_length=5000)


class ApplyRequest(BaseModel):
    responses: List[AnswerInput] = []


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class AnswerResponse(BaseModel):
    model_config = {"from_attributes": True}

    field_id: UUID
    answer: str
    label: Optional[str] = None


class ApplicationDetail(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    job_id: UUID
    seeker_id: UUID
    status: ApplicationStatus
    applied_at: datetime
    updated_at: Optional[datetime] = None
    job: Optional[JobSummary] = None
    responses: List[AnswerResponse] = []


class ApplicantInfo(BaseModel):
    seeker_id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = []
    resume: Optional[str] = None


class EmployerApplicationView(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    job_id: UUID
    status: ApplicationStatus
    applied_at: datetime
    updated_at: Optional[datetime] = None
    applicant: ApplicantInfo
    responses: List[AnswerResponse] = []
