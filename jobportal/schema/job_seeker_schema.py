# jobportal/schema/job_seeker_schema.py
from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from jobportal.models.job import JobRole, JobType
from jobportal.schema.common_schema import HttpUrlStr, not_null
from jobportal.schema.user_schema import UserResponse


def _clean_skills(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is None:
        return v
    skills = []
    for skill in v:
        skill = skill.strip()
        if skill and skill not in skills:
            skills.append(skill)
    if not skills:
        raise ValueError("At least one skill is required")
    return skills


def _check_date_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and end < start:
        raise ValueError("end_date must be on or after start_date")


# ===== PROFILE =====

class JobSeekerProfileCreate(BaseModel):
    resume: Optional[HttpUrlStr] = None
    linkedin: Optional[HttpUrlStr] = None
    github: Optional[HttpUrlStr] = None
    skills: List[str] = Field(..., min_length=1)

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: List[str]) -> List[str]:
        return _clean_skills(v)


class JobSeekerProfileUpdate(BaseModel):
    resume: Optional[HttpUrlStr] = None
    linkedin: Optional[HttpUrlStr] = None
    github: Optional[HttpUrlStr] = None
    skills: Optional[List[str]] = None

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_skills(not_null(v))


# ===== EDUCATION =====

class EducationCreate(BaseModel):
    institution: str = Field(..., min_length=2, max_length=200)
    degree: str = Field(..., min_length=2, max_length=200)
    field_of_study: Optional[str] = Field(None, max_length=200)
    start_date: date
    end_date: Optional[date] = None
    grade: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def validate_dates(self):
        _check_date_range(self.start_date, self.end_date)
        return self


class EducationUpdate(BaseModel):
    institution: Optional[str] = Field(None, min_length=2, max_length=200)
    degree: Optional[str] = Field(None, min_length=2, max_length=200)
    field_of_study: Optional[str] = Field(None, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    grade: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("institution", "degree", "start_date")
    @classmethod
    def required_fields_not_null(cls, v):
        return not_null(v)

    @model_validator(mode="after")
    def validate_dates(self):
        _check_date_range(self.start_date, self.end_date)
        return self


class EducationResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    institution: str
    degree: str
    field_of_study: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    grade: Optional[str] = None
    description: Optional[str] = None


# ===== EXPERIENCE =====

class ExperienceCreate(BaseModel):
    company: str = Field(..., min_length=2, max_length=200)
    position: str = Field(..., min_length=2, max_length=200)
    location: Optional[str] = Field(None, max_length=100)
    start_date: date
    end_date: Optional[date] = None
    is_current: bool = False
    description: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.is_current:
            self.end_date = None
        _check_date_range(self.start_date, self.end_date)
        return self


class ExperienceUpdate(BaseModel):
    company: Optional[str] = Field(None, min_length=2, max_length=200)
    position: Optional[str] = Field(None, min_length=2, max_length=200)
    location: Optional[str] = Field(None, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: Optional[bool] = None
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("company", "position", "start_date", "is_current")
    @classmethod
    def required_fields_not_null(cls, v):
        return not_null(v)

    @model_validator(mode="after")
    def validate_dates(self):
        _check_date_range(self.start_date, self.end_date)
        return self


class ExperienceResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    company: str
    position: str
    location: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_current: bool
    description: Optional[str] = None


# ===== PROJECTS =====

class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    technologies: List[str] = []
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    github_url: Optional[HttpUrlStr] = None
    live_url: Optional[HttpUrlStr] = None
    is_active: bool = False

    @model_validator(mode="after")
    def validate_dates(self):
        _check_date_range(self.start_date, self.end_date)
        return self


class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    technologies: Optional[List[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    github_url: Optional[HttpUrlStr] = None
    live_url: Optional[HttpUrlStr] = None
    is_active: Optional[bool] = None

    @field_validator("title", "technologies", "is_active")
    @classmethod
    def required_fields_not_null(cls, v):
        return not_null(v)

    @model_validator(mode="after")
    def validate_dates(self):
        _check_date_range(self.start_date, self.end_date)
        return self


class ProjectResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    title: str
    description: Optional[str] = None
    technologies: List[str]
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    is_active: bool


# ===== PREFERENCES =====

class PreferencesUpdate(BaseModel):
    preferred_roles: List[JobRole] = []
    preferred_job_types: List[JobType] = []
    preferred_locations: List[str] = []
    salary_expectation_min: Optional[int] = Field(None, ge=0)
    salary_expectation_max: Optional[int] = Field(None, ge=0)
    remote_work: bool = False
    willing_to_relocate: bool = False

    @model_validator(mode="after")
    def validate_salary(self):
        """Validate salary_expectation_max >= salary_expectation_min"""
        low, high = self.salary_expectation_min, self.salary_expectation_max
        if low is not None and high is not None and high < low:
            raise ValueError("salary_expectation_max must be greater than or equal to salary_expectation_min")
        return self


class PreferencesResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    preferred_roles: List[JobRole]
    preferred_job_types: List[JobType]
    preferred_locations: List[str]
    salary_expectation_min: Optional[int] = None
    salary_expectation_max: Optional[int] = None
    remote_work: bool
    willing_to_relocate: bool


class JobSeekerResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    user_id: UUID
    resume: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    skills: List[str]


class JobSeekerProfileResponse(JobSeekerResponse):
    user: UserResponse
    educations: List[EducationResponse] = []
    experiences: List[ExperienceResponse] = []
    projects: List[ProjectResponse] = []
    preferences: Optional[PreferencesResponse] = None
