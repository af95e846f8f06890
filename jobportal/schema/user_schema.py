# jobportal/schema/user_schema.py
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from jobportal.models.user import UserRole
from jobportal.schema.common_schema import HttpUrlStr


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class BasicDetailsUpdate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    phone: str = Field(..., min_length=10, max_length=15)
    location: str = Field(..., min_length=2, max_length=100)
    profile_picture: Optional[HttpUrlStr] = None

    @field_validator("name", "phone", "location")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate that string fields are not blank"""
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class UserResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    name: str
    email: EmailStr
    role: UserRole
    phone: Optional[str] = None
    location: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: datetime


class MeResponse(UserResponse):
    job_seeker_id: Optional[UUID] = None
    employer_id: Optional[UUID] = None
    company_id: Optional[UUID] = None
