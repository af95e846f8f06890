# jobportal/models/job.py
import enum
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobportal.database import Base, JSONList, utcnow


class JobRole(str, enum.Enum):
    SOFTWARE_ENGINEER = "SOFTWARE_ENGINEER"
    BACKEND_DEVELOPER = "BACKEND_DEVELOPER"
    FRONTEND_DEVELOPER = "FRONTEND_DEVELOPER"
    FULLSTACK_DEVELOPER = "FULLSTACK_DEVELOPER"
    DATA_SCIENTIST = "DATA_SCIENTIST"
    DATA_ANALYST = "DATA_ANALYST"
    DEVOPS_ENGINEER = "DEVOPS_ENGINEER"
    CLOUD_ENGINEER = "CLOUD_ENGINEER"
    ML_ENGINEER = "ML_ENGINEER"
    AI_ENGINEER = "AI_ENGINEER"
    MOBILE_DEVELOPER = "MOBILE_DEVELOPER"
    ANDROID_DEVELOPER = "ANDROID_DEVELOPER"
    IOS_DEVELOPER = "IOS_DEVELOPER"
    UI_UX_DESIGNER = "UI_UX_DESIGNER"
    PRODUCT_MANAGER = "PRODUCT_MANAGER"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    BUSINESS_ANALYST = "BUSINESS_ANALYST"
    QA_ENGINEER = "QA_ENGINEER"
    TEST_AUTOMATION_ENGINEER = "TEST_AUTOMATION_ENGINEER"
    CYBERSECURITY_ANALYST = "CYBERSECURITY_ANALYST"
    NETWORK_ENGINEER = "NETWORK_ENGINEER"
    SYSTEM_ADMIN = "SYSTEM_ADMIN"
    DATABASE_ADMIN = "DATABASE_ADMIN"
    BLOCKCHAIN_DEVELOPER = "BLOCKCHAIN_DEVELOPER"
    GAME_DEVELOPER = "GAME_DEVELOPER"
    TECH_SUPPORT = "TECH_SUPPORT"
    CONTENT_WRITER = "CONTENT_WRITER"
    DIGITAL_MARKETER = "DIGITAL_MARKETER"
    SALES_ASSOCIATE = "SALES_ASSOCIATE"
    HR_MANAGER = "HR_MANAGER"


class JobType(str, enum.Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    INTERNSHIP = "INTERNSHIP"
    CONTRACT = "CONTRACT"


class JobStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


class FieldType(str, enum.Enum):
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    LOCATION = "LOCATION"
    RESUME_URL = "RESUME_URL"
    TEXTAREA = "TEXTAREA"
    SELECT = "SELECT"
    MULTISELECT = "MULTISELECT"
    CHECKBOX = "CHECKBOX"
    DATE = "DATE"
    YEARS_OF_EXPERIENCE = "YEARS_OF_EXPERIENCE"


OPTION_FIELD_TYPES = (FieldType.SELECT, FieldType.MULTISELECT)

# Seeded on every new job; (label, type), order follows position
DEFAULT_FORM_FIELDS = (
    ("Full Name", FieldType.TEXT),
    ("Email Address", FieldType.EMAIL),
    ("Phone Number", FieldType.PHONE),
    ("Resume URL", FieldType.RESUME_URL),
    ("Years of Experience", FieldType.YEARS_OF_EXPERIENCE),
)


class Job(Base):
    __tablename__ = "jobs"

    __table_args__ = (
        Index("idx_job_status", "status"),
        Index("idx_job_role", "role"),
        Index("idx_job_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False
    )
    employer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("employers.id", ondelete="CASCADE"), index=True, nullable=False
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[JobRole] = mapped_column(Enum(JobRole, name="job_role"), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    job_type: Mapped[JobType] = mapped_column(Enum(JobType, name="job_type"), nullable=False)

    # Salary
    salary_min: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    salary_max: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    no_of_openings: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, name="job_status"), default=JobStatus.ACTIVE, nullable=False
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    company = relationship("Company", back_populates="jobs")
    employer = relationship("Employer", back_populates="jobs")
    form_fields = relationship(
        "JobFormField",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="JobFormField.order"
    )
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan"
    )


class JobFormField(Base):
    __tablename__ = "job_form_fields"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), index=True, nullable=False
    )
    label: Mapped[str] = mapped_column(String(200), nullable=False)
    field_type: Mapped[FieldType] = mapped_column(Enum(FieldType, name="field_type"), nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order: Mapped[int] = mapped_column("field_order", Integer, default=0, nullable=False)
    placeholder: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    options: Mapped[List[str]] = mapped_column(JSONList, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    job = relationship("Job", back_populates="form_fields")
