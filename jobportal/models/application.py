# jobportal/models/application.py
import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobportal.database import Base, utcnow


class ApplicationStatus(str, enum.Enum):
    PENDING = "PENDING"
    REVIEWING = "REVIEWING"
    SHORTLISTED = "SHORTLISTED"
    INTERVIEWED = "INTERVIEWED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


TERMINAL_STATUSES = frozenset({
    ApplicationStatus.ACCEPTED,
    ApplicationStatus.REJECTED,
    ApplicationStatus.WITHDRAWN,
})

# Statuses an employer may set on applications to their own jobs
EMPLOYER_SETTABLE_STATUSES = frozenset({
    ApplicationStatus.REVIEWING,
    ApplicationStatus.SHORTLISTED,
    ApplicationStatus.INTERVIEWED,
    ApplicationStatus.ACCEPTED,
    ApplicationStatus.REJECTED,
})

WITHDRAWABLE_STATUSES = frozenset({
    ApplicationStatus.PENDING,
    ApplicationStatus.REVIEWING,
})


class Application(Base):
    __tablename__ = "applications"

    __table_args__ = (
        UniqueConstraint("job_id", "seeker_id", name="uq_application_job_seeker"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4
    )

    job_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )

    seeker_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("job_seekers.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )

    status: Mapped[ApplicationStatus] = mapped_column(
        SQLEnum(ApplicationStatus, name="application_status"),
        default=ApplicationStatus.PENDING,
        nullable=False
    )

    # Timestamps
    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow
    )

    # Relationships
    job = relationship("Job", back_populates="applications")
    seeker = relationship("JobSeeker", back_populates="applications")
    responses = relationship(
        "ApplicationResponse",
        back_populates="application",
        cascade="all, delete-orphan"
    )


class ApplicationResponse(Base):
    __tablename__ = "application_responses"

    __table_args__ = (
        UniqueConstraint("application_id", "field_id", name="uq_response_application_field"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("applications.id", ondelete="CASCADE"), index=True, nullable=False
    )
    field_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("job_form_fields.id", ondelete="CASCADE"), nullable=False
    )
    answer: Mapped[str] = mapped_column(Text, nullable=False, default="")

    application = relationship("Application", back_populates="responses")
    field = relationship("JobFormField")

    @property
    def label(self):
        return self.field.label if self.field else None
