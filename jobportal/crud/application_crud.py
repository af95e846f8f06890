# jobportal/crud/application_crud.py
import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobportal.crud.common import LIKE_ESCAPE, contains_pattern, paginate
from jobportal.crud.job_crud import get_owned_job
from jobportal.exceptions import Conflict, InvalidInput, InvalidOperation, NotFound
from jobportal.models.application import (
    EMPLOYER_SETTABLE_STATUSES,
    TERMINAL_STATUSES,
    WITHDRAWABLE_STATUSES,
    Application,
    ApplicationResponse,
    ApplicationStatus,
)
from jobportal.models.company import Company
from jobportal.models.job import Job, JobStatus
from jobportal.models.job_seeker import JobSeeker, Preferences
from jobportal.schema.application_schema import AnswerInput

logger = logging.getLogger(__name__)

RECOMMENDATION_LIMIT = 10
RECENT_DAYS = 30


def _with_job(query):
    return query.options(
        selectinload(Application.job).selectinload(Job.company),
        selectinload(Application.responses).selectinload(ApplicationResponse.field),
    )


def parse_status(value: str) -> ApplicationStatus:
    try:
        return ApplicationStatus(value.strip().upper())
    except ValueError:
        valid = ", ".join(s.value for s in ApplicationStatus)
        raise InvalidInput(f"Invalid status. Must be one of: {valid}")


# ===== APPLY =====

def apply_to_job(db: Session, job_id: uuid.UUID, seeker_id: uuid.UUID,
                 responses: List[AnswerInput]) -> Application:
    """Submit an application with its answers as a single write"""
    job = (
        db.query(Job)
        .options(selectinload(Job.form_fields))
        .filter(Job.id == job_id, Job.status == JobStatus.ACTIVE)
        .first()
    )
    if not job:
        raise NotFound("Job not found or no longer accepting applications")

    already_applied = db.query(Application.id).filter(
        Application.job_id == job.id,
        Application.seeker_id == seeker_id
    ).first()
    if already_applied:
        raise Conflict("You have already applied for this job")

    answers: Dict[uuid.UUID, str] = {}
    for response in responses:
        if response.field_id in answers:
            raise InvalidInput("Each form field can only be answered once")
        answers[response.field_id] = response.answer

    fields_by_id = {field.id: field for field in job.form_fields}
    unknown = [str(field_id) for field_id in answers if field_id not in fields_by_id]
    if unknown:
        raise InvalidInput(
            "Responses reference fields that are not part of this job's form",
            errors=[{"field": field_id, "message": "Unknown form field"} for field_id in unknown],
        )

    for field in job.form_fields:
        if field.is_required and field.id not in answers:
            raise InvalidInput(
                f"{field.label} is required",
                errors=[{"field": str(field.id), "message": f"{field.label} is required"}],
            )

    application = Application(job_id=job.id, seeker_id=seeker_id, status=ApplicationStatus.PENDING)
    application.responses = [
        ApplicationResponse(field_id=field_id, answer=answer)
        for field_id, answer in answers.items()
    ]
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # Unique (job_id, seeker_id) is the real guard against concurrent double-apply
        db.rollback()
        raise Conflict("You have already applied for this job")

    logger.info("Application %s submitted for job %s", application.id, job.id)
    return get_my_application(db, application.id, seeker_id)


# ===== SEEKER READS =====

def list_my_applications(db: Session, seeker_id: uuid.UUID, status: Optional[ApplicationStatus] = None,
                         page: int = 1, limit: int = 10) -> Dict:
    query = _with_job(db.query(Application)).filter(Application.seeker_id == seeker_id)
    if status:
        query = query.filter(Application.status == status)
    return paginate(query.order_by(Application.applied_at.desc()), page, limit)


def get_my_application(db: Session, application_id: uuid.UUID, seeker_id: uuid.UUID) -> Application:
    """Owner-filtered lookup: someone else's application is simply not found"""
    application = _with_job(db.query(Application)).filter(
        Application.id == application_id,
        Application.seeker_id == seeker_id
    ).first()
    if not application:
        raise NotFound("Application not found")
    return application


def get_by_status(db: Session, seeker_id: uuid.UUID, status: str) -> List[Application]:
    parsed = parse_status(status)
    return (
        _with_job(db.query(Application))
        .filter(Application.seeker_id == seeker_id, Application.status == parsed)
        .order_by(Application.applied_at.desc())
        .all()
    )


def get_by_date_range(db: Session, seeker_id: uuid.UUID,
                      start_date: Optional[date], end_date: Optional[date]) -> List[Application]:
    if start_date is None or end_date is None:
        raise InvalidInput("start_date and end_date are required")
    if end_date < start_date:
        raise InvalidInput("end_date must be on or after start_date")

    start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
    end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return (
        _with_job(db.query(Application))
        .filter(
            Application.seeker_id == seeker_id,
            Application.applied_at >= start,
            Application.applied_at < end
        )
        .order_by(Application.applied_at.desc())
        .all()
    )


# ===== TRANSITIONS =====

def withdraw_application(db: Session, application_id: uuid.UUID, seeker_id: uuid.UUID) -> Application:
    application = get_my_application(db, application_id, seeker_id)

    if application.status == ApplicationStatus.WITHDRAWN:
        raise InvalidOperation("Application has already been withdrawn")
    if application.status not in WITHDRAWABLE_STATUSES:
        raise InvalidOperation(
            f"Cannot withdraw an application with status {application.status.value}"
        )

    application.status = ApplicationStatus.WITHDRAWN
    db.commit()
    db.refresh(application)

    logger.info("Application %s withdrawn", application.id)
    return application


def update_application_status(db: Session, job_id: uuid.UUID, application_id: uuid.UUID,
                              employer_id: uuid.UUID, status: ApplicationStatus) -> Application:
    """Employer-driven transition on an application to one of their jobs"""
    job = get_owned_job(db, job_id, employer_id)

    if status not in EMPLOYER_SETTABLE_STATUSES:
        allowed = ", ".join(sorted(s.value for s in EMPLOYER_SETTABLE_STATUSES))
        raise InvalidInput(f"Invalid status. Must be one of: {allowed}")

    application = db.query(Application).filter(
        Application.id == application_id,
        Application.job_id == job.id
    ).first()
    if not application:
        raise NotFound("Application not found")

    if application.status in TERMINAL_STATUSES:
        raise InvalidOperation(
            f"Application is already {application.status.value} and can no longer change"
        )

    previous = application.status
    application.status = status
    db.commit()
    db.refresh(application)

    logger.info("Application %s moved %s -> %s", application.id, previous.value, status.value)
    return application


# ===== EMPLOYER READS =====

def employer_view(application: Application) -> dict:
    seeker = application.seeker
    user = seeker.user
    return {
        "id": application.id,
        "job_id": application.job_id,
        "status": application.status,
        "applied_at": application.applied_at,
        "updated_at": application.updated_at,
        "applicant": {
            "seeker_id": seeker.id,
            "name": user.name,
            "email": user.email,
            "phone": user.phone,
            "location": user.location,
            "skills": seeker.skills or [],
            "resume": seeker.resume,
        },
        "responses": application.responses,
    }


def list_job_applications(db: Session, job_id: uuid.UUID, employer_id: uuid.UUID,
                          status: Optional[ApplicationStatus] = None,
                          page: int = 1, limit: int = 10) -> Dict:
    job = get_owned_job(db, job_id, employer_id)

    query = (
        db.query(Application)
        .options(
            selectinload(Application.seeker).selectinload(JobSeeker.user),
            selectinload(Application.responses).selectinload(ApplicationResponse.field),
        )
        .filter(Application.job_id == job.id)
    )
    if status:
        query = query.filter(Application.status == status)

    result = paginate(query.order_by(Application.applied_at.desc()), page, limit)
    result["items"] = [employer_view(application) for application in result["items"]]
    return result


# ===== STATS =====

def status_counts(db: Session, *filters) -> Dict[str, int]:
    counts = {status.value: 0 for status in ApplicationStatus}
    rows = (
        db.query(Application.status, func.count(Application.id))
        .select_from(Application)
        .join(Job, Application.job_id == Job.id)
        .filter(*filters)
        .group_by(Application.status)
        .all()
    )
    for status, count in rows:
        counts[status.value] = count
    return counts


def get_my_stats(db: Session, seeker_id: uuid.UUID) -> dict:
    by_status = status_counts(db, Application.seeker_id == seeker_id)
    since = datetime.now(timezone.utc) - timedelta(days=RECENT_DAYS)

    recent = db.query(func.count(Application.id)).filter(
        Application.seeker_id == seeker_id,
        Application.applied_at >= since
    ).scalar()

    by_company = (
        db.query(Company.id, Company.name, func.count(Application.id).label("count"))
        .select_from(Company)
        .join(Job, Job.company_id == Company.id)
        .join(Application, Application.job_id == Job.id)
        .filter(Application.seeker_id == seeker_id)
        .group_by(Company.id, Company.name)
        .order_by(func.count(Application.id).desc(), Company.name)
        .limit(5)
        .all()
    )

    by_role = (
        db.query(Job.role, func.count(Application.id).label("count"))
        .select_from(Job)
        .join(Application, Application.job_id == Job.id)
        .filter(Application.seeker_id == seeker_id)
        .group_by(Job.role)
        .order_by(func.count(Application.id).desc())
        .all()
    )

    return {
        "total_applications": sum(by_status.values()),
        "by_status": by_status,
        "recent_applications": recent,
        "by_company": [
            {"company_id": company_id, "company_name": name, "count": count}
            for company_id, name, count in by_company
        ],
        "by_role": [{"role": role.value, "count": count} for role, count in by_role],
    }


# ===== RECOMMENDATIONS =====

def recommend_jobs(db: Session, seeker_id: uuid.UUID, limit: int = RECOMMENDATION_LIMIT) -> List[Job]:
    """Active jobs matching any stated preference, excluding ones already applied to"""
    preferences = db.query(Preferences).filter(Preferences.seeker_id == seeker_id).first()

    applied = db.query(Application.job_id).filter(Application.seeker_id == seeker_id)
    query = (
        db.query(Job)
        .options(selectinload(Job.company))
        .filter(Job.status == JobStatus.ACTIVE, Job.id.not_in(applied.scalar_subquery()))
    )

    conditions = []
    if preferences:
        if preferences.preferred_roles:
            conditions.append(Job.role.in_(preferences.preferred_roles))
        if preferences.preferred_job_types:
            conditions.append(Job.job_type.in_(preferences.preferred_job_types))
        for location in preferences.preferred_locations or []:
            conditions.append(Job.location.ilike(contains_pattern(location), escape=LIKE_ESCAPE))
        if preferences.salary_expectation_min is not None:
            conditions.append(Job.salary_max >= preferences.salary_expectation_min)

    if conditions:
        query = query.filter(or_(*conditions))

    return query.order_by(Job.created_at.desc()).limit(limit).all()
