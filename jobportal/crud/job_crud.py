# jobportal/crud/job_crud.py
import logging
import uuid
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from jobportal.crud.common import LIKE_ESCAPE, contains_pattern, paginate
from jobportal.exceptions import Forbidden, InvalidInput, InvalidOperation, NotFound
from jobportal.models.application import Application, ApplicationResponse
from jobportal.models.company import Company
from jobportal.models.job import DEFAULT_FORM_FIELDS, Job, JobFormField, JobStatus
from jobportal.schema.job_schema import FormFieldInput

logger = logging.getLogger(__name__)

CUSTOM_FIELD_ORDER_OFFSET = 100


def default_form_fields() -> List[JobFormField]:
    return [
        JobFormField(label=label, field_type=field_type, is_required=True, is_default=True, order=position)
        for position, (label, field_type) in enumerate(DEFAULT_FORM_FIELDS, start=1)
    ]


def create_job(db: Session, employer_id: uuid.UUID, company_id: uuid.UUID, **job_data) -> Job:
    """Insert the job and its default form fields in one transaction"""
    job = Job(employer_id=employer_id, company_id=company_id, **job_data)
    job.form_fields = default_form_fields()
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info("Job created: %s by employer %s", job.id, employer_id)
    return job


def get_owned_job(db: Session, job_id: uuid.UUID, employer_id: Optional[uuid.UUID]) -> Job:
    job = db.get(Job, job_id)
    if not job:
        raise NotFound("Job not found")
    if employer_id is None or job.employer_id != employer_id:
        raise Forbidden("You do not have permission to manage this job")
    return job


def update_job(db: Session, job_id: uuid.UUID, employer_id: uuid.UUID, **kwargs) -> Job:
    job = get_owned_job(db, job_id, employer_id)

    for key, value in kwargs.items():
        if hasattr(job, key):
            setattr(job, key, value)

    if job.salary_min is not None and job.salary_max is not None and job.salary_max < job.salary_min:
        db.rollback()
        raise InvalidInput("salary_max must be greater than or equal to salary_min")

    db.commit()
    db.refresh(job)
    return job


def update_job_status(db: Session, job_id: uuid.UUID, employer_id: uuid.UUID, status: JobStatus) -> Job:
    job = get_owned_job(db, job_id, employer_id)
    job.status = status
    db.commit()
    db.refresh(job)

    logger.info("Job %s status set to %s", job.id, status.value)
    return job


def delete_job(db: Session, job_id: uuid.UUID, employer_id: uuid.UUID) -> None:
    """Hard delete: answers, applications, form fields, then the job"""
    job = get_owned_job(db, job_id, employer_id)

    application_ids = db.query(Application.id).filter(Application.job_id == job.id)
    db.query(ApplicationResponse).filter(
        ApplicationResponse.application_id.in_(application_ids.scalar_subquery())
    ).delete(synchronize_session=False)
    db.query(Application).filter(Application.job_id == job.id).delete(synchronize_session=False)
    db.query(JobFormField).filter(JobFormField.job_id == job.id).delete(synchronize_session=False)
    db.query(Job).filter(Job.id == job.id).delete(synchronize_session=False)
    db.commit()

    logger.info("Job deleted: %s", job_id)


# ===== FORM BUILDER =====

def _field_order(field: FormFieldInput, index: int) -> int:
    return field.order if field.order is not None else index + CUSTOM_FIELD_ORDER_OFFSET


def _apply_field(target: JobFormField, field: FormFieldInput, index: int) -> None:
    target.label = field.label
    target.field_type = field.field_type
    target.is_required = field.is_required
    target.order = _field_order(field, index)
    target.placeholder = field.placeholder
    target.options = list(field.options)


def get_form(db: Session, job_id: uuid.UUID) -> List[JobFormField]:
    if not db.get(Job, job_id):
        raise NotFound("Job not found")
    return (
        db.query(JobFormField)
        .filter(JobFormField.job_id == job_id)
        .order_by(JobFormField.order)
        .all()
    )


def replace_form(db: Session, job_id: uuid.UUID, employer_id: uuid.UUID,
                 fields: List[FormFieldInput]) -> List[JobFormField]:
    """Swap the employer-defined fields for a new set; default fields stay"""
    job = get_owned_job(db, job_id, employer_id)

    db.query(JobFormField).filter(
        JobFormField.job_id == job.id,
        JobFormField.is_default == False
    ).delete(synchronize_session=False)

    for index, field in enumerate(fields):
        new_field = JobFormField(job_id=job.id, is_default=False)
        _apply_field(new_field, field, index)
        db.add(new_field)

    db.commit()
    db.expire_all()
    return get_form(db, job.id)


def upsert_form(db: Session, job_id: uuid.UUID, employer_id: uuid.UUID,
                fields: List[FormFieldInput]) -> List[JobFormField]:
    """Update fields that carry an id and add the rest"""
    job = get_owned_job(db, job_id, employer_id)

    for index, field in enumerate(fields):
        if field.id is None:
            new_field = JobFormField(job_id=job.id, is_default=False)
            _apply_field(new_field, field, index)
            db.add(new_field)
            continue

        existing = db.query(JobFormField).filter(
            JobFormField.id == field.id,
            JobFormField.job_id == job.id
        ).first()
        if not existing:
            db.rollback()
            raise NotFound(f"Form field {field.id} not found")
        if existing.is_default:
            db.rollback()
            raise InvalidOperation("Default fields cannot be modified")
        _apply_field(existing, field, index)

    db.commit()
    db.expire_all()
    return get_form(db, job.id)


def delete_form_field(db: Session, job_id: uuid.UUID, field_id: uuid.UUID,
                      employer_id: Optional[uuid.UUID]) -> None:
    field = db.query(JobFormField).filter(
        JobFormField.id == field_id,
        JobFormField.job_id == job_id
    ).first()
    if not field:
        raise NotFound("Form field not found")
    if field.is_default:
        raise InvalidOperation("Default fields cannot be deleted")

    get_owned_job(db, job_id, employer_id)
    db.delete(field)
    db.commit()


# ===== LISTINGS =====

def search_jobs(
    db: Session,
    role: Optional[str] = None,
    job_type: Optional[str] = None,
    location: Optional[str] = None,
    salary_min: Optional[int] = None,
    salary_max: Optional[int] = None,
    company_id: Optional[uuid.UUID] = None,
    industry: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10
) -> Dict:
    query = (
        db.query(Job)
        .join(Company, Job.company_id == Company.id)
        .options(selectinload(Job.company))
        .filter(Job.status == JobStatus.ACTIVE)
    )

    if role:
        query = query.filter(Job.role == role)

    if job_type:
        query = query.filter(Job.job_type == job_type)

    if location:
        query = query.filter(Job.location.ilike(contains_pattern(location), escape=LIKE_ESCAPE))

    if salary_min is not None:
        query = query.filter(Job.salary_min >= salary_min)

    if salary_max is not None:
        query = query.filter(Job.salary_max <= salary_max)

    if company_id:
        query = query.filter(Job.company_id == company_id)

    if industry:
        query = query.filter(Company.industry.ilike(contains_pattern(industry), escape=LIKE_ESCAPE))

    if search:
        pattern = contains_pattern(search.strip())
        query = query.filter(
            or_(
                Job.title.ilike(pattern, escape=LIKE_ESCAPE),
                Job.description.ilike(pattern, escape=LIKE_ESCAPE),
                Company.name.ilike(pattern, escape=LIKE_ESCAPE)
            )
        )

    return paginate(query.order_by(Job.created_at.desc()), page, limit)


def application_counts(db: Session, job_ids: List[uuid.UUID]) -> Dict[uuid.UUID, int]:
    if not job_ids:
        return {}
    rows = (
        db.query(Application.job_id, func.count(Application.id))
        .filter(Application.job_id.in_(job_ids))
        .group_by(Application.job_id)
        .all()
    )
    return {job_id: count for job_id, count in rows}


def get_employer_jobs(db: Session, employer_id: uuid.UUID, status: Optional[JobStatus] = None,
                      page: int = 1, limit: int = 10) -> Dict:
    query = (
        db.query(Job)
        .options(selectinload(Job.company))
        .filter(Job.employer_id == employer_id)
    )
    if status:
        query = query.filter(Job.status == status)
    return paginate(query.order_by(Job.created_at.desc()), page, limit)


def get_job(db: Session, job_id: uuid.UUID, active_only: bool = False) -> Job:
    query = (
        db.query(Job)
        .options(selectinload(Job.company), selectinload(Job.form_fields))
        .filter(Job.id == job_id)
    )
    if active_only:
        query = query.filter(Job.status == JobStatus.ACTIVE)

    job = query.first()
    if not job:
        raise NotFound("Job not found")
    return job


def applied_statuses(db: Session, seeker_id: Optional[uuid.UUID], job_ids: List[uuid.UUID]) -> Dict[uuid.UUID, str]:
    """Map of job id to the seeker's application status for the given jobs"""
    if seeker_id is None or not job_ids:
        return {}
    rows = (
        db.query(Application.job_id, Application.status)
        .filter(Application.seeker_id == seeker_id, Application.job_id.in_(job_ids))
        .all()
    )
    return {job_id: status.value for job_id, status in rows}
