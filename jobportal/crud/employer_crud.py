# jobportal/crud/employer_crud.py
import logging
import uuid
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from jobportal.exceptions import Conflict, NotFound, PreconditionFailed
from jobportal.models.application import Application, ApplicationResponse, ApplicationStatus
from jobportal.models.employer import CompanyRole, Employer
from jobportal.models.job import Job, JobFormField, JobStatus
from jobportal.models.user import User

logger = logging.getLogger(__name__)


def get_employer_by_user_id(db: Session, user_id: uuid.UUID) -> Optional[Employer]:
    return db.query(Employer).filter(Employer.user_id == user_id).first()


def get_employer(db: Session, employer_id: uuid.UUID) -> Employer:
    employer = (
        db.query(Employer)
        .options(selectinload(Employer.user), selectinload(Employer.company))
        .filter(Employer.id == employer_id)
        .first()
    )
    if not employer:
        raise NotFound("Employer profile not found")
    return employer


def create_employer_profile(db: Session, user: User, job_title: Optional[str] = None,
                            department: Optional[str] = None,
                            company_role: CompanyRole = CompanyRole.RECRUITER) -> Employer:
    if not user.has_basic_details:
        raise PreconditionFailed("Please complete basic details first", step="basic_details")
    if get_employer_by_user_id(db, user.id):
        raise Conflict("Employer profile already exists")

    employer = Employer(
        user_id=user.id,
        job_title=job_title,
        department=department,
        company_role=company_role,
    )
    db.add(employer)
    db.commit()

    logger.info("Employer profile created: %s", employer.id)
    return get_employer(db, employer.id)


def update_employer(db: Session, employer_id: uuid.UUID, **kwargs) -> Employer:
    employer = get_employer(db, employer_id)
    for key, value in kwargs.items():
        setattr(employer, key, value)
    db.commit()
    return get_employer(db, employer.id)


def get_employer_stats(db: Session, employer_id: uuid.UUID) -> dict:
    employer = get_employer(db, employer_id)

    total_jobs = db.query(func.count(Job.id)).filter(Job.employer_id == employer.id).scalar()
    active_jobs = db.query(func.count(Job.id)).filter(
        Job.employer_id == employer.id,
        Job.status == JobStatus.ACTIVE
    ).scalar()

    applications = db.query(func.count(Application.id)).select_from(Application).join(Job, Application.job_id == Job.id)
    total_applications = applications.filter(Job.employer_id == employer.id).scalar()
    pending_applications = applications.filter(
        Job.employer_id == employer.id,
        Application.status == ApplicationStatus.PENDING
    ).scalar()

    return {
        "total_jobs": total_jobs,
        "active_jobs": active_jobs,
        "total_applications": total_applications,
        "pending_applications": pending_applications,
        "has_company": employer.company_id is not None,
    }


def delete_employer_account(db: Session, user: User) -> None:
    """Hard delete the employer's whole subtree in one transaction.

    Order: answers, applications, form fields, jobs, employer, user. The
    company itself survives; other members keep using it.
    """
    employer = get_employer_by_user_id(db, user.id)
    try:
        if employer:
            job_ids = db.query(Job.id).filter(Job.employer_id == employer.id).scalar_subquery()
            application_ids = db.query(Application.id).filter(Application.job_id.in_(job_ids)).scalar_subquery()

            db.query(ApplicationResponse).filter(
                ApplicationResponse.application_id.in_(application_ids)
            ).delete(synchronize_session=False)
            db.query(Application).filter(Application.job_id.in_(job_ids)).delete(synchronize_session=False)
            db.query(JobFormField).filter(JobFormField.job_id.in_(job_ids)).delete(synchronize_session=False)
            db.query(Job).filter(Job.employer_id == employer.id).delete(synchronize_session=False)
            db.query(Employer).filter(Employer.id == employer.id).delete(synchronize_session=False)

        db.query(User).filter(User.id == user.id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Employer account deleted: user %s", user.id)
