# jobportal/crud/company_crud.py
import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal import config
from jobportal.crud.common import LIKE_ESCAPE, contains_pattern
from jobportal.database import utcnow
from jobportal.exceptions import Conflict, Forbidden, InvalidInput, NotFound
from jobportal.models.company import Company
from jobportal.models.employer import COMPANY_EDITOR_ROLES, CompanyRole, Employer
from jobportal.models.job import Job, JobStatus

logger = logging.getLogger(__name__)

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10
PUBLIC_RECENT_JOBS = 5


def find_by_name(db: Session, name: str, exclude_id: Optional[uuid.UUID] = None) -> Optional[Company]:
    """Case-insensitive, whitespace-trimmed name lookup; active companies come first.

    Names of inactive companies stay reserved, so they are matched too.
    """
    query = db.query(Company).filter(func.lower(func.trim(Company.name)) == name.strip().lower())
    if exclude_id is not None:
        query = query.filter(Company.id != exclude_id)
    return query.order_by(Company.is_active.desc()).first()


def _name_conflict(existing: Company) -> Conflict:
    if not existing.is_active:
        return Conflict("This company name is reserved by an inactive company")
    return Conflict(
        "A company with this name already exists",
        suggestion={
            "id": str(existing.id),
            "name": existing.name,
            "message": "You can select this company instead",
        },
    )


def _check_membership_change(employer: Employer, company_id: Optional[uuid.UUID]) -> None:
    if config.ALLOW_COMPANY_SWITCH or employer.company_id is None:
        return
    if employer.company_id != company_id:
        raise Conflict("You are already associated with a company")


def search_companies(db: Session, query: Optional[str]) -> List[Company]:
    term = (query or "").strip()
    if len(term) < SEARCH_MIN_LENGTH:
        raise InvalidInput(f"Search query must be at least {SEARCH_MIN_LENGTH} characters")

    pattern = contains_pattern(term)
    return (
        db.query(Company)
        .filter(
            Company.is_active == True,
            or_(
                Company.name.ilike(pattern, escape=LIKE_ESCAPE),
                Company.website.ilike(pattern, escape=LIKE_ESCAPE),
                Company.industry.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .order_by(Company.name)
        .limit(SEARCH_LIMIT)
        .all()
    )


def create_company(db: Session, employer: Employer, **company_data) -> Company:
    """Create a company and make the creator its ADMIN in one transaction"""
    _check_membership_change(employer, None)

    company_data["name"] = company_data["name"].strip()
    existing = find_by_name(db, company_data["name"])
    if existing:
        raise _name_conflict(existing)

    company = Company(**company_data)
    db.add(company)
    try:
        db.flush()
        employer.company_id = company.id
        employer.company_role = CompanyRole.ADMIN
        employer.joined_at = utcnow()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("A company with this name already exists")

    db.refresh(company)
    logger.info("Company created: %s by employer %s", company.id, employer.id)
    return company


def select_company(db: Session, employer: Employer, company_id: uuid.UUID) -> Company:
    company = db.query(Company).filter(Company.id == company_id, Company.is_active == True).first()
    if not company:
        raise NotFound("Company not found or inactive")

    _check_membership_change(employer, company.id)

    employer.company_id = company.id
    employer.joined_at = utcnow()
    db.commit()

    logger.info("Employer %s joined company %s", employer.id, company.id)
    return company


def get_my_company(db: Session, employer: Employer) -> Tuple[Company, int]:
    """The employer's company plus its member count"""
    if employer.company_id is None:
        raise NotFound("No company associated with this employer")

    company = db.get(Company, employer.company_id)
    if not company:
        raise NotFound("Company not found")

    members = db.query(func.count(Employer.id)).filter(Employer.company_id == company.id).scalar()
    return company, members


def update_my_company(db: Session, employer: Employer, **kwargs) -> Company:
    if employer.company_id is None:
        raise NotFound("No company associated with this employer")
    if employer.company_role not in COMPANY_EDITOR_ROLES:
        raise Forbidden("Only company admins and HR managers can update company details")

    company = db.get(Company, employer.company_id)
    if not company:
        raise NotFound("Company not found")

    new_name = kwargs.get("name")
    if new_name is not None:
        kwargs["name"] = new_name.strip()
        existing = find_by_name(db, kwargs["name"], exclude_id=company.id)
        if existing:
            raise _name_conflict(existing)

    for key, value in kwargs.items():
        setattr(company, key, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("A company with this name already exists")

    db.refresh(company)
    return company


def get_public_company(db: Session, company_id: uuid.UUID) -> Tuple[Company, List[Job]]:
    company = db.query(Company).filter(Company.id == company_id, Company.is_active == True).first()
    if not company:
        raise NotFound("Company not found")

    recent_jobs = (
        db.query(Job)
        .filter(Job.company_id == company.id, Job.status == JobStatus.ACTIVE)
        .order_by(Job.created_at.desc())
        .limit(PUBLIC_RECENT_JOBS)
        .all()
    )
    return company, recent_jobs
