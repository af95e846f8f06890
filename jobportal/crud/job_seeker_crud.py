# jobportal/crud/job_seeker_crud.py
import logging
import uuid
from typing import List, Optional, Type

from sqlalchemy.orm import Session, selectinload

from jobportal.exceptions import Conflict, InvalidInput, NotFound, PreconditionFailed
from jobportal.models.company import Company
from jobportal.models.job_seeker import Education, Experience, JobSeeker, Preferences, Project
from jobportal.models.user import User

logger = logging.getLogger(__name__)

# Profile sections owned by a seeker, with the label used in errors
SECTION_LABELS = {
    Education: "Education",
    Experience: "Experience",
    Project: "Project",
}

SECTION_ORDER = {
    Education: Education.start_date.desc(),
    Experience: Experience.start_date.desc(),
    Project: Project.created_at.desc(),
}


# ===== PROFILE =====

def create_profile(db: Session, user: User, **profile_data) -> JobSeeker:
    if not user.has_basic_details:
        raise PreconditionFailed("Please complete basic details first", step="basic_details")
    if user.job_seeker is not None:
        raise Conflict("Job seeker profile already exists")

    seeker = JobSeeker(user_id=user.id, **profile_data)
    db.add(seeker)
    db.commit()
    db.refresh(seeker)

    logger.info("Job seeker profile created: %s", seeker.id)
    return seeker


def get_profile(db: Session, seeker_id: uuid.UUID) -> JobSeeker:
    seeker = (
        db.query(JobSeeker)
        .options(
            selectinload(JobSeeker.user),
            selectinload(JobSeeker.educations),
            selectinload(JobSeeker.experiences),
            selectinload(JobSeeker.projects),
            selectinload(JobSeeker.preferences),
        )
        .filter(JobSeeker.id == seeker_id)
        .first()
    )
    if not seeker:
        raise NotFound("Job seeker profile not found")
    return seeker


def update_profile(db: Session, seeker_id: uuid.UUID, **kwargs) -> JobSeeker:
    seeker = get_profile(db, seeker_id)
    for key, value in kwargs.items():
        setattr(seeker, key, value)
    db.commit()
    db.refresh(seeker)
    return seeker


# ===== EDUCATION / EXPERIENCE / PROJECTS =====

def get_owned_entry(db: Session, model: Type, entry_id: uuid.UUID, seeker_id: uuid.UUID):
    """Fetch a section entry only if it belongs to the seeker; otherwise 404"""
    entry = db.query(model).filter(model.id == entry_id, model.seeker_id == seeker_id).first()
    if not entry:
        raise NotFound(f"{SECTION_LABELS[model]} not found")
    return entry


def list_entries(db: Session, model: Type, seeker_id: uuid.UUID) -> List:
    return db.query(model).filter(model.seeker_id == seeker_id).order_by(SECTION_ORDER[model]).all()


def create_entry(db: Session, model: Type, seeker_id: uuid.UUID, **data):
    entry = model(seeker_id=seeker_id, **data)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def update_entry(db: Session, model: Type, entry_id: uuid.UUID, seeker_id: uuid.UUID, **kwargs):
    entry = get_owned_entry(db, model, entry_id, seeker_id)
    for key, value in kwargs.items():
        setattr(entry, key, value)

    if model is Experience and entry.is_current:
        entry.end_date = None

    if entry.start_date and entry.end_date and entry.end_date < entry.start_date:
        db.rollback()
        raise InvalidInput("end_date must be on or after start_date")

    db.commit()
    db.refresh(entry)
    return entry


def delete_entry(db: Session, model: Type, entry_id: uuid.UUID, seeker_id: uuid.UUID) -> None:
    entry = get_owned_entry(db, model, entry_id, seeker_id)
    db.delete(entry)
    db.commit()


# ===== PREFERENCES =====

def get_preferences(db: Session, seeker_id: uuid.UUID) -> Optional[Preferences]:
    return db.query(Preferences).filter(Preferences.seeker_id == seeker_id).first()


def upsert_preferences(db: Session, seeker_id: uuid.UUID, **data) -> Preferences:
    preferences = get_preferences(db, seeker_id)
    if preferences is None:
        preferences = Preferences(seeker_id=seeker_id, **data)
        db.add(preferences)
    else:
        for key, value in data.items():
            setattr(preferences, key, value)

    db.commit()
    db.refresh(preferences)
    return preferences


# ===== COMPANIES =====

def list_active_companies(db: Session) -> List[Company]:
    return db.query(Company).filter(Company.is_active == True).order_by(Company.name).all()
