# jobportal/routes/job_seeker_routes.py
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobportal.crud import job_seeker_crud, profile_crud, user_crud
from jobportal.database import get_db
from jobportal.models.job_seeker import Education, Experience, Project
from jobportal.schema.common_schema import Envelope, envelope
from jobportal.schema.company_schema import CompanySummary
from jobportal.schema.job_seeker_schema import (
    EducationCreate,
    EducationResponse,
    EducationUpdate,
    ExperienceCreate,
    ExperienceResponse,
    ExperienceUpdate,
    JobSeekerProfileCreate,
    JobSeekerProfileResponse,
    JobSeekerProfileUpdate,
    JobSeekerResponse,
    PreferencesResponse,
    PreferencesUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from jobportal.schema.user_schema import BasicDetailsUpdate, UserResponse
from jobportal.utils.security import JobSeekerActor, get_current_job_seeker, require_job_seeker_profile

router = APIRouter(prefix="/api/jobseeker", tags=["jobseeker"])


# ===== ONBOARDING =====

@router.get("/profile-status", response_model=Envelope[dict])
def get_profile_status(actor: JobSeekerActor = Depends(get_current_job_seeker)):
    """Onboarding steps: basic details, job seeker profile"""
    return envelope(profile_crud.get_job_seeker_status(actor.user), "Profile status fetched successfully")


@router.put("/basic-details", response_model=Envelope[UserResponse])
def update_basic_details(
    data: BasicDetailsUpdate,
    actor: JobSeekerActor = Depends(get_current_job_seeker),
    db: Session = Depends(get_db)
):
    user = user_crud.update_basic_details(db, actor.user, **data.model_dump())
    return envelope(user, "Basic details updated successfully")


@router.post("/profile", response_model=Envelope[JobSeekerResponse], status_code=status.HTTP_201_CREATED)
def create_profile(
    data: JobSeekerProfileCreate,
    actor: JobSeekerActor = Depends(get_current_job_seeker),
    db: Session = Depends(get_db)
):
    seeker = job_seeker_crud.create_profile(db, actor.user, **data.model_dump())
    return envelope(seeker, "Job seeker profile created successfully")


# ===== PROFILE =====

@router.get("/profile", response_model=Envelope[JobSeekerProfileResponse])
def get_profile(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    """Full profile with education, experience, projects and preferences"""
    return envelope(job_seeker_crud.get_profile(db, actor.job_seeker_id), "Profile fetched successfully")


@router.put("/profile", response_model=Envelope[JobSeekerResponse])
def update_profile(
    data: JobSeekerProfileUpdate,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    seeker = job_seeker_crud.update_profile(db, actor.job_seeker_id, **data.model_dump(exclude_unset=True))
    return envelope(seeker, "Profile updated successfully")


# ===== EDUCATION =====

@router.get("/education", response_model=Envelope[List[EducationResponse]])
def list_education(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    return envelope(job_seeker_crud.list_entries(db, Education, actor.job_seeker_id), "Education fetched successfully")


@router.post("/education", response_model=Envelope[EducationResponse], status_code=status.HTTP_201_CREATED)
def add_education(
    data: EducationCreate,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    entry = job_seeker_crud.create_entry(db, Education, actor.job_seeker_id, **data.model_dump())
    return envelope(entry, "Education added successfully")


@router.put("/education/{entry_id}", response_model=Envelope[EducationResponse])
def update_education(
    entry_id: uuid.UUID,
    data: EducationUpdate,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    entry = job_seeker_crud.update_entry(
        db, Education, entry_id, actor.job_seeker_id, **data.model_dump(exclude_unset=True)
    )
    return envelope(entry, "Education updated successfully")


@router.delete("/education/{entry_id}", response_model=Envelope[dict])
def delete_education(
    entry_id: uuid.UUID,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    job_seeker_crud.delete_entry(db, Education, entry_id, actor.job_seeker_id)
    return envelope(message="Education deleted successfully")


# ===== EXPERIENCE =====

@router.get("/experience", response_model=Envelope[List[ExperienceResponse]])
def list_experience(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    return envelope(job_seeker_crud.list_entries(db, Experience, actor.job_seeker_id), "Experience fetched successfully")


@router.post("/experience", response_model=Envelope[ExperienceResponse], status_code=status.HTTP_201_CREATED)
def add_experience(
    data: ExperienceCreate,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    entry = job_seeker_crud.create_entry(db, Experience, actor.job_seeker_id, **data.model_dump())
    return envelope(entry, "Experience added successfully")


@router.put("/experience/{entry_id}", response_model=Envelope[ExperienceResponse])
def update_experience(
    entry_id: uuid.UUID,
    data: ExperienceUpdate,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    entry = job_seeker_crud.update_entry(
        db, Experience, entry_id, actor.job_seeker_id, **data.model_dump(exclude_unset=True)
    )
    return envelope(entry, "Experience updated successfully")


@router.delete("/experience/{entry_id}", response_model=Envelope[dict])
def delete_experience(
    entry_id: uuid.UUID,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    job_seeker_crud.delete_entry(db, Experience, entry_id, actor.job_seeker_id)
    return envelope(message="Experience deleted successfully")


# ===== PROJECTS =====

@router.get("/projects", response_model=Envelope[List[ProjectResponse]])
def list_projects(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    return envelope(job_seeker_crud.list_entries(db, Project, actor.job_seeker_id), "Projects fetched successfully")


@router.post("/projects", response_model=Envelope[ProjectResponse], status_code=status.HTTP_201_CREATED)
def add_project(
    data: ProjectCreate,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    entry = job_seeker_crud.create_entry(db, Project, actor.job_seeker_id, **data.model_dump())
    return envelope(entry, "Project added successfully")


@router.put("/projects/{entry_id}", response_model=Envelope[ProjectResponse])
def update_project(
    entry_id: uuid.UUID,
    data: ProjectUpdate,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    entry = job_seeker_crud.update_entry(
        db, Project, entry_id, actor.job_seeker_id, **data.model_dump(exclude_unset=True)
    )
    return envelope(entry, "Project updated successfully")


@router.delete("/projects/{entry_id}", response_model=Envelope[dict])
def delete_project(
    entry_id: uuid.UUID,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    job_seeker_crud.delete_entry(db, Project, entry_id, actor.job_seeker_id)
    return envelope(message="Project deleted successfully")


# ===== PREFERENCES =====

@router.put("/preferences", response_model=Envelope[PreferencesResponse])
def update_preferences(
    data: PreferencesUpdate,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    # JSON columns store plain strings, not enum members
    preferences = job_seeker_crud.upsert_preferences(db, actor.job_seeker_id, **data.model_dump(mode="json"))
    return envelope(preferences, "Preferences saved successfully")


@router.get("/preferences", response_model=Envelope[Optional[PreferencesResponse]])
def get_preferences(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    preferences = job_seeker_crud.get_preferences(db, actor.job_seeker_id)
    message = "Preferences fetched successfully" if preferences else "No preferences set yet"
    return envelope(preferences, message)


# ===== COMPANIES =====

@router.get("/companies", response_model=Envelope[List[CompanySummary]])
def list_companies(
    actor: JobSeekerActor = Depends(get_current_job_seeker),
    db: Session = Depends(get_db)
):
    return envelope(job_seeker_crud.list_active_companies(db), "Companies fetched successfully")
