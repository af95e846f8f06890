# jobportal/routes/employer_routes.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from jobportal.crud import employer_crud, profile_crud, user_crud
from jobportal.database import get_db
from jobportal.schema.common_schema import Envelope, envelope
from jobportal.schema.employer_schema import (
    EmployerProfileCreate,
    EmployerProfileUpdate,
    EmployerResponse,
    EmployerSettingsUpdate,
    EmployerStats,
)
from jobportal.schema.user_schema import BasicDetailsUpdate, UserResponse
from jobportal.utils.security import (
    EmployerActor,
    clear_auth_cookie,
    get_current_employer,
    require_employer_profile,
)

router = APIRouter(prefix="/api/employer", tags=["employer"])


# ===== ONBOARDING =====

@router.get("/profile-status", response_model=Envelope[dict])
def get_profile_status(actor: EmployerActor = Depends(get_current_employer)):
    """Onboarding steps: basic details, employer profile, company selection"""
    return envelope(profile_crud.get_employer_status(actor.user), "Profile status fetched successfully")


@router.put("/basic-details", response_model=Envelope[UserResponse])
def update_basic_details(
    data: BasicDetailsUpdate,
    actor: EmployerActor = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    user = user_crud.update_basic_details(db, actor.user, **data.model_dump())
    return envelope(user, "Basic details updated successfully")


@router.post("/profile", response_model=Envelope[EmployerResponse], status_code=status.HTTP_201_CREATED)
def create_profile(
    data: EmployerProfileCreate,
    actor: EmployerActor = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    employer = employer_crud.create_employer_profile(db, actor.user, **data.model_dump())
    return envelope(employer, "Employer profile created successfully")


# ===== PROFILE =====

@router.get("/profile", response_model=Envelope[EmployerResponse])
def get_profile(
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    return envelope(employer_crud.get_employer(db, actor.employer_id), "Employer profile fetched successfully")


@router.put("/profile", response_model=Envelope[EmployerResponse])
def update_profile(
    data: EmployerProfileUpdate,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    employer = employer_crud.update_employer(db, actor.employer_id, **data.model_dump(exclude_unset=True))
    return envelope(employer, "Employer profile updated successfully")


@router.put("/settings", response_model=Envelope[EmployerResponse])
def update_settings(
    data: EmployerSettingsUpdate,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    """Change company role, job title or department"""
    employer = employer_crud.update_employer(
        db, actor.employer_id, **data.model_dump(exclude_unset=True, exclude_none=True)
    )
    return envelope(employer, "Settings updated successfully")


@router.get("/stats", response_model=Envelope[EmployerStats])
def get_stats(
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    return envelope(employer_crud.get_employer_stats(db, actor.employer_id), "Employer stats fetched successfully")


@router.delete("/account", response_model=Envelope[dict])
def delete_account(
    response: Response,
    actor: EmployerActor = Depends(get_current_employer),
    db: Session = Depends(get_db)
):
    """Permanently delete the employer, their jobs and every application to them"""
    employer_crud.delete_employer_account(db, actor.user)
    clear_auth_cookie(response)
    return envelope(message="Account deleted successfully")
