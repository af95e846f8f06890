# jobportal/routes/application_routes.py
import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobportal.crud import application_crud
from jobportal.database import get_db
from jobportal.models.application import ApplicationStatus
from jobportal.schema.application_schema import ApplicationDetail
from jobportal.schema.common_schema import Envelope, Page, envelope
from jobportal.utils.security import JobSeekerActor, require_job_seeker_profile

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("/my-history", response_model=Envelope[Page[ApplicationDetail]])
def my_history(
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    result = application_crud.list_my_applications(db, actor.job_seeker_id, status_filter, page, limit)
    return envelope(result, "Application history fetched successfully")


@router.get("/my-stats", response_model=Envelope[dict])
def my_stats(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    """Totals by status, last 30 days, top companies and roles"""
    return envelope(application_crud.get_my_stats(db, actor.job_seeker_id), "Application stats fetched successfully")


@router.get("/my-applications/status/{status}", response_model=Envelope[List[ApplicationDetail]])
def by_status(
    status: str,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    applications = application_crud.get_by_status(db, actor.job_seeker_id, status)
    return envelope(applications, f"Found {len(applications)} applications")


@router.get("/my-applications/date-range", response_model=Envelope[List[ApplicationDetail]])
def by_date_range(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    """Both bounds are required; the end day is included"""
    applications = application_crud.get_by_date_range(db, actor.job_seeker_id, start_date, end_date)
    return envelope(applications, f"Found {len(applications)} applications")


@router.get("/details/{application_id}", response_model=Envelope[ApplicationDetail])
def details(
    application_id: uuid.UUID,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    application = application_crud.get_my_application(db, application_id, actor.job_seeker_id)
    return envelope(application, "Application fetched successfully")


@router.put("/{application_id}/withdraw", response_model=Envelope[ApplicationDetail])
def withdraw(
    application_id: uuid.UUID,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    application = application_crud.withdraw_application(db, application_id, actor.job_seeker_id)
    return envelope(application, "Application withdrawn successfully")
