# jobportal/routes/job_board_routes.py
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.crud import application_crud, job_crud, profile_crud
from jobportal.database import get_db
from jobportal.models.application import Application, ApplicationStatus
from jobportal.models.job import JobRole, JobType
from jobportal.schema.application_schema import ApplicationDetail, ApplyRequest
from jobportal.schema.common_schema import Envelope, Page, envelope
from jobportal.schema.job_schema import JobDetailResponse, JobResponse, to_job_response
from jobportal.utils.security import JobSeekerActor, require_job_seeker_profile

router = APIRouter(prefix="/api/jobseekers", tags=["job board"])


# ===== BROWSE =====

@router.get("/jobs", response_model=Envelope[Page[JobResponse]])
def browse_jobs(
    role: Optional[JobRole] = Query(None),
    job_type: Optional[JobType] = Query(None),
    location: Optional[str] = Query(None),
    salary_min: Optional[int] = Query(None, ge=0),
    salary_max: Optional[int] = Query(None, ge=0),
    company_id: Optional[uuid.UUID] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    result = job_crud.search_jobs(
        db=db,
        role=role,
        job_type=job_type,
        location=location,
        salary_min=salary_min,
        salary_max=salary_max,
        company_id=company_id,
        search=search,
        page=page,
        limit=limit
    )
    applied = job_crud.applied_statuses(db, actor.job_seeker_id, [job.id for job in result["items"]])
    result["items"] = [to_job_response(job, applied.get(job.id)) for job in result["items"]]
    return envelope(result, "Jobs fetched successfully")


@router.get("/jobs/{job_id}", response_model=Envelope[JobDetailResponse])
def get_job(
    job_id: uuid.UUID,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    """Only active jobs are visible here"""
    job = job_crud.get_job(db, job_id, active_only=True)
    applied = job_crud.applied_statuses(db, actor.job_seeker_id, [job.id])
    return envelope(to_job_response(job, applied.get(job.id), detail=True), "Job fetched successfully")


@router.post("/jobs/{job_id}/apply", response_model=Envelope[ApplicationDetail], status_code=status.HTTP_201_CREATED)
def apply(
    job_id: uuid.UUID,
    data: ApplyRequest,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    application = application_crud.apply_to_job(db, job_id, actor.job_seeker_id, data.responses)
    return envelope(application, "Application submitted successfully")


# ===== MY APPLICATIONS =====

@router.get("/applications", response_model=Envelope[Page[ApplicationDetail]])
def list_applications(
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    result = application_crud.list_my_applications(db, actor.job_seeker_id, status_filter, page, limit)
    return envelope(result, "Applications fetched successfully")


@router.get("/applications/{application_id}", response_model=Envelope[ApplicationDetail])
def get_application(
    application_id: uuid.UUID,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    application = application_crud.get_my_application(db, application_id, actor.job_seeker_id)
    return envelope(application, "Application fetched successfully")


@router.patch("/applications/{application_id}/withdraw", response_model=Envelope[ApplicationDetail])
def withdraw(
    application_id: uuid.UUID,
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    application = application_crud.withdraw_application(db, application_id, actor.job_seeker_id)
    return envelope(application, "Application withdrawn successfully")


# ===== INSIGHTS =====

@router.get("/recommendations", response_model=Envelope[List[JobResponse]])
def recommendations(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    """Active jobs matching saved preferences that the seeker has not applied to"""
    jobs = application_crud.recommend_jobs(db, actor.job_seeker_id)
    return envelope([to_job_response(job) for job in jobs], f"Found {len(jobs)} recommended jobs")


@router.get("/stats", response_model=Envelope[dict])
def stats(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    by_status = application_crud.status_counts(db, Application.seeker_id == actor.job_seeker_id)
    data = {
        "total_applications": sum(by_status.values()),
        **{status_name.lower(): count for status_name, count in by_status.items()},
        "profile_completion": profile_crud.get_job_seeker_status(actor.user)["completion_percentage"],
    }
    return envelope(data, "Stats fetched successfully")
