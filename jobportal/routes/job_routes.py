# jobportal/routes/job_routes.py
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.crud import application_crud, job_crud
from jobportal.database import get_db
from jobportal.models.application import ApplicationStatus
from jobportal.models.job import JobRole, JobStatus, JobType
from jobportal.schema.application_schema import ApplicationDetail, ApplicationStatusUpdate, EmployerApplicationView
from jobportal.schema.common_schema import Envelope, Page, envelope
from jobportal.schema.job_schema import (
    FormFieldResponse,
    FormRequest,
    JobCreate,
    JobDetailResponse,
    JobResponse,
    JobStatusUpdate,
    JobUpdate,
    to_job_response,
)
from jobportal.utils.security import (
    Actor,
    EmployerActor,
    JobSeekerActor,
    get_current_actor,
    optional_actor,
    require_company,
    require_employer_profile,
)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


def _seeker_id(actor: Optional[Actor]) -> Optional[uuid.UUID]:
    return actor.job_seeker_id if isinstance(actor, JobSeekerActor) else None


# ===== EMPLOYER: JOB POSTINGS =====

@router.post("/", response_model=Envelope[JobDetailResponse], status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobCreate,
    actor: EmployerActor = Depends(require_company),
    db: Session = Depends(get_db)
):
    """Create a job for the caller's company, seeded with the default form fields"""
    job = job_crud.create_job(db, employer_id=actor.employer_id, company_id=actor.company_id, **data.model_dump())
    job = job_crud.get_job(db, job.id)
    return envelope(to_job_response(job, detail=True), "Job created successfully")


@router.get("/", response_model=Envelope[Page[JobResponse]])
def list_jobs(
    role: Optional[JobRole] = Query(None),
    job_type: Optional[JobType] = Query(None),
    location: Optional[str] = Query(None),
    salary_min: Optional[int] = Query(None, ge=0),
    salary_max: Optional[int] = Query(None, ge=0),
    company_id: Optional[uuid.UUID] = Query(None),
    industry: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: Optional[Actor] = Depends(optional_actor),
    db: Session = Depends(get_db)
):
    """Public listing of active jobs, newest first"""
    result = job_crud.search_jobs(
        db=db,
        role=role,
        job_type=job_type,
        location=location,
        salary_min=salary_min,
        salary_max=salary_max,
        company_id=company_id,
        industry=industry,
        search=search,
        page=page,
        limit=limit
    )
    applied = job_crud.applied_statuses(db, _seeker_id(actor), [job.id for job in result["items"]])
    result["items"] = [to_job_response(job, applied.get(job.id)) for job in result["items"]]
    return envelope(result, "Jobs fetched successfully")


@router.get("/employer", response_model=Envelope[Page[JobResponse]])
def list_my_jobs(
    status_filter: Optional[JobStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    result = job_crud.get_employer_jobs(db, actor.employer_id, status_filter, page, limit)
    counts = job_crud.application_counts(db, [job.id for job in result["items"]])
    result["items"] = [
        to_job_response(job, application_count=counts.get(job.id, 0))
        for job in result["items"]
    ]
    return envelope(result, "Jobs fetched successfully")


@router.get("/{job_id}", response_model=Envelope[JobDetailResponse])
def get_job(
    job_id: uuid.UUID,
    actor: Optional[Actor] = Depends(optional_actor),
    db: Session = Depends(get_db)
):
    job = job_crud.get_job(db, job_id)
    applied = job_crud.applied_statuses(db, _seeker_id(actor), [job.id])
    return envelope(to_job_response(job, applied.get(job.id), detail=True), "Job fetched successfully")


@router.put("/{job_id}", response_model=Envelope[JobResponse])
def update_job(
    job_id: uuid.UUID,
    data: JobUpdate,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    job = job_crud.update_job(db, job_id, actor.employer_id, **data.model_dump(exclude_unset=True))
    return envelope(to_job_response(job), "Job updated successfully")


@router.patch("/{job_id}/status", response_model=Envelope[JobResponse])
def update_job_status(
    job_id: uuid.UUID,
    data: JobStatusUpdate,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    job = job_crud.update_job_status(db, job_id, actor.employer_id, data.status)
    return envelope(to_job_response(job), f"Job status updated to {data.status.value}")


@router.delete("/{job_id}", response_model=Envelope[dict])
def delete_job(
    job_id: uuid.UUID,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    job_crud.delete_job(db, job_id, actor.employer_id)
    return envelope(message="Job deleted successfully")


# ===== EMPLOYER: APPLICATION FORM =====

@router.post("/{job_id}/form", response_model=Envelope[List[FormFieldResponse]])
def create_form(
    job_id: uuid.UUID,
    data: FormRequest,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    """Replace the custom fields of the form; default fields are kept"""
    fields = job_crud.replace_form(db, job_id, actor.employer_id, data.fields)
    return envelope(fields, "Application form saved successfully")


@router.put("/{job_id}/form", response_model=Envelope[List[FormFieldResponse]])
def update_form(
    job_id: uuid.UUID,
    data: FormRequest,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    fields = job_crud.upsert_form(db, job_id, actor.employer_id, data.fields)
    return envelope(fields, "Application form updated successfully")


@router.get("/{job_id}/form", response_model=Envelope[List[FormFieldResponse]])
def get_form(
    job_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    return envelope(job_crud.get_form(db, job_id), "Application form fetched successfully")


@router.delete("/{job_id}/form/field/{field_id}", response_model=Envelope[dict])
def delete_form_field(
    job_id: uuid.UUID,
    field_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db)
):
    """Default fields can never be deleted, whoever asks"""
    employer_id = actor.employer_id if isinstance(actor, EmployerActor) else None
    job_crud.delete_form_field(db, job_id, field_id, employer_id)
    return envelope(message="Form field deleted successfully")


# ===== EMPLOYER: APPLICANTS =====

@router.get("/{job_id}/applications", response_model=Envelope[Page[EmployerApplicationView]])
def list_job_applications(
    job_id: uuid.UUID,
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    result = application_crud.list_job_applications(db, job_id, actor.employer_id, status_filter, page, limit)
    return envelope(result, "Applications fetched successfully")


@router.patch("/{job_id}/applications/{application_id}/status", response_model=Envelope[ApplicationDetail])
def update_application_status(
    job_id: uuid.UUID,
    application_id: uuid.UUID,
    data: ApplicationStatusUpdate,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    application = application_crud.update_application_status(
        db, job_id, application_id, actor.employer_id, data.status
    )
    return envelope(application, f"Application status updated to {data.status.value}")
