# jobportal/routes/dashboard_routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobportal.crud import dashboard_crud
from jobportal.database import get_db
from jobportal.schema.common_schema import Envelope, envelope
from jobportal.utils.security import EmployerActor, JobSeekerActor, require_company, require_job_seeker_profile

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/jobseeker/dashboard", response_model=Envelope[dict])
def job_seeker_dashboard(
    actor: JobSeekerActor = Depends(require_job_seeker_profile),
    db: Session = Depends(get_db)
):
    data = dashboard_crud.get_job_seeker_dashboard(db, actor.job_seeker_id)
    return envelope(data, "Dashboard data fetched successfully")


@router.get("/employer/dashboard", response_model=Envelope[dict])
def employer_dashboard(
    actor: EmployerActor = Depends(require_company),
    db: Session = Depends(get_db)
):
    data = dashboard_crud.get_employer_dashboard(db, actor.employer_id, actor.company_id)
    return envelope(data, "Dashboard data fetched successfully")
