# jobportal/routes/company_routes.py
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobportal.crud import company_crud, employer_crud
from jobportal.database import get_db
from jobportal.schema.common_schema import Envelope, envelope
from jobportal.schema.company_schema import (
    CompanyCreate,
    CompanyJobSummary,
    CompanyPublicResponse,
    CompanyResponse,
    CompanySummary,
    CompanyUpdate,
)
from jobportal.utils.security import EmployerActor, require_employer_profile

router = APIRouter(prefix="/api/employer/companies", tags=["companies"])


@router.get("/search", response_model=Envelope[List[CompanySummary]])
def search_companies(
    q: Optional[str] = Query(None),
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    """Active companies whose name, website or industry contains the query"""
    companies = company_crud.search_companies(db, q)
    return envelope(companies, f"Found {len(companies)} companies")


@router.get("/public/{company_id}", response_model=Envelope[CompanyPublicResponse])
def get_public_company(company_id: uuid.UUID, db: Session = Depends(get_db)):
    company, recent_jobs = company_crud.get_public_company(db, company_id)
    data = CompanyPublicResponse.model_validate(company)
    data.recent_jobs = [CompanyJobSummary.model_validate(job) for job in recent_jobs]
    return envelope(data, "Company fetched successfully")


@router.get("/my-company", response_model=Envelope[dict])
def get_my_company(
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    employer = employer_crud.get_employer(db, actor.employer_id)
    company, members = company_crud.get_my_company(db, employer)
    return envelope(
        {
            "company": CompanyResponse.model_validate(company).model_dump(mode="json"),
            "company_role": employer.company_role.value,
            "joined_at": employer.joined_at.isoformat() if employer.joined_at else None,
            "member_count": members,
        },
        "Company fetched successfully"
    )


@router.post("/", response_model=Envelope[CompanyResponse], status_code=status.HTTP_201_CREATED)
def create_company(
    data: CompanyCreate,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    """Create a company; the creator becomes its ADMIN"""
    employer = employer_crud.get_employer(db, actor.employer_id)
    company = company_crud.create_company(db, employer, **data.model_dump())
    return envelope(company, "Company created successfully")


@router.post("/{company_id}/select", response_model=Envelope[CompanyResponse])
def select_company(
    company_id: uuid.UUID,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    employer = employer_crud.get_employer(db, actor.employer_id)
    company = company_crud.select_company(db, employer, company_id)
    return envelope(company, "Company selected successfully")


@router.put("/", response_model=Envelope[CompanyResponse])
def update_my_company(
    data: CompanyUpdate,
    actor: EmployerActor = Depends(require_employer_profile),
    db: Session = Depends(get_db)
):
    """Only ADMIN and HR_MANAGER members may edit the company"""
    employer = employer_crud.get_employer(db, actor.employer_id)
    company = company_crud.update_my_company(db, employer, **data.model_dump(exclude_unset=True, exclude_none=True))
    return envelope(company, "Company updated successfully")
