# jobportal/seed_data.py
"""
Seed database with demo data
Run: python -m jobportal.seed_data

Creates one job seeker with a full profile, one employer who owns a company,
two active jobs with their default form fields plus a few custom ones, and
one application per job. Running it twice is a no-op.
"""
import logging
from datetime import date

from sqlalchemy.orm import Session

from jobportal import config
from jobportal.crud import application_crud, company_crud, job_crud, job_seeker_crud, user_crud
from jobportal.crud.employer_crud import create_employer_profile
from jobportal.database import Base, SessionLocal, engine
from jobportal import models  # noqa: F401
from jobportal.models.application import ApplicationStatus
from jobportal.models.company import CompanySize
from jobportal.models.job import FieldType, JobRole, JobType
from jobportal.models.job_seeker import Education, Experience, Project
from jobportal.models.user import UserRole
from jobportal.schema.application_schema import AnswerInput
from jobportal.schema.job_schema import FormFieldInput

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
SEEKER_EMAIL = "alice@example.com"
EMPLOYER_EMAIL = "emma@example.com"

JOBS = [
    {
        "title": "Full-Stack Engineer",
        "role": JobRole.FULLSTACK_DEVELOPER,
        "description": "Build features across the stack (API, DB, UI).",
        "requirements": "3+ years with TypeScript/React/Node",
        "location": "Remote",
        "job_type": JobType.FULL_TIME,
        "salary_min": 1500000,
        "salary_max": 2400000,
        "custom_fields": [
            FormFieldInput(label="Expected CTC (INR)", field_type=FieldType.NUMBER),
            FormFieldInput(label="Why should we hire you?", field_type=FieldType.TEXTAREA),
        ],
    },
    {
        "title": "Data Analyst Intern",
        "role": JobRole.DATA_ANALYST,
        "description": "Assist with dashboards, ETL, and ad-hoc analyses.",
        "requirements": "SQL and Python (basics)",
        "location": "Bengaluru",
        "job_type": JobType.INTERNSHIP,
        "salary_min": 20000,
        "salary_max": 40000,
        "custom_fields": [
            FormFieldInput(label="Portfolio link", field_type=FieldType.TEXT, is_required=False),
            FormFieldInput(label="Available from", field_type=FieldType.DATE),
        ],
    },
]

# Sample answers keyed by field type
ANSWERS = {
    FieldType.TEXT: "Alice Applicant",
    FieldType.EMAIL: SEEKER_EMAIL,
    FieldType.PHONE: "5550100000",
    FieldType.RESUME_URL: "https://files.example.com/resumes/alice.pdf",
    FieldType.YEARS_OF_EXPERIENCE: "3",
    FieldType.NUMBER: "1800000",
    FieldType.TEXTAREA: "Full-stack engineer with strong TypeScript and DB skills.",
    FieldType.DATE: "2026-11-01",
}


def _seed_job_seeker(db: Session):
    user = user_crud.create_user(db, "Alice Applicant", SEEKER_EMAIL, DEMO_PASSWORD, UserRole.JOB_SEEKER)
    user_crud.update_basic_details(db, user, name="Alice Applicant", phone="5550100000", location="Bengaluru, IN")

    seeker = job_seeker_crud.create_profile(
        db, user,
        resume="https://files.example.com/resumes/alice.pdf",
        linkedin="https://linkedin.com/in/alice",
        github="https://github.com/alice",
        skills=["TypeScript", "Node.js", "PostgreSQL", "React", "Python"],
    )

    job_seeker_crud.create_entry(
        db, Education, seeker.id,
        institution="IIT Madras",
        degree="B.Tech",
        field_of_study="Computer Science",
        start_date=date(2018, 8, 1),
        end_date=date(2022, 5, 15),
        grade="8.9 CGPA",
        description="Focused on distributed systems and databases.",
    )
    job_seeker_crud.create_entry(
        db, Experience, seeker.id,
        company="StartupX",
        position="Backend Developer",
        location="Remote",
        start_date=date(2022, 6, 1),
        is_current=True,
        description="Built APIs and background jobs with Node.js and PostgreSQL.",
    )
    job_seeker_crud.create_entry(
        db, Project, seeker.id,
        title="JobMatch",
        description="Job matching app with recommendation logic.",
        technologies=["Next.js", "PostgreSQL"],
        start_date=date(2023, 1, 1),
        is_active=True,
    )
    job_seeker_crud.upsert_preferences(
        db, seeker.id,
        preferred_roles=[JobRole.FULLSTACK_DEVELOPER.value, JobRole.BACKEND_DEVELOPER.value],
        preferred_job_types=[JobType.FULL_TIME.value, JobType.CONTRACT.value],
        preferred_locations=["Bengaluru", "Remote"],
        salary_expectation_min=1200000,
        salary_expectation_max=2000000,
        remote_work=True,
        willing_to_relocate=True,
    )
    return seeker


def _seed_employer(db: Session):
    user = user_crud.create_user(db, "Emma Employer", EMPLOYER_EMAIL, DEMO_PASSWORD, UserRole.EMPLOYER)
    user_crud.update_basic_details(db, user, name="Emma Employer", phone="5550200000", location="Mumbai, IN")

    employer = create_employer_profile(db, user, job_title="Head of Talent", department="People")
    company = company_crud.create_company(
        db, employer,
        name="Acme Corp",
        industry="Software",
        description="Acme builds developer tooling for growing teams.",
        location="Mumbai, IN",
        website="https://acme.example.com",
        size=CompanySize.MEDIUM_51_200,
        founded_year=2012,
    )
    return employer, company


def seed_database(db: Session) -> dict:
    """Insert the demo dataset unless it is already there"""
    if user_crud.get_user_by_email(db, SEEKER_EMAIL):
        logger.info("Demo data already present, skipping")
        return {"created": False}

    seeker = _seed_job_seeker(db)
    employer, company = _seed_employer(db)

    jobs = []
    for template in JOBS:
        job_data = {key: value for key, value in template.items() if key != "custom_fields"}
        job = job_crud.create_job(db, employer_id=employer.id, company_id=company.id, **job_data)
        job_crud.replace_form(db, job.id, employer.id, template["custom_fields"])
        jobs.append(job)

    applications = []
    for job in jobs:
        answers = [
            AnswerInput(field_id=field.id, answer=ANSWERS.get(field.field_type, "N/A"))
            for field in job_crud.get_form(db, job.id)
        ]
        applications.append(application_crud.apply_to_job(db, job.id, seeker.id, answers))

    # Second application is already under review
    application_crud.update_application_status(
        db, jobs[1].id, applications[1].id, employer.id, ApplicationStatus.REVIEWING
    )

    logger.info("Seeded %d jobs and %d applications", len(jobs), len(applications))
    return {
        "created": True,
        "job_seeker_id": seeker.id,
        "employer_id": employer.id,
        "company_id": company.id,
        "job_ids": [job.id for job in jobs],
        "application_ids": [application.id for application in applications],
    }


if __name__ == "__main__":
    config.configure_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        summary = seed_database(db)
        if summary["created"]:
            logger.info("Demo accounts: %s / %s (password: %s)", SEEKER_EMAIL, EMPLOYER_EMAIL, DEMO_PASSWORD)
    finally:
        db.close()
