# jobportal/crud/profile_crud.py
"""
Onboarding progress per role.

Steps are evaluated in order; the first unfinished one is the next step and
every step weighs the same in the completion percentage. Nothing is locked
once a user is complete, so the status is always recomputed from live data.
"""
from typing import Dict

from jobportal.models.user import User
from jobportal.utils.analytics import percent

COMPLETE = "complete"

JOB_SEEKER_STEPS = (
    "basic_details",
    "job_seeker_profile",
    "education",
    "experience",
    "projects",
    "preferences",
)

EMPLOYER_STEPS = (
    "basic_details",
    "employer_profile",
    "company_selection",
)


def summarize_steps(steps: Dict[str, bool]) -> dict:
    completed = sum(1 for done in steps.values() if done)
    next_step = next((name for name, done in steps.items() if not done), COMPLETE)

    return {
        "steps": steps,
        "next_step": next_step,
        "completed_steps": completed,
        "total_steps": len(steps),
        "completion_percentage": percent(completed, len(steps)),
        "is_complete": next_step == COMPLETE,
    }


def job_seeker_steps(user: User) -> Dict[str, bool]:
    seeker = user.job_seeker
    done = {
        "basic_details": user.has_basic_details,
        "job_seeker_profile": bool(seeker and seeker.skills),
        "education": bool(seeker and seeker.educations),
        "experience": bool(seeker and seeker.experiences),
        "projects": bool(seeker and seeker.projects),
        "preferences": bool(seeker and seeker.preferences),
    }
    return {step: done[step] for step in JOB_SEEKER_STEPS}


def employer_steps(user: User) -> Dict[str, bool]:
    employer = user.employer
    done = {
        "basic_details": user.has_basic_details,
        "employer_profile": employer is not None,
        "company_selection": bool(employer and employer.company_id),
    }
    return {step: done[step] for step in EMPLOYER_STEPS}


def get_job_seeker_status(user: User) -> dict:
    return summarize_steps(job_seeker_steps(user))


def get_employer_status(user: User) -> dict:
    return summarize_steps(employer_steps(user))
