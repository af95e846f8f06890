# jobportal/crud/dashboard_crud.py
"""
Read-only dashboard aggregates for seekers and employers.

Each view is a fixed batch of independent queries. The batch runs on a
thread pool, every query on its own session bound to the request's engine,
and the results are joined before the response is composed. Any failing
query fails the whole view.
"""
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from jobportal import config
from jobportal.crud.application_crud import status_counts
from jobportal.database import as_utc, make_sessionmaker
from jobportal.models.application import Application, ApplicationStatus
from jobportal.models.company import Company
from jobportal.models.job import Job, JobStatus
from jobportal.models.job_seeker import JobSeeker
from jobportal.utils.analytics import (
    last_month_keys,
    month_key,
    month_start,
    percent,
    percentage_change,
    round_half_up,
    time_ago,
    top_skills,
    trend,
)

logger = logging.getLogger(__name__)

Query = Callable[[Session], Any]

FUNNEL_STAGES = (
    ("Applied", None),
    ("Reviewing", ApplicationStatus.REVIEWING),
    ("Shortlisted", ApplicationStatus.SHORTLISTED),
    ("Interviewed", ApplicationStatus.INTERVIEWED),
    ("Accepted", ApplicationStatus.ACCEPTED),
)

TREND_MONTHS = 6


def run_parallel(db: Session, queries: Dict[str, Query]) -> Dict[str, Any]:
    """Run independent read queries concurrently and collect their results by name"""
    factory = make_sessionmaker(db.get_bind())

    def run(query: Query):
        with factory() as session:
            return query(session)

    workers = max(1, min(config.DASHBOARD_MAX_WORKERS, len(queries)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {name: pool.submit(run, query) for name, query in queries.items()}
        return {name: future.result() for name, future in futures.items()}


def _day_start(now: datetime) -> datetime:
    return datetime(now.year, now.month, now.day, tzinfo=timezone.utc)


def _count_by_month(values, keys: List[str]) -> List[dict]:
    buckets = {key: 0 for key in keys}
    for value in values:
        key = month_key(value)
        if key in buckets:
            buckets[key] += 1
    return [{"month": key, "count": buckets[key]} for key in sorted(buckets)]


# ===== JOB SEEKER DASHBOARD =====

def _seeker_top_roles(seeker_id: uuid.UUID) -> Query:
    def query(session: Session) -> List[dict]:
        mine = (
            session.query(Job.role, func.count(Application.id), func.sum(Job.no_of_openings))
            .select_from(Application)
            .join(Job, Application.job_id == Job.id)
            .filter(Application.seeker_id == seeker_id)
            .group_by(Job.role)
            .order_by(func.count(Application.id).desc())
            .limit(5)
            .all()
        )
        roles = [role for role, _, _ in mine]
        applicants = dict(
            session.query(Job.role, func.count(Application.id))
            .select_from(Application)
            .join(Job, Application.job_id == Job.id)
            .filter(Job.role.in_(roles))
            .group_by(Job.role)
            .all()
        ) if roles else {}

        result = []
        for role, my_count, openings in mine:
            openings = int(openings or 0)
            total_applicants = applicants.get(role, 0)
            result.append({
                "role": role.value,
                "my_applications": my_count,
                "total_openings": openings,
                "total_applicants": total_applicants,
                "competition_ratio": round(total_applicants / openings, 2) if openings else 0,
            })
        return result

    return query


def _today_job_postings(session: Session) -> dict:
    today = _day_start(datetime.now(timezone.utc))
    yesterday = today - timedelta(days=1)
    tomorrow = today + timedelta(days=1)

    def created_between(start, end) -> int:
        return session.query(func.count(Job.id)).filter(
            Job.created_at >= start,
            Job.created_at < end
        ).scalar()

    today_count = created_between(today, tomorrow)
    yesterday_count = created_between(yesterday, today)
    return {
        "today": today_count,
        "yesterday": yesterday_count,
        "percentage_change": percentage_change(today_count, yesterday_count),
        "trend": trend(today_count, yesterday_count),
    }


def _top_skills(session: Session) -> List[dict]:
    rows = session.query(Job.description, Job.requirements).filter(Job.status == JobStatus.ACTIVE).all()
    return top_skills(f"{description or ''} {requirements or ''}" for description, requirements in rows)


def _top_companies(active_only: bool) -> Query:
    def query(session: Session) -> List[dict]:
        q = (
            session.query(Company.id, Company.name, Company.industry, func.count(Job.id))
            .select_from(Company)
            .join(Job, Job.company_id == Company.id)
            .filter(Company.is_active == True)
        )
        if active_only:
            q = q.filter(Job.status == JobStatus.ACTIVE)
        rows = (
            q.group_by(Company.id, Company.name, Company.industry)
            .order_by(func.count(Job.id).desc(), Company.name)
            .limit(5)
            .all()
        )
        return [
            {"company_id": str(company_id), "name": name, "industry": industry, "job_count": count}
            for company_id, name, industry, count in rows
        ]

    return query


def get_job_seeker_dashboard(db: Session, seeker_id: uuid.UUID) -> dict:
    results = run_parallel(db, {
        "application_stats": lambda s: status_counts(s, Application.seeker_id == seeker_id),
        "top_job_roles": _seeker_top_roles(seeker_id),
        "today_job_postings": _today_job_postings,
        "top_skills": _top_skills,
        "top_companies_by_active_jobs": _top_companies(active_only=True),
        "top_companies_by_total_jobs": _top_companies(active_only=False),
    })

    stats = results["application_stats"]
    total = sum(stats.values())
    results["application_stats"] = {"total": total, **stats}
    results["conversion_funnel"] = [
        {"stage": stage, "count": total if status is None else stats[status.value]}
        for stage, status in FUNNEL_STAGES
    ]
    return results


# ===== EMPLOYER DASHBOARD =====

def _employer_filters(employer_id: uuid.UUID, company_id: uuid.UUID) -> tuple:
    return (Job.employer_id == employer_id, Job.company_id == company_id)


def _job_counts(filters: tuple) -> Query:
    def query(session: Session) -> dict:
        total = session.query(func.count(Job.id)).filter(*filters).scalar()
        active = session.query(func.count(Job.id)).filter(*filters, Job.status == JobStatus.ACTIVE).scalar()
        return {"total_jobs": total, "active_jobs": active}

    return query


def _applicants_this_month(filters: tuple) -> Query:
    def query(session: Session) -> int:
        return (
            session.query(func.count(Application.id))
            .select_from(Application)
            .join(Job, Application.job_id == Job.id)
            .filter(*filters, Application.applied_at >= month_start())
            .scalar()
        )

    return query


def _recent_activity(filters: tuple) -> Query:
    def query(session: Session) -> List[dict]:
        rows = (
            session.query(Application)
            .join(Job, Application.job_id == Job.id)
            .options(
                selectinload(Application.job),
                selectinload(Application.seeker).selectinload(JobSeeker.user),
            )
            .filter(*filters)
            .order_by(Application.applied_at.desc())
            .limit(10)
            .all()
        )
        return [
            {
                "id": str(application.id),
                "candidate_name": application.seeker.user.name,
                "candidate_email": application.seeker.user.email,
                "candidate_photo": application.seeker.user.profile_picture,
                "job_title": application.job.title,
                "job_role": application.job.role.value,
                "status": application.status.value,
                "applied_at": as_utc(application.applied_at).isoformat(),
                "time_ago": time_ago(application.applied_at),
            }
            for application in rows
        ]

    return query


def _applications_over_time(filters: tuple) -> Query:
    def query(session: Session) -> List[dict]:
        since = month_start(months_back=TREND_MONTHS - 1)
        rows = (
            session.query(Application.applied_at)
            .select_from(Application)
            .join(Job, Application.job_id == Job.id)
            .filter(*filters, Application.applied_at >= since)
            .all()
        )
        return _count_by_month((applied_at for (applied_at,) in rows), last_month_keys(TREND_MONTHS))

    return query


def _hiring_trends(filters: tuple) -> Query:
    def query(session: Session) -> List[dict]:
        since = month_start(months_back=TREND_MONTHS - 1)
        rows = (
            session.query(Application.updated_at)
            .select_from(Application)
            .join(Job, Application.job_id == Job.id)
            .filter(
                *filters,
                Application.status == ApplicationStatus.ACCEPTED,
                Application.updated_at >= since
            )
            .all()
        )
        return _count_by_month((updated_at for (updated_at,) in rows), last_month_keys(TREND_MONTHS))

    return query


def _employer_top_roles(filters: tuple) -> Query:
    def query(session: Session) -> List[dict]:
        rows = (
            session.query(Job.role, func.count(Application.id))
            .select_from(Application)
            .join(Job, Application.job_id == Job.id)
            .filter(*filters)
            .group_by(Job.role)
            .order_by(func.count(Application.id).desc())
            .limit(10)
            .all()
        )
        return [{"role": role.value, "count": count} for role, count in rows]

    return query


def _top_performing_jobs(filters: tuple) -> Query:
    def query(session: Session) -> List[dict]:
        now = datetime.now(timezone.utc)
        rows = (
            session.query(Job.id, Job.title, Job.role, Job.created_at, func.count(Application.id))
            .select_from(Job)
            .outerjoin(Application, Application.job_id == Job.id)
            .filter(*filters)
            .group_by(Job.id, Job.title, Job.role, Job.created_at)
            .order_by(func.count(Application.id).desc(), Job.created_at.desc())
            .limit(5)
            .all()
        )
        return [
            {
                "id": str(job_id),
                "title": title,
                "role": role.value,
                "application_count": count,
                "created_at": as_utc(created_at).isoformat(),
                "days_active": (now - as_utc(created_at)).days,
            }
            for job_id, title, role, created_at, count in rows
        ]

    return query


def monthly_growth(this_month: int, total: int) -> int:
    """Growth of this month's applications against the average earlier month"""
    if total <= this_month:
        return 0
    baseline = (total - this_month) / 5
    return round_half_up((this_month - baseline) / baseline * 100)


def get_employer_dashboard(db: Session, employer_id: uuid.UUID, company_id: uuid.UUID) -> dict:
    filters = _employer_filters(employer_id, company_id)
    results = run_parallel(db, {
        "job_counts": _job_counts(filters),
        "status_counts": lambda s: status_counts(s, *filters),
        "applicants_this_month": _applicants_this_month(filters),
        "recent_activity": _recent_activity(filters),
        "applications_over_time": _applications_over_time(filters),
        "top_job_roles": _employer_top_roles(filters),
        "top_performing_jobs": _top_performing_jobs(filters),
        "hiring_trends": _hiring_trends(filters),
    })

    counts = results["status_counts"]
    total = sum(counts.values())
    total_jobs = results["job_counts"]["total_jobs"]
    shortlisted = counts[ApplicationStatus.SHORTLISTED.value]
    pending = counts[ApplicationStatus.PENDING.value]
    top_roles = results["top_job_roles"]

    return {
        "overview": {
            **results["job_counts"],
            "total_applicants": total,
            "applicants_this_month": results["applicants_this_month"],
            "shortlisted_candidates": shortlisted,
            "pending_applications": pending,
            "conversion_rate": percent(shortlisted, total),
        },
        "application_stats": {
            "total_applications": total,
            "status_distribution": [
                {"status": status, "count": count, "percentage": percent(count, total)}
                for status, count in counts.items()
            ],
        },
        "recent_activity": results["recent_activity"],
        "analytics": {
            "applications_over_time": results["applications_over_time"],
            "top_job_roles": top_roles,
            "top_performing_jobs": results["top_performing_jobs"],
            "hiring_trends": results["hiring_trends"],
        },
        "insights": {
            "average_applications_per_job": round_half_up(total / total_jobs) if total_jobs else 0,
            "monthly_growth": monthly_growth(results["applicants_this_month"], total),
            "most_popular_role": top_roles[0]["role"] if top_roles else None,
            "response_rate": percent(total - pending, total),
        },
    }
