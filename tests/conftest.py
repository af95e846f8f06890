"""Shared fixtures and factories for tests."""

import os
import tempfile

# Settings are read at import time, so they must be in place before jobportal loads
_TMP_DIR = tempfile.mkdtemp(prefix="jobportal-tests-")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-min-32-chars-long-for-security")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'import.db')}")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import itertools  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from jobportal.database import Base, get_db, make_engine, make_sessionmaker  # noqa: E402
from jobportal.main import app  # noqa: E402

PASSWORD = "secret123"

_counter = itertools.count(1)


def unique_email(prefix: str) -> str:
    return f"{prefix}{next(_counter)}@example.com"


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def engine(tmp_path):
    """A file-backed SQLite database per test; dashboard queries use several connections"""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_sessionmaker(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ===== FACTORIES =====

@pytest.fixture
def signup(client):
    """Register and log in a user; returns (user payload, auth headers)"""

    def _signup(role: str, name: str = "Test User", email: str = None):
        email = email or unique_email(role.lower())
        response = client.post("/api/auth/signup", json={
            "name": name, "email": email, "password": PASSWORD, "role": role,
        })
        assert response.status_code == 201, response.text

        response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        # Tests authenticate with explicit bearer headers only
        client.cookies.clear()
        data = response.json()["data"]
        return data["user"], auth_headers(data["access_token"])

    return _signup


@pytest.fixture
def fill_basic_details(client):
    def _fill(headers: dict, base: str, name: str = "Test User"):
        response = client.put(f"/api/{base}/basic-details", headers=headers, json={
            "name": name, "phone": "5551234567", "location": "Bengaluru, IN",
        })
        assert response.status_code == 200, response.text

    return _fill


@pytest.fixture
def make_seeker(client, signup, fill_basic_details):
    """A job seeker with basic details and a profile"""

    def _make(name: str = "Sam Seeker", skills=None):
        user, headers = signup("JOB_SEEKER", name=name)
        fill_basic_details(headers, "jobseeker", name=name)
        response = client.post("/api/jobseeker/profile", headers=headers, json={
            "skills": skills or ["Python", "SQL"],
        })
        assert response.status_code == 201, response.text
        return headers

    return _make


@pytest.fixture
def make_employer(client, signup, fill_basic_details):
    """An employer with basic details and an employer profile, no company yet"""

    def _make(name: str = "Erin Employer"):
        user, headers = signup("EMPLOYER", name=name)
        fill_basic_details(headers, "employer", name=name)
        response = client.post("/api/employer/profile", headers=headers, json={"job_title": "Recruiter"})
        assert response.status_code == 201, response.text
        return headers

    return _make


@pytest.fixture
def make_company(client):
    def _make(headers: dict, name: str = "Nimbus", **extra):
        payload = {"name": name, "industry": "Software", **extra}
        response = client.post("/api/employer/companies/", headers=headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture
def employer_with_company(make_employer, make_company):
    def _make(name: str = "Erin Employer", company: str = None):
        headers = make_employer(name=name)
        data = make_company(headers, name=company or f"Company {next(_counter)}")
        return headers, data

    return _make


@pytest.fixture
def make_job(client):
    def _make(headers: dict, **overrides):
        payload = {
            "title": "Backend Engineer",
            "role": "BACKEND_DEVELOPER",
            "description": "Build APIs with Python and PostgreSQL.",
            "requirements": "Docker and AWS experience",
            "location": "Remote",
            "job_type": "FULL_TIME",
            "salary_min": 50000,
            "salary_max": 90000,
            **overrides,
        }
        response = client.post("/api/jobs/", headers=headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


def default_answers(job: dict) -> list:
    """Answer every field on a job's form"""
    return [{"field_id": field["id"], "answer": "answer"} for field in job["form_fields"]]


@pytest.fixture
def apply(client):
    def _apply(headers: dict, job: dict, responses=None):
        return client.post(
            f"/api/jobseekers/jobs/{job['id']}/apply",
            headers=headers,
            json={"responses": default_answers(job) if responses is None else responses},
        )

    return _apply
