"""Tests for applying, employer review transitions and withdrawal."""

import uuid

import pytest
from sqlalchemy import event

from jobportal.crud import application_crud
from jobportal.exceptions import Conflict
from jobportal.models.application import Application, ApplicationStatus
from jobportal.schema.application_schema import AnswerInput
from tests.conftest import default_answers


@pytest.fixture
def posted_job(employer_with_company, make_job):
    headers, _ = employer_with_company()
    return headers, make_job(headers)


class TestApply:
    def test_apply_creates_pending_application(self, client, posted_job, make_seeker, apply):
        _, job = posted_job
        seeker = make_seeker()

        response = apply(seeker, job)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "PENDING"
        assert data["job"]["id"] == job["id"]
        assert {r["label"] for r in data["responses"]} == {
            "Full Name", "Email Address", "Phone Number", "Resume URL", "Years of Experience",
        }

    def test_duplicate_application_conflicts(self, posted_job, make_seeker, apply):
        _, job = posted_job
        seeker = make_seeker()
        apply(seeker, job)

        response = apply(seeker, job)

        assert response.status_code == 409
        assert response.json()["message"] == "You have already applied for this job"

    def test_concurrent_duplicate_is_conflict(self, client, posted_job, make_seeker, db_session, session_factory):
        _, job = posted_job
        seeker = make_seeker()
        seeker_id = uuid.UUID(client.get("/api/auth/me", headers=seeker).json()["data"]["job_seeker_id"])
        job_id = uuid.UUID(job["id"])
        answers = [AnswerInput(field_id=uuid.UUID(a["field_id"]), answer=a["answer"]) for a in default_answers(job)]

        def competing_submit(session, flush_context, instances):
            # Another request lands between the duplicate check and this insert
            with session_factory() as other:
                other.add(Application(job_id=job_id, seeker_id=seeker_id, status=ApplicationStatus.PENDING))
                other.commit()

        event.listen(db_session, "before_flush", competing_submit, once=True)

        with pytest.raises(Conflict):
            application_crud.apply_to_job(db_session, job_id, seeker_id, answers)

        assert db_session.query(Application).filter(
            Application.job_id == job_id,
            Application.seeker_id == seeker_id
        ).count() == 1

    def test_missing_required_field(self, posted_job, make_seeker, apply):
        _, job = posted_job
        answers = default_answers(job)[1:]

        response = apply(make_seeker(), job, responses=answers)

        assert response.status_code == 400
        assert response.json()["message"] == "Full Name is required"

    def test_optional_field_may_be_skipped(self, client, posted_job, make_seeker, apply):
        headers, job = posted_job
        fields = client.post(f"/api/jobs/{job['id']}/form", headers=headers, json={"fields": [
            {"label": "Portfolio", "field_type": "TEXT", "is_required": False},
        ]}).json()["data"]
        answers = [{"field_id": f["id"], "answer": "x"} for f in fields if f["is_required"]]

        response = apply(make_seeker(), job, responses=answers)

        assert response.status_code == 201
        assert len(response.json()["data"]["responses"]) == 5

    def test_unknown_field_rejected(self, posted_job, make_seeker, apply):
        _, job = posted_job
        answers = default_answers(job) + [{"field_id": str(uuid.uuid4()), "answer": "?"}]

        response = apply(make_seeker(), job, responses=answers)

        assert response.status_code == 400
        assert len(response.json()["errors"]) == 1

    def test_duplicate_field_answer_rejected(self, posted_job, make_seeker, apply):
        _, job = posted_job
        answers = default_answers(job)
        answers.append(dict(answers[0]))

        response = apply(make_seeker(), job, responses=answers)

        assert response.status_code == 400

    def test_inactive_job_not_found(self, client, posted_job, make_seeker, apply):
        headers, job = posted_job
        client.patch(f"/api/jobs/{job['id']}/status", headers=headers, json={"status": "PAUSED"})

        response = apply(make_seeker(), job)

        assert response.status_code == 404

    def test_employer_cannot_apply(self, posted_job, apply):
        headers, job = posted_job

        assert apply(headers, job).status_code == 403

    def test_seeker_without_profile(self, client, posted_job, signup, apply):
        _, job = posted_job
        _, headers = signup("JOB_SEEKER")

        response = apply(headers, job)

        assert response.status_code == 400
        assert response.json()["step"] == "job_seeker_profile"


class TestEmployerReview:
    def test_full_workflow(self, client, posted_job, make_seeker, apply):
        employer, job = posted_job
        seeker = make_seeker()
        application = apply(seeker, job).json()["data"]
        url = f"/api/jobs/{job['id']}/applications/{application['id']}/status"

        for status in ("REVIEWING", "SHORTLISTED", "ACCEPTED"):
            response = client.patch(url, headers=employer, json={"status": status})
            assert response.status_code == 200, response.text
            assert response.json()["data"]["status"] == status

        withdraw = client.patch(f"/api/jobseekers/applications/{application['id']}/withdraw", headers=seeker)

        assert withdraw.status_code == 400
        assert client.get(
            f"/api/jobseekers/applications/{application['id']}", headers=seeker
        ).json()["data"]["status"] == "ACCEPTED"

    def test_terminal_status_is_final(self, client, posted_job, make_seeker, apply):
        employer, job = posted_job
        application = apply(make_seeker(), job).json()["data"]
        url = f"/api/jobs/{job['id']}/applications/{application['id']}/status"
        client.patch(url, headers=employer, json={"status": "REJECTED"})

        response = client.patch(url, headers=employer, json={"status": "REVIEWING"})

        assert response.status_code == 400

    @pytest.mark.parametrize("status", ["PENDING", "WITHDRAWN"])
    def test_employer_cannot_set_seeker_statuses(self, client, posted_job, make_seeker, apply, status):
        employer, job = posted_job
        application = apply(make_seeker(), job).json()["data"]

        response = client.patch(
            f"/api/jobs/{job['id']}/applications/{application['id']}/status",
            headers=employer, json={"status": status},
        )

        assert response.status_code == 400

    def test_other_employer_forbidden(self, client, posted_job, employer_with_company, make_seeker, apply):
        _, job = posted_job
        intruder, _ = employer_with_company(name="Intruder")
        application = apply(make_seeker(), job).json()["data"]

        response = client.patch(
            f"/api/jobs/{job['id']}/applications/{application['id']}/status",
            headers=intruder, json={"status": "REVIEWING"},
        )

        assert response.status_code == 403

    def test_application_must_belong_to_job(self, client, posted_job, make_job, make_seeker, apply):
        employer, job = posted_job
        other_job = make_job(employer, title="Other Job")
        application = apply(make_seeker(), other_job).json()["data"]

        response = client.patch(
            f"/api/jobs/{job['id']}/applications/{application['id']}/status",
            headers=employer, json={"status": "REVIEWING"},
        )

        assert response.status_code == 404

    def test_list_applicants(self, client, posted_job, make_seeker, apply):
        employer, job = posted_job
        apply(make_seeker(name="Ann Applicant", skills=["Go"]), job)
        second = apply(make_seeker(name="Bob Applicant"), job).json()["data"]
        client.patch(
            f"/api/jobs/{job['id']}/applications/{second['id']}/status",
            headers=employer, json={"status": "SHORTLISTED"},
        )

        everyone = client.get(f"/api/jobs/{job['id']}/applications", headers=employer).json()["data"]
        shortlisted = client.get(
            f"/api/jobs/{job['id']}/applications", headers=employer, params={"status": "SHORTLISTED"}
        ).json()["data"]

        assert everyone["total"] == 2
        names = {item["applicant"]["name"] for item in everyone["items"]}
        assert names == {"Ann Applicant", "Bob Applicant"}
        assert all(len(item["responses"]) == 5 for item in everyone["items"])
        assert [item["applicant"]["name"] for item in shortlisted["items"]] == ["Bob Applicant"]


class TestWithdraw:
    @pytest.mark.parametrize("status", [None, "REVIEWING"])
    def test_withdraw_from_open_status(self, client, posted_job, make_seeker, apply, status):
        employer, job = posted_job
        seeker = make_seeker()
        application = apply(seeker, job).json()["data"]
        if status:
            client.patch(
                f"/api/jobs/{job['id']}/applications/{application['id']}/status",
                headers=employer, json={"status": status},
            )

        response = client.patch(f"/api/jobseekers/applications/{application['id']}/withdraw", headers=seeker)

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "WITHDRAWN"

    def test_withdraw_after_shortlist_fails(self, client, posted_job, make_seeker, apply):
        employer, job = posted_job
        seeker = make_seeker()
        application = apply(seeker, job).json()["data"]
        client.patch(
            f"/api/jobs/{job['id']}/applications/{application['id']}/status",
            headers=employer, json={"status": "SHORTLISTED"},
        )

        response = client.put(f"/api/applications/{application['id']}/withdraw", headers=seeker)

        assert response.status_code == 400

    def test_withdraw_twice(self, client, posted_job, make_seeker, apply):
        _, job = posted_job
        seeker = make_seeker()
        application = apply(seeker, job).json()["data"]
        client.put(f"/api/applications/{application['id']}/withdraw", headers=seeker)

        response = client.put(f"/api/applications/{application['id']}/withdraw", headers=seeker)

        assert response.status_code == 400
        assert "already been withdrawn" in response.json()["message"]

    def test_cannot_withdraw_someone_elses(self, client, posted_job, make_seeker, apply):
        _, job = posted_job
        application = apply(make_seeker(name="Owner"), job).json()["data"]

        response = client.patch(
            f"/api/jobseekers/applications/{application['id']}/withdraw", headers=make_seeker(name="Other")
        )

        assert response.status_code == 404

    def test_employer_cannot_revive_withdrawn(self, client, posted_job, make_seeker, apply):
        employer, job = posted_job
        seeker = make_seeker()
        application = apply(seeker, job).json()["data"]
        client.put(f"/api/applications/{application['id']}/withdraw", headers=seeker)

        response = client.patch(
            f"/api/jobs/{job['id']}/applications/{application['id']}/status",
            headers=employer, json={"status": "REVIEWING"},
        )

        assert response.status_code == 400


class TestJobBoard:
    def test_browse_and_detail(self, client, posted_job, make_seeker, apply):
        employer, job = posted_job
        seeker = make_seeker()

        listing = client.get("/api/jobseekers/jobs", headers=seeker).json()["data"]
        assert [item["id"] for item in listing["items"]] == [job["id"]]

        apply(seeker, job)
        detail = client.get(f"/api/jobseekers/jobs/{job['id']}", headers=seeker).json()["data"]
        assert detail["has_applied"] is True
        assert len(detail["form_fields"]) == 5

    def test_detail_hides_inactive(self, client, posted_job, make_seeker):
        employer, job = posted_job
        client.patch(f"/api/jobs/{job['id']}/status", headers=employer, json={"status": "COMPLETED"})

        response = client.get(f"/api/jobseekers/jobs/{job['id']}", headers=make_seeker())

        assert response.status_code == 404

    def test_recommendations_follow_preferences(self, client, employer_with_company, make_job, make_seeker, apply):
        employer, _ = employer_with_company()
        backend = make_job(employer, title="Backend", role="BACKEND_DEVELOPER", location="Pune")
        make_job(employer, title="Designer", role="UI_UX_DESIGNER", location="Delhi", job_type="PART_TIME")
        remote = make_job(employer, title="Remote QA", role="QA_ENGINEER", location="Remote", job_type="PART_TIME")
        seeker = make_seeker()
        client.put("/api/jobseeker/preferences", headers=seeker, json={
            "preferred_roles": ["BACKEND_DEVELOPER"], "preferred_locations": ["remote"],
        })

        titles = {job["title"] for job in client.get("/api/jobseekers/recommendations", headers=seeker).json()["data"]}
        assert titles == {"Backend", "Remote QA"}

        apply(seeker, backend)
        after = [job["id"] for job in client.get("/api/jobseekers/recommendations", headers=seeker).json()["data"]]
        assert after == [remote["id"]]

    def test_recommendations_without_preferences(self, client, employer_with_company, make_job, make_seeker):
        employer, _ = employer_with_company()
        make_job(employer, title="Older")
        make_job(employer, title="Newer")

        data = client.get("/api/jobseekers/recommendations", headers=make_seeker()).json()["data"]

        assert [job["title"] for job in data] == ["Newer", "Older"]

    def test_stats(self, client, posted_job, make_job, make_seeker, apply):
        employer, job = posted_job
        second_job = make_job(employer, title="Second")
        seeker = make_seeker()
        apply(seeker, job)
        application = apply(seeker, second_job).json()["data"]
        client.put(f"/api/applications/{application['id']}/withdraw", headers=seeker)

        data = client.get("/api/jobseekers/stats", headers=seeker).json()["data"]

        assert data["total_applications"] == 2
        assert data["pending"] == 1
        assert data["withdrawn"] == 1
        assert data["accepted"] == 0
        assert data["profile_completion"] == 33
