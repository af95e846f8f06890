"""Tests for the seeker's application history endpoints."""

from datetime import datetime, timedelta, timezone

import pytest


@pytest.fixture
def history(client, employer_with_company, make_job, make_seeker, apply):
    """A seeker with three applications: pending, shortlisted and withdrawn"""
    employer, _ = employer_with_company(company="History Co")
    jobs = [
        make_job(employer, title="Backend", role="BACKEND_DEVELOPER"),
        make_job(employer, title="Frontend", role="FRONTEND_DEVELOPER"),
        make_job(employer, title="Backend Two", role="BACKEND_DEVELOPER"),
    ]
    seeker = make_seeker()
    applications = [apply(seeker, job).json()["data"] for job in jobs]

    client.patch(
        f"/api/jobs/{jobs[1]['id']}/applications/{applications[1]['id']}/status",
        headers=employer, json={"status": "SHORTLISTED"},
    )
    client.put(f"/api/applications/{applications[2]['id']}/withdraw", headers=seeker)
    return seeker, applications


def today():
    return datetime.now(timezone.utc).date()


class TestHistory:
    def test_my_history_paginated(self, client, history):
        seeker, _ = history

        data = client.get("/api/applications/my-history", headers=seeker, params={"limit": 2}).json()["data"]

        assert data["total"] == 3
        assert data["pages"] == 2
        assert len(data["items"]) == 2
        assert data["items"][0]["job"]["company"]["name"] == "History Co"

    def test_my_history_by_status(self, client, history):
        seeker, applications = history

        data = client.get("/api/applications/my-history", headers=seeker, params={"status": "SHORTLISTED"}).json()

        assert [item["id"] for item in data["data"]["items"]] == [applications[1]["id"]]

    def test_by_status_path_is_case_insensitive(self, client, history):
        seeker, applications = history

        data = client.get("/api/applications/my-applications/status/withdrawn", headers=seeker).json()["data"]

        assert [item["id"] for item in data] == [applications[2]["id"]]

    def test_by_status_rejects_unknown(self, client, history):
        seeker, _ = history

        response = client.get("/api/applications/my-applications/status/HIRED", headers=seeker)

        assert response.status_code == 400
        assert "Invalid status" in response.json()["message"]

    def test_date_range_includes_end_day(self, client, history):
        seeker, _ = history
        day = today().isoformat()

        data = client.get("/api/applications/my-applications/date-range", headers=seeker, params={
            "start_date": day, "end_date": day,
        }).json()["data"]

        assert len(data) == 3

    def test_date_range_before_any_application(self, client, history):
        seeker, _ = history
        last_week = (today() - timedelta(days=7)).isoformat()
        yesterday = (today() - timedelta(days=1)).isoformat()

        data = client.get("/api/applications/my-applications/date-range", headers=seeker, params={
            "start_date": last_week, "end_date": yesterday,
        }).json()["data"]

        assert data == []

    def test_date_range_requires_both_dates(self, client, history):
        seeker, _ = history

        response = client.get("/api/applications/my-applications/date-range", headers=seeker, params={
            "start_date": today().isoformat(),
        })

        assert response.status_code == 400

    def test_date_range_rejects_reversed_bounds(self, client, history):
        seeker, _ = history

        response = client.get("/api/applications/my-applications/date-range", headers=seeker, params={
            "start_date": today().isoformat(), "end_date": (today() - timedelta(days=1)).isoformat(),
        })

        assert response.status_code == 400

    def test_details_owner_only(self, client, history, make_seeker):
        seeker, applications = history
        target = applications[0]["id"]

        assert client.get(f"/api/applications/details/{target}", headers=seeker).status_code == 200
        assert client.get(f"/api/applications/details/{target}", headers=make_seeker(name="Nosy")).status_code == 404

    def test_my_stats(self, client, history):
        seeker, _ = history

        data = client.get("/api/applications/my-stats", headers=seeker).json()["data"]

        assert data["total_applications"] == 3
        assert data["by_status"]["PENDING"] == 1
        assert data["by_status"]["SHORTLISTED"] == 1
        assert data["by_status"]["WITHDRAWN"] == 1
        assert data["recent_applications"] == 3
        assert data["by_company"][0]["company_name"] == "History Co"
        assert data["by_company"][0]["count"] == 3
        assert data["by_role"][0] == {"role": "BACKEND_DEVELOPER", "count": 2}
