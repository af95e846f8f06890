"""Tests for onboarding status and the job seeker / employer profiles."""

import pytest


class TestEmployerOnboarding:
    def test_fresh_employer_status(self, client, signup):
        _, headers = signup("EMPLOYER")

        data = client.get("/api/employer/profile-status", headers=headers).json()["data"]

        assert data["steps"] == {"basic_details": False, "employer_profile": False, "company_selection": False}
        assert data["next_step"] == "basic_details"
        assert data["completion_percentage"] == 0
        assert data["is_complete"] is False

    def test_two_of_three_steps_is_67_percent(self, client, make_employer):
        headers = make_employer()

        data = client.get("/api/employer/profile-status", headers=headers).json()["data"]

        assert data["steps"]["company_selection"] is False
        assert data["next_step"] == "company_selection"
        assert data["completion_percentage"] == 67

    def test_complete_after_company(self, client, employer_with_company):
        headers, _ = employer_with_company()

        data = client.get("/api/employer/profile-status", headers=headers).json()["data"]

        assert data["completion_percentage"] == 100
        assert data["next_step"] == "complete"
        assert data["is_complete"] is True

    def test_profile_requires_basic_details(self, client, signup):
        _, headers = signup("EMPLOYER")

        response = client.post("/api/employer/profile", headers=headers, json={})

        assert response.status_code == 400
        assert response.json()["step"] == "basic_details"

    def test_second_profile_conflicts(self, client, make_employer):
        headers = make_employer()

        response = client.post("/api/employer/profile", headers=headers, json={})

        assert response.status_code == 409

    def test_profile_routes_require_profile(self, client, signup, fill_basic_details):
        _, headers = signup("EMPLOYER")
        fill_basic_details(headers, "employer")

        response = client.get("/api/employer/profile", headers=headers)

        assert response.status_code == 400
        assert response.json()["step"] == "employer_profile"

    def test_profile_defaults_to_recruiter(self, client, make_employer):
        headers = make_employer()

        data = client.get("/api/employer/profile", headers=headers).json()["data"]

        assert data["company_role"] == "RECRUITER"
        assert data["job_title"] == "Recruiter"
        assert data["company"] is None

    def test_update_profile_and_settings(self, client, make_employer):
        headers = make_employer()

        response = client.put("/api/employer/profile", headers=headers, json={"department": "Engineering"})
        assert response.status_code == 200
        assert response.json()["data"]["department"] == "Engineering"

        response = client.put("/api/employer/settings", headers=headers, json={"company_role": "HR_MANAGER"})
        assert response.status_code == 200
        assert response.json()["data"]["company_role"] == "HR_MANAGER"
        assert response.json()["data"]["department"] == "Engineering"

    def test_basic_details_validation(self, client, signup):
        _, headers = signup("EMPLOYER")

        response = client.put("/api/employer/basic-details", headers=headers, json={
            "name": "Ok Name", "phone": "123", "location": "X",
        })

        assert response.status_code == 400
        fields = {issue["field"] for issue in response.json()["errors"]}
        assert fields == {"phone", "location"}

    def test_stats_without_company(self, client, make_employer):
        headers = make_employer()

        data = client.get("/api/employer/stats", headers=headers).json()["data"]

        assert data["has_company"] is False
        assert data["total_jobs"] == 0
        assert data["total_applications"] == 0

    def test_delete_account_removes_jobs_and_applications(
        self, client, employer_with_company, make_job, make_seeker, apply
    ):
        headers, company = employer_with_company()
        job = make_job(headers)
        seeker = make_seeker()
        apply(seeker, job)

        response = client.delete("/api/employer/account", headers=headers)

        assert response.status_code == 200
        assert client.get("/api/auth/me", headers=headers).status_code == 401
        assert client.get("/api/jobseekers/applications", headers=seeker).json()["data"]["total"] == 0
        assert client.get(f"/api/jobs/{job['id']}").status_code == 404
        assert client.get(f"/api/employer/companies/public/{company['id']}").status_code == 200


class TestJobSeekerOnboarding:
    def test_fresh_seeker_status(self, client, signup):
        _, headers = signup("JOB_SEEKER")

        data = client.get("/api/jobseeker/profile-status", headers=headers).json()["data"]

        assert list(data["steps"]) == [
            "basic_details", "job_seeker_profile", "education", "experience", "projects", "preferences",
        ]
        assert data["next_step"] == "basic_details"
        assert data["total_steps"] == 6

    def test_status_after_profile(self, client, make_seeker):
        headers = make_seeker()

        data = client.get("/api/jobseeker/profile-status", headers=headers).json()["data"]

        assert data["completed_steps"] == 2
        assert data["next_step"] == "education"
        assert data["completion_percentage"] == 33

    def test_profile_requires_basic_details(self, client, signup):
        _, headers = signup("JOB_SEEKER")

        response = client.post("/api/jobseeker/profile", headers=headers, json={"skills": ["Python"]})

        assert response.status_code == 400
        assert response.json()["step"] == "basic_details"

    def test_skills_are_required(self, client, signup, fill_basic_details):
        _, headers = signup("JOB_SEEKER")
        fill_basic_details(headers, "jobseeker")

        response = client.post("/api/jobseeker/profile", headers=headers, json={"skills": ["  ", ""]})

        assert response.status_code == 400

    def test_profile_urls_are_validated(self, client, signup, fill_basic_details):
        _, headers = signup("JOB_SEEKER")
        fill_basic_details(headers, "jobseeker")

        response = client.post("/api/jobseeker/profile", headers=headers, json={
            "skills": ["Python"], "github": "ftp://example.com/me",
        })

        assert response.status_code == 400

    def test_routes_require_profile(self, client, signup):
        _, headers = signup("JOB_SEEKER")

        response = client.get("/api/jobseeker/education", headers=headers)

        assert response.status_code == 400
        assert response.json()["step"] == "job_seeker_profile"

    def test_update_profile(self, client, make_seeker):
        headers = make_seeker()

        response = client.put("/api/jobseeker/profile", headers=headers, json={
            "skills": ["Go", "Go", " Rust "], "linkedin": "https://linkedin.com/in/sam",
        })

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["skills"] == ["Go", "Rust"]
        assert data["linkedin"] == "https://linkedin.com/in/sam"

    def test_four_of_six_steps_is_67_percent(self, client, make_seeker):
        headers = make_seeker()
        client.post("/api/jobseeker/education", headers=headers, json={
            "institution": "State University", "degree": "BSc", "start_date": "2016-09-01",
        })
        client.post("/api/jobseeker/experience", headers=headers, json={
            "company": "Acme", "position": "Developer", "start_date": "2020-07-01",
        })

        data = client.get("/api/jobseeker/profile-status", headers=headers).json()["data"]

        assert data["completed_steps"] == 4
        assert data["completion_percentage"] == 67
        assert data["next_step"] == "projects"
        assert data["is_complete"] is False

    def test_profile_update_rejects_null_skills(self, client, make_seeker):
        headers = make_seeker()

        response = client.put("/api/jobseeker/profile", headers=headers, json={"skills": None})

        assert response.status_code == 400
        assert client.get("/api/jobseeker/profile", headers=headers).json()["data"]["skills"] == ["Python", "SQL"]
        status = client.get("/api/jobseeker/profile-status", headers=headers).json()["data"]
        assert status["steps"]["job_seeker_profile"] is True

class TestProfileSections:
    def test_full_profile_and_completion(self, client, make_seeker):
        headers = make_seeker()

        assert client.post("/api/jobseeker/education", headers=headers, json={
            "institution": "State University", "degree": "BSc", "start_date": "2016-09-01", "end_date": "2020-06-01",
        }).status_code == 201
        assert client.post("/api/jobseeker/experience", headers=headers, json={
            "company": "Acme", "position": "Developer", "start_date": "2020-07-01",
            "end_date": "2021-01-01", "is_current": True,
        }).status_code == 201
        assert client.post("/api/jobseeker/projects", headers=headers, json={
            "title": "Side Project", "technologies": ["Python"],
        }).status_code == 201
        assert client.put("/api/jobseeker/preferences", headers=headers, json={
            "preferred_roles": ["BACKEND_DEVELOPER"], "preferred_locations": ["Remote"],
        }).status_code == 200

        profile = client.get("/api/jobseeker/profile", headers=headers).json()["data"]
        assert len(profile["educations"]) == 1
        assert profile["experiences"][0]["end_date"] is None
        assert profile["projects"][0]["title"] == "Side Project"
        assert profile["preferences"]["preferred_roles"] == ["BACKEND_DEVELOPER"]

        status = client.get("/api/jobseeker/profile-status", headers=headers).json()["data"]
        assert status["is_complete"] is True
        assert status["completion_percentage"] == 100

    def test_education_newest_first(self, client, make_seeker):
        headers = make_seeker()
        for start in ("2010-01-01", "2018-01-01", "2014-01-01"):
            client.post("/api/jobseeker/education", headers=headers, json={
                "institution": "School", "degree": "Degree", "start_date": start,
            })

        items = client.get("/api/jobseeker/education", headers=headers).json()["data"]

        assert [item["start_date"] for item in items] == ["2018-01-01", "2014-01-01", "2010-01-01"]

    def test_end_before_start_rejected(self, client, make_seeker):
        headers = make_seeker()

        response = client.post("/api/jobseeker/education", headers=headers, json={
            "institution": "School", "degree": "Degree", "start_date": "2020-01-01", "end_date": "2019-01-01",
        })

        assert response.status_code == 400

    @pytest.mark.parametrize("section,payload", [
        ("education", {"institution": "School", "degree": "Degree", "start_date": "2020-01-01"}),
        ("experience", {"company": "Acme", "position": "Dev", "start_date": "2020-01-01"}),
        ("projects", {"title": "Thing"}),
    ])
    def test_entries_are_owner_scoped(self, client, make_seeker, section, payload):
        owner = make_seeker(name="Owner")
        other = make_seeker(name="Other")
        entry = client.post(f"/api/jobseeker/{section}", headers=owner, json=payload).json()["data"]

        assert client.put(f"/api/jobseeker/{section}/{entry['id']}", headers=other, json={}).status_code == 404
        assert client.delete(f"/api/jobseeker/{section}/{entry['id']}", headers=other).status_code == 404
        assert client.delete(f"/api/jobseeker/{section}/{entry['id']}", headers=owner).status_code == 200
        assert client.get(f"/api/jobseeker/{section}", headers=owner).json()["data"] == []

    def test_update_cannot_invert_stored_dates(self, client, make_seeker):
        headers = make_seeker()
        entry = client.post("/api/jobseeker/education", headers=headers, json={
            "institution": "State University", "degree": "BSc", "start_date": "2016-09-01",
        }).json()["data"]

        response = client.put(f"/api/jobseeker/education/{entry['id']}", headers=headers, json={
            "end_date": "2010-01-01",
        })

        assert response.status_code == 400
        stored = client.get("/api/jobseeker/education", headers=headers).json()["data"][0]
        assert stored["end_date"] is None

    def test_update_start_after_stored_end_rejected(self, client, make_seeker):
        headers = make_seeker()
        entry = client.post("/api/jobseeker/experience", headers=headers, json={
            "company": "Acme", "position": "Dev", "start_date": "2020-01-01", "end_date": "2021-01-01",
        }).json()["data"]

        response = client.put(f"/api/jobseeker/experience/{entry['id']}", headers=headers, json={
            "start_date": "2022-01-01",
        })

        assert response.status_code == 400
        stored = client.get("/api/jobseeker/experience", headers=headers).json()["data"][0]
        assert stored["start_date"] == "2020-01-01"

    @pytest.mark.parametrize("section,payload,field", [
        ("education", {"institution": "School", "degree": "Degree", "start_date": "2020-01-01"}, "institution"),
        ("education", {"institution": "School", "degree": "Degree", "start_date": "2020-01-01"}, "start_date"),
        ("experience", {"company": "Acme", "position": "Dev", "start_date": "2020-01-01"}, "position"),
        ("experience", {"company": "Acme", "position": "Dev", "start_date": "2020-01-01"}, "is_current"),
        ("projects", {"title": "Thing"}, "technologies"),
        ("projects", {"title": "Thing"}, "is_active"),
    ])
    def test_update_rejects_null_for_required_field(self, client, make_seeker, section, payload, field):
        headers = make_seeker()
        entry = client.post(f"/api/jobseeker/{section}", headers=headers, json=payload).json()["data"]

        response = client.put(f"/api/jobseeker/{section}/{entry['id']}", headers=headers, json={field: None})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == field
        assert client.get(f"/api/jobseeker/{section}", headers=headers).json()["data"] == [entry]

    def test_update_can_clear_optional_field(self, client, make_seeker):
        headers = make_seeker()
        entry = client.post("/api/jobseeker/education", headers=headers, json={
            "institution": "School", "degree": "Degree", "start_date": "2020-01-01", "grade": "A",
        }).json()["data"]

        response = client.put(f"/api/jobseeker/education/{entry['id']}", headers=headers, json={"grade": None})

        assert response.status_code == 200
        assert response.json()["data"]["grade"] is None

    def test_update_experience_to_current_clears_end_date(self, client, make_seeker):
        headers = make_seeker()
        entry = client.post("/api/jobseeker/experience", headers=headers, json={
            "company": "Acme", "position": "Dev", "start_date": "2020-01-01", "end_date": "2021-01-01",
        }).json()["data"]
        assert entry["end_date"] == "2021-01-01"

        response = client.put(f"/api/jobseeker/experience/{entry['id']}", headers=headers, json={"is_current": True})

        assert response.status_code == 200
        assert response.json()["data"]["end_date"] is None

    def test_preferences_upsert(self, client, make_seeker):
        headers = make_seeker()
        assert client.get("/api/jobseeker/preferences", headers=headers).json()["data"] is None

        first = client.put("/api/jobseeker/preferences", headers=headers, json={"remote_work": True}).json()["data"]
        second = client.put("/api/jobseeker/preferences", headers=headers, json={
            "preferred_job_types": ["CONTRACT"], "salary_expectation_min": 100,
        }).json()["data"]

        assert first["id"] == second["id"]
        assert second["preferred_job_types"] == ["CONTRACT"]

    def test_preferences_salary_range(self, client, make_seeker):
        headers = make_seeker()

        response = client.put("/api/jobseeker/preferences", headers=headers, json={
            "salary_expectation_min": 500, "salary_expectation_max": 100,
        })

        assert response.status_code == 400

    def test_companies_listing(self, client, make_seeker, employer_with_company):
        employer_with_company(company="Zeta Labs")
        employer_with_company(company="Alpha Works")
        headers = make_seeker()

        names = [c["name"] for c in client.get("/api/jobseeker/companies", headers=headers).json()["data"]]

        assert names == ["Alpha Works", "Zeta Labs"]
