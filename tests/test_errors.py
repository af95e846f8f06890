"""Tests for the error envelope and the app-level endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from jobportal.exceptions import Conflict, NotFound, PreconditionFailed
from jobportal.middleware import error_body, register_exception_handlers


@pytest.fixture
def failing_client():
    """A bare app with the envelope handlers and routes that raise"""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaput")

    @app.get("/missing")
    def missing():
        raise NotFound("Widget not found")

    @app.get("/onboarding")
    def onboarding():
        raise PreconditionFailed("Finish your profile", action="complete_profile", step="basic_details")

    @app.get("/taken")
    def taken():
        raise Conflict("Name taken", suggestion={"id": "abc", "name": "Widget"})

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


class TestEnvelope:
    def test_unknown_route(self, client):
        response = client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}

    def test_method_not_allowed(self, client):
        response = client.delete("/health")

        assert response.status_code == 405
        assert response.json()["success"] is False

    def test_validation_errors(self, client):
        response = client.post("/api/auth/signup", json={"name": "A", "email": "nope", "password": "x"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        fields = {issue["field"] for issue in body["errors"]}
        assert {"email", "password", "role"} <= fields

    def test_app_error(self, failing_client):
        response = failing_client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Widget not found"}

    def test_app_error_extras(self, failing_client):
        onboarding = failing_client.get("/onboarding").json()
        taken = failing_client.get("/taken")

        assert onboarding["action"] == "complete_profile"
        assert onboarding["step"] == "basic_details"
        assert taken.status_code == 409
        assert taken.json()["suggestion"] == {"id": "abc", "name": "Widget"}

    def test_unhandled_error(self, failing_client):
        response = failing_client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Internal server error"
        assert body["error"] == "RuntimeError: kaput"

    def test_unauthorized_sets_challenge(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"


class TestErrorBody:
    def test_omits_empty_errors(self):
        assert error_body("Nope") == {"success": False, "message": "Nope"}
        assert error_body("Nope", []) == {"success": False, "message": "Nope"}

    def test_includes_extras(self):
        body = error_body("Bad", [{"field": "x"}], step="company_selection")

        assert body == {
            "success": False,
            "message": "Bad",
            "errors": [{"field": "x"}],
            "step": "company_selection",
        }


class TestAppEndpoints:
    def test_root(self, client):
        assert client.get("/").json() == {"message": "Job portal backend is running!"}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "environment": "test"}
