"""
Tests for the HTTP surface: routes, error mapping and the
error-handling middleware.
"""

import json

import pytest
from fastapi.testclient import TestClient

from errorhub.core.config import Settings
from errorhub.domain.reporting.errors import ResolutionExhaustedError
from errorhub.main import create_app


def _settings(**overrides) -> Settings:
    values = {
        "environment": "testing",
        "email_notifications_enabled": False,
        "slack_notifications_enabled": False,
        "rate_limit_enabled": False,
        "database_url": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def app():
    app = create_app(_settings())

    @app.get("/boom/{kind}")
    def boom(kind: str):
        if kind == "permission":
            raise PermissionError("no access to /secret")
        if kind == "json":
            json.loads("{not json")
        raise RuntimeError("unexpected state")

    @app.get("/handled")
    def handled():
        manager = app.state.container.manager
        manager.handle("FILE_NOT_FOUND", {"file_path": "/tmp/a"}, throw=True)

    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


class TestHealthEndpoint:
    def test_health(self, client) -> None:
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": "0.1.0", "environment": "testing"}


class TestErrorCodesEndpoint:
    """Tests for GET /api/v1/errors/codes."""

    def test_lists_bundled_codes(self, client) -> None:
        response = client.get("/api/v1/errors/codes")
        assert response.status_code == 200
        codes = {item["code"] for item in response.json()["codes"]}
        assert {"UNDEFINED_ERROR_CODE", "FILE_NOT_FOUND", "VIRUS_FOUND"} <= codes

    def test_filters_by_severity(self, client) -> None:
        response = client.get("/api/v1/errors/codes", params={"severity": "critical"})
        severities = {item["severity"] for item in response.json()["codes"]}
        assert severities == {"critical"}

    def test_unknown_severity_is_422(self, client) -> None:
        response = client.get("/api/v1/errors/codes", params={"severity": "fatal"})
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid error definition"


class TestSimulationEndpoints:
    """Tests for the simulation admin routes."""

    def test_activate_list_deactivate_reset(self, client) -> None:
        response = client.post("/api/v1/errors/simulate/VIRUS_FOUND")
        assert response.status_code == 200
        assert response.json() == {"code": "VIRUS_FOUND", "active": True}

        client.post("/api/v1/errors/simulate/SCAN_ERROR")
        response = client.get("/api/v1/errors/simulations")
        assert response.json() == {"enabled": True, "codes": ["SCAN_ERROR", "VIRUS_FOUND"]}

        response = client.delete("/api/v1/errors/simulate/SCAN_ERROR")
        assert response.json() == {"code": "SCAN_ERROR", "active": False}

        response = client.post("/api/v1/errors/simulations/reset")
        assert response.json() == {"cleared": 1}
        assert client.get("/api/v1/errors/simulations").json()["codes"] == []

    def test_unknown_code_is_404(self, client) -> None:
        response = client.post("/api/v1/errors/simulate/NOT_A_CODE")
        assert response.status_code == 404
        assert response.json()["detail"] == "Error code 'NOT_A_CODE' does not exist"

    def test_admin_routes_forbidden_in_production(self) -> None:
        client = TestClient(create_app(_settings(environment="production")))
        assert client.post("/api/v1/errors/simulate/VIRUS_FOUND").status_code == 403
        assert client.get("/api/v1/errors/simulations").status_code == 403
        response = client.post(
            "/api/v1/errors/definitions",
            json={"code": "X", "definition": {"severity": "error", "blocking_level": "blocking"}},
        )
        assert response.status_code == 403
        assert client.get("/api/v1/errors/codes").status_code == 200


class TestDefinitionsEndpoint:
    """Tests for POST /api/v1/errors/definitions."""

    def test_define_and_handle(self, app, client) -> None:
        response = client.post(
            "/api/v1/errors/definitions",
            json={
                "code": "QUOTA_EXCEEDED",
                "definition": {
                    "severity": "warning",
                    "blocking_level": "blocking",
                    "status_code": 429,
                    "user_message": "Quota exceeded",
                },
            },
        )
        assert response.status_code == 201
        assert response.json()["status_code"] == 429

        outcome = app.state.container.manager.handle("QUOTA_EXCEEDED")
        assert outcome.user_message == "Quota exceeded"

    def test_invalid_definition_is_422(self, client) -> None:
        response = client.post(
            "/api/v1/errors/definitions",
            json={"code": "BROKEN", "definition": {"severity": "error"}},
        )
        assert response.status_code == 422
        assert "blocking_level" in response.json()["detail"]

    def test_malformed_code_is_422(self, client) -> None:
        response = client.post(
            "/api/v1/errors/definitions",
            json={"code": "lower case", "definition": {}},
        )
        assert response.status_code == 422


class TestErrorHandlingMiddleware:
    """Unhandled exceptions become materialized outcomes."""

    def test_permission_error_maps_to_authorization_error(self, client) -> None:
        response = client.get("/boom/permission")
        assert response.status_code == 403
        body = response.json()
        assert body["error"] == "AUTHORIZATION_ERROR"
        assert body["message"] == "You do not have permission to access this resource."
        assert body["blocking"] == "blocking"
        assert body["display_mode"] == "modal"
        assert body["notices"][0]["message"] == body["message"]

    def test_json_error_maps_to_json_error(self, client) -> None:
        response = client.get("/boom/json")
        assert response.status_code == 500
        assert response.json()["error"] == "JSON_ERROR"

    def test_unexpected_error_has_no_stack_trace(self, client) -> None:
        response = client.get("/boom/other")
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "UNEXPECTED_ERROR"
        assert "Traceback" not in response.text
        assert "unexpected state" not in response.text

    def test_thrown_handled_error_is_materialized(self, client) -> None:
        response = client.get("/handled")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "FILE_NOT_FOUND"
        assert body["blocking"] == "semi_blocking"
        assert body["message"] == "The requested file was not found."

    def test_exhausted_resolution_is_500(self, app, client, monkeypatch) -> None:
        def exhausted(code, context=None, cause=None, throw=False):
            raise ResolutionExhaustedError(code, cause)

        monkeypatch.setattr(app.state.container.manager, "handle", exhausted)
        response = client.get("/boom/other")
        assert response.status_code == 500
        assert response.json() == {"error": "FATAL_FALLBACK_FAILURE"}

    def test_error_is_persisted_with_request_metadata(self, tmp_path) -> None:
        app = create_app(_settings(database_url=f"sqlite:///{tmp_path / 'errors.db'}"))

        @app.get("/missing")
        def missing():
            raise FileNotFoundError("/data/report.pdf")

        response = TestClient(app).get("/missing")
        assert response.status_code == 404

        [record] = app.state.container.repository.get_recent()
        assert record.error_code == "FILE_NOT_FOUND"
        assert record.request_method == "GET"
        assert record.request_url == "http://testserver/missing"
        assert record.exception_class == "builtins.FileNotFoundError"
        assert record.context["exception_message"] == "/data/report.pdf"
