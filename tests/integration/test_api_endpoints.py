"""
Integration tests for the health endpoints.

These tests drive the complete application (exception handlers, request ID
middleware, health router) through FastAPI's TestClient.
"""
import pytest
from fastapi.testclient import TestClient

from health.registry import HealthRegistry
from health.status import HealthStatus
from main import create_app

# Mark all tests in this module as integration tests
pytestmark = pytest.mark.integration


def broken() -> HealthStatus:
    raise RuntimeError("connection pool exhausted")


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_no_checks_is_up(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "UP"
        assert "timestamp" in body
        assert "components" not in body

    def test_down_component_returns_503(self, client, health_registry):
        health_registry.register("a", HealthStatus.up)
        health_registry.register("b", lambda: HealthStatus.down("disk full"))

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "DOWN"
        assert response.json()["components"] == {
            "a": {"status": "UP"},
            "b": {"status": "DOWN", "message": "disk full"},
        }

    def test_degraded_returns_200(self, client, health_registry):
        health_registry.register("cache", lambda: HealthStatus.degraded("evicting"))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "DEGRADED"

    def test_raising_check_is_reported_not_500(self, client, health_registry):
        health_registry.register("db", broken)
        health_registry.register("queue", HealthStatus.up)

        response = client.get("/health")

        assert response.status_code == 503
        components = response.json()["components"]
        assert components["db"] == {
            "status": "DOWN",
            "message": "Check threw exception",
            "error": "RuntimeError",
            "errorMessage": "connection pool exhausted",
        }
        assert components["queue"] == {"status": "UP"}

    def test_malformed_status_is_reported_not_500(self, client, health_registry):
        health_registry.register("by-name", lambda: HealthStatus("UP"))
        health_registry.register("bogus", lambda: HealthStatus("SIDEWAYS"))

        response = client.get("/health")

        assert response.status_code == 503
        components = response.json()["components"]
        assert components["by-name"] == {"status": "UP"}
        assert components["bogus"]["error"] == "ValueError"

    def test_registration_after_startup_is_visible(self, client, health_registry):
        assert "components" not in client.get("/health").json()

        health_registry.register("late", HealthStatus.up)

        assert client.get("/health").json()["components"] == {"late": {"status": "UP"}}


class TestLivenessEndpoint:
    """Tests for GET /health/live."""

    def test_default_liveness_ignores_other_checks(self, client, health_registry):
        health_registry.register("db", lambda: HealthStatus.down("gone"))

        response = client.get("/health/live")

        assert response.status_code == 200
        assert set(response.json()) == {"status", "timestamp"}
        assert response.json()["status"] == "UP"

    def test_registered_liveness_check_can_fail(self, client, health_registry):
        health_registry.register_liveness("event-loop", lambda: HealthStatus.down("blocked"))

        response = client.get("/health/live")

        assert response.status_code == 503
        assert response.json()["components"] == {
            "event-loop": {"status": "DOWN", "message": "blocked"}
        }


class TestReadinessEndpoint:
    """Tests for GET /health/ready."""

    def test_general_checks_are_readiness_checks(self, client, health_registry):
        health_registry.register("db", lambda: HealthStatus.down("gone"))

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert "db" in response.json()["components"]

    def test_readiness_only_check(self, client, health_registry):
        health_registry.register_readiness("warmup", lambda: HealthStatus.degraded("priming cache"))

        ready = client.get("/health/ready")
        full = client.get("/health")

        assert ready.status_code == 200
        assert ready.json()["status"] == "DEGRADED"
        assert "components" not in full.json()


class TestComponentEndpoint:
    """Tests for GET /health/{name}."""

    def test_up_component(self, client, health_registry):
        health_registry.register("db", HealthStatus.up)

        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json() == {"status": "UP"}

    def test_down_component(self, client, health_registry):
        health_registry.register("db", lambda: HealthStatus.down("refused"))

        response = client.get("/health/db")

        assert response.status_code == 503
        assert response.json() == {"status": "DOWN", "message": "refused"}

    def test_raising_component(self, client, health_registry):
        health_registry.register("db", broken)

        response = client.get("/health/db")

        assert response.status_code == 503
        assert response.json()["message"] == "Check failed"
        assert response.json()["error"] == "RuntimeError"

    def test_unknown_component_is_404(self, client):
        response = client.get("/health/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "RESOURCE_NOT_FOUND"
        assert body["details"] == {"component": "nope"}

    def test_unregistered_component_is_404(self, client, health_registry):
        health_registry.register("db", HealthStatus.up)
        health_registry.unregister("db")

        assert client.get("/health/db").status_code == 404

    def test_live_and_ready_are_not_components(self, client, health_registry):
        health_registry.register("live", lambda: HealthStatus.down("shadowed"))

        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "UP"


class TestEndpointConfiguration:
    """Tests for prefix and component-route settings."""

    def test_component_routes_off_by_default(self, settings_factory):
        registry = HealthRegistry()
        registry.register("db", HealthStatus.up)
        app = create_app(settings=settings_factory(), registry=registry)

        with TestClient(app) as client:
            assert client.get("/health").status_code == 200
            assert client.get("/health/db").status_code == 404
            assert "error_code" not in client.get("/health/db").json()

    def test_prefix_with_trailing_slash(self, settings_factory):
        registry = HealthRegistry()
        app = create_app(settings=settings_factory(HEALTH_PATH_PREFIX="/api/"), registry=registry)

        with TestClient(app) as client:
            assert client.get("/api/health").status_code == 200
            assert client.get("/api/health/live").status_code == 200
            assert client.get("/api/health/ready").status_code == 200
            assert client.get("/health").status_code == 404

    def test_registry_is_attached_to_app_state(self, settings_factory):
        registry = HealthRegistry()
        app = create_app(settings=settings_factory(), registry=registry)

        assert app.state.health_registry is registry

    def test_default_registry_is_created(self, settings_factory):
        app = create_app(settings=settings_factory())

        assert isinstance(app.state.health_registry, HealthRegistry)
        assert app.state.health_registry.telemetry is not None
