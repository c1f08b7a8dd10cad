"""
Integration test configuration and fixtures.

Builds the full FastAPI application from main.create_app() with explicit
settings and a registry the tests populate.
"""
import logging
import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from health.registry import HealthRegistry
from main import create_app


@pytest.fixture(autouse=True)
def restore_root_logger():
    """create_app() installs the JSON log handler on the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def make_settings(**env: str) -> Settings:
    """Settings built only from the given environment variables."""
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def health_registry() -> HealthRegistry:
    return HealthRegistry()


@pytest.fixture
def client(health_registry: HealthRegistry):
    """Client for an app with default settings and component routes exposed."""
    app = create_app(
        settings=make_settings(HEALTH_EXPOSE_COMPONENTS="true"),
        registry=health_registry,
    )
    with TestClient(app) as test_client:
        yield test_client
