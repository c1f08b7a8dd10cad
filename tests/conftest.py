"""
Shared pytest fixtures and configuration for all tests.
"""
import os

import pytest
from hypothesis import settings, Verbosity, Phase

from health.registry import HealthRegistry
from health.status import HealthStatus

# Default profile: balanced for local development
settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None,
    print_blob=True,
)

# CI profile: more thorough and reproducible
settings.register_profile(
    "ci",
    max_examples=200,
    verbosity=Verbosity.verbose,
    deadline=None,
    print_blob=True,
    derandomize=True,
)

# Debug profile: minimal examples, no shrinking
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
    print_blob=True,
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture
def registry() -> HealthRegistry:
    """A fresh, empty registry for each test."""
    return HealthRegistry()


@pytest.fixture
def populated_registry() -> HealthRegistry:
    """Registry with one healthy and one failing general check."""
    registry = HealthRegistry()
    registry.register("a", HealthStatus.up)
    registry.register("b", lambda: HealthStatus.down("disk full"))
    return registry
