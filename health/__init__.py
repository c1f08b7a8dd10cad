"""
Health check module for the JWeb health service.

This module provides a registry of named health checks for monitoring
callers such as orchestration probes and load balancers:
- HealthStatus, the value every check returns
- HealthRegistry, which runs checks and aggregates their results
- FastAPI endpoints for /health, /health/live and /health/ready
"""

from health.checks import (
    CheckFailed,
    CheckOutcome,
    CheckPassed,
    HealthCheck,
    evaluate_check,
    with_timeout,
)
from health.registry import CheckKind, HealthRegistry
from health.report import ComponentReport, HealthReport
from health.routes import create_health_router, setup_health_endpoints
from health.status import HealthState, HealthStatus

__all__ = [
    "CheckFailed",
    "CheckKind",
    "CheckOutcome",
    "CheckPassed",
    "ComponentReport",
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthState",
    "HealthStatus",
    "create_health_router",
    "evaluate_check",
    "setup_health_endpoints",
    "with_timeout",
]
