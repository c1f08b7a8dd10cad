"""
Health check registry and aggregator.

This module provides the HealthRegistry class, which keeps three independent
sets of named health checks and runs them on demand:

- general checks, reported by /health
- liveness checks, reported by /health/live
- readiness checks, reported by /health/ready

Checks run synchronously in the calling thread, one after another. A check
that raises is reported as a DOWN component and never aborts the remaining
checks.
"""

import logging
import threading
import time
from enum import Enum
from typing import Any, Optional

from errors.exceptions import component_not_found
from health.checks import CheckFailed, CheckOutcome, HealthCheck, evaluate_check
from health.report import ComponentReport, HealthReport
from health.status import HealthState, HealthStatus

logger = logging.getLogger(__name__)

AGGREGATE_FAILURE_MESSAGE = "Check threw exception"
COMPONENT_FAILURE_MESSAGE = "Check failed"


class CheckKind(str, Enum):
    """The three independently addressable sets of health checks."""
    GENERAL = "general"
    LIVENESS = "liveness"
    READINESS = "readiness"


class HealthRegistry:
    """
    Registry of named health checks with status aggregation.

    A registry is created at application start-up, populated by start-up
    code and handed to the health endpoints. Registries do not share state,
    so tests can build their own instead of resetting a global one.

    Example:
        registry = HealthRegistry()
        registry.register("database", lambda: (
            HealthStatus.up() if db.ping() else HealthStatus.down("Connection failed")
        ))
        report = registry.check()
        report.http_status  # 200 or 503

    Attributes:
        telemetry: Optional TelemetryService used to time each check
    """

    def __init__(self, telemetry: Optional[Any] = None):
        """
        Initialize an empty registry.

        Args:
            telemetry: Optional telemetry service; when set, each check runs
                inside a span and its duration is recorded as a metric
        """
        self.telemetry = telemetry
        self._lock = threading.RLock()
        self._checks: dict[str, HealthCheck] = {}
        self._liveness_checks: dict[str, HealthCheck] = {}
        self._readiness_checks: dict[str, HealthCheck] = {}

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, name: str, check: HealthCheck) -> None:
        """
        Register a general health check.

        The check is also registered as a readiness check. Registering the
        same name again replaces the previous check.
        """
        with self._lock:
            self._checks[name] = check
            self._readiness_checks[name] = check
        logger.debug(f"Registered health check '{name}'")

    def register_liveness(self, name: str, check: HealthCheck) -> None:
        """Register a liveness check (is the process alive?)."""
        with self._lock:
            self._liveness_checks[name] = check
        logger.debug(f"Registered liveness check '{name}'")

    def register_readiness(self, name: str, check: HealthCheck) -> None:
        """Register a readiness check (is the process ready for traffic?)."""
        with self._lock:
            self._readiness_checks[name] = check
        logger.debug(f"Registered readiness check '{name}'")

    def unregister(self, name: str) -> None:
        """Remove a check from all three sets. Unknown names are ignored."""
        with self._lock:
            self._checks.pop(name, None)
            self._liveness_checks.pop(name, None)
            self._readiness_checks.pop(name, None)
        logger.debug(f"Unregistered health check '{name}'")

    def clear(self) -> None:
        """Remove every registered check."""
        with self._lock:
            self._checks.clear()
            self._liveness_checks.clear()
            self._readiness_checks.clear()

    def names(self, kind: CheckKind = CheckKind.GENERAL) -> list[str]:
        """Names registered in one check set, in registration order."""
        with self._lock:
            return list(self._mapping(kind))

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def check(self) -> HealthReport:
        """Run every general check and aggregate the results."""
        return self._aggregate(self._snapshot(CheckKind.GENERAL))

    def check_liveness(self) -> HealthReport:
        """
        Run the liveness checks.

        With no liveness checks registered the process is alive by virtue of
        answering, so the report is UP without any components.
        """
        checks = self._snapshot(CheckKind.LIVENESS)
        if not checks:
            return HealthReport(status=HealthState.UP)
        return self._aggregate(checks)

    def check_readiness(self) -> HealthReport:
        """Run the readiness checks and aggregate the results."""
        return self._aggregate(self._snapshot(CheckKind.READINESS))

    def check_component(self, name: str) -> ComponentReport:
        """
        Run a single general check by name.

        Args:
            name: The registered check name

        Returns:
            ComponentReport for the check; a check that raises is reported
            as DOWN with message "Check failed"

        Raises:
            AppException: RESOURCE_NOT_FOUND if no general check has this name
        """
        with self._lock:
            check = self._checks.get(name)
        if check is None:
            raise component_not_found(name)

        outcome = self._run(name, check)
        if isinstance(outcome, CheckFailed):
            return ComponentReport(
                name=name,
                status=HealthStatus.down_with_error(COMPONENT_FAILURE_MESSAGE, outcome.error),
            )
        return ComponentReport(name=name, status=outcome.status)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _mapping(self, kind: CheckKind) -> dict[str, HealthCheck]:
        if kind == CheckKind.LIVENESS:
            return self._liveness_checks
        if kind == CheckKind.READINESS:
            return self._readiness_checks
        return self._checks

    def _snapshot(self, kind: CheckKind) -> list[tuple[str, HealthCheck]]:
        # Checks run against this copy, outside the lock
        with self._lock:
            return list(self._mapping(kind).items())

    def _aggregate(self, checks: list[tuple[str, HealthCheck]]) -> HealthReport:
        components: dict[str, dict[str, Any]] = {}
        all_up = True
        any_degraded = False

        for name, check in checks:
            outcome = self._run(name, check)
            if isinstance(outcome, CheckFailed):
                components[name] = HealthStatus.down_with_error(
                    AGGREGATE_FAILURE_MESSAGE, outcome.error
                ).to_dict()
                all_up = False
                continue

            status = outcome.status
            components[name] = status.to_dict()
            if status.is_down:
                all_up = False
            elif status.state == HealthState.DEGRADED:
                any_degraded = True

        if not all_up:
            overall = HealthState.DOWN
        elif any_degraded:
            overall = HealthState.DEGRADED
        else:
            overall = HealthState.UP

        return HealthReport(status=overall, components=components)

    def _run(self, name: str, check: HealthCheck) -> CheckOutcome:
        start_time = time.perf_counter()

        if self.telemetry is not None:
            with self.telemetry.create_span("health.check", {"health.check.name": name}):
                outcome = evaluate_check(check)
        else:
            outcome = evaluate_check(check)

        elapsed_ms = (time.perf_counter() - start_time) * 1000

        if isinstance(outcome, CheckFailed):
            logger.error(
                f"Health check '{name}' threw exception",
                exc_info=outcome.error,
                extra={"extra_data": {"check": name, "duration_ms": round(elapsed_ms, 2)}},
            )
            result = "error"
        else:
            result = outcome.status.state.value.lower()
            logger.debug(f"Health check '{name}' returned {outcome.status.state.value} in {elapsed_ms:.2f}ms")

        if self.telemetry is not None:
            self.telemetry.record_metric(
                "health.check.duration_ms",
                elapsed_ms,
                tags={"check": name, "result": result},
            )

        return outcome
