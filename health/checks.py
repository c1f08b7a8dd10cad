"""
Health check evaluation.

A health check is any zero-argument callable returning a HealthStatus.
evaluate_check() runs one and reports the result as an explicit outcome
instead of letting the check's exception escape, so one broken dependency
never hides the state of the others.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Union

from health.status import HealthStatus

logger = logging.getLogger(__name__)

HealthCheck = Callable[[], HealthStatus]


@dataclass(frozen=True)
class CheckPassed:
    """The check returned normally with a status."""
    status: HealthStatus


@dataclass(frozen=True)
class CheckFailed:
    """The check raised instead of returning a status."""
    error: Exception


CheckOutcome = Union[CheckPassed, CheckFailed]


def evaluate_check(check: HealthCheck) -> CheckOutcome:
    """
    Invoke a health check with its failures isolated.

    Args:
        check: The health check to invoke

    Returns:
        CheckPassed with the returned status, or CheckFailed carrying the
        exception raised by the check
    """
    try:
        status = check()
    except Exception as e:
        return CheckFailed(error=e)

    if not isinstance(status, HealthStatus):
        return CheckFailed(
            error=TypeError(
                f"Health check returned {type(status).__name__}, expected HealthStatus"
            )
        )
    return CheckPassed(status=status)


def with_timeout(check: HealthCheck, timeout: float) -> HealthCheck:
    """
    Wrap a health check so that it reports DOWN when it runs too long.

    The registry never bounds check latency itself; registrants that call
    slow dependencies wrap their check with this before registering it.
    The check runs on a daemon thread. A slow call keeps running after the
    timeout but never blocks interpreter shutdown.

    Args:
        check: The health check to bound
        timeout: Maximum time to wait in seconds

    Returns:
        A health check with the same result as `check`, or a DOWN status
        if `check` does not finish within `timeout` seconds
    """
    def _bounded() -> HealthStatus:
        finished = threading.Event()
        result: dict[str, Any] = {}

        def _target() -> None:
            try:
                result["status"] = check()
            except Exception as e:
                result["error"] = e
            finally:
                finished.set()

        threading.Thread(target=_target, name="health-check", daemon=True).start()

        if not finished.wait(timeout):
            logger.warning(f"Health check timed out after {timeout} seconds")
            return HealthStatus.down(f"Check timed out after {timeout}s")

        # Errors raised by the check itself, TimeoutError included
        if "error" in result:
            raise result["error"]
        return result["status"]

    return _bounded
