"""
Health status model.

This module defines the value returned by every health check: a state
(UP, DOWN or DEGRADED), an optional human-readable message and an optional
mapping of diagnostic details.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class HealthState(str, Enum):
    """Possible states reported by a health check."""
    UP = "UP"
    DOWN = "DOWN"
    DEGRADED = "DEGRADED"


@dataclass(frozen=True)
class HealthStatus:
    """
    Immutable result of a single health check.

    Attributes:
        state: The reported state
        message: Optional explanation, typically set on DOWN or DEGRADED
        details: Diagnostic payload merged into the serialized form

    Example:
        registry.register("database", lambda: (
            HealthStatus.up() if pool.ping() else HealthStatus.down("Connection failed")
        ))
    """
    state: HealthState
    message: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Raises ValueError for anything other than UP, DOWN or DEGRADED
        object.__setattr__(self, "state", HealthState(self.state))
        object.__setattr__(self, "details", dict(self.details or {}))

    @classmethod
    def up(cls, message: Optional[str] = None) -> "HealthStatus":
        return cls(HealthState.UP, message)

    @classmethod
    def down(cls, message: Optional[str] = None) -> "HealthStatus":
        return cls(HealthState.DOWN, message)

    @classmethod
    def down_with_error(cls, message: str, error: BaseException) -> "HealthStatus":
        """Create a DOWN status carrying the error type and text as details."""
        return cls(
            HealthState.DOWN,
            message,
            {
                "error": type(error).__name__,
                "errorMessage": str(error),
            },
        )

    @classmethod
    def degraded(cls, message: Optional[str] = None) -> "HealthStatus":
        return cls(HealthState.DEGRADED, message)

    def with_detail(self, key: str, value: Any) -> "HealthStatus":
        """Return a copy of this status with one more detail entry."""
        return HealthStatus(self.state, self.message, {**self.details, key: value})

    @property
    def is_up(self) -> bool:
        return self.state == HealthState.UP

    @property
    def is_down(self) -> bool:
        return self.state == HealthState.DOWN

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"status": self.state.value}
        if self.message is not None:
            result["message"] = self.message
        result.update(self.details)
        return result
