"""
Health reports returned to monitoring callers.

Each report knows its JSON body and the HTTP status code the embedding
web layer should answer with.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from health.status import HealthState, HealthStatus

HTTP_OK = 200
HTTP_SERVICE_UNAVAILABLE = 503


def utc_timestamp() -> str:
    """Current instant as an ISO-8601 UTC string ending in 'Z'."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class HealthReport:
    """
    Aggregated result of running a set of health checks.

    Attributes:
        status: Overall state after applying DOWN > DEGRADED > UP precedence
        timestamp: When the aggregation was performed
        components: Serialized status of every check, in registration order
    """
    status: HealthState
    timestamp: str = field(default_factory=utc_timestamp)
    components: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def http_status(self) -> int:
        # DEGRADED still serves traffic
        if self.status == HealthState.DOWN:
            return HTTP_SERVICE_UNAVAILABLE
        return HTTP_OK

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "status": self.status.value,
            "timestamp": self.timestamp,
        }
        if self.components:
            result["components"] = self.components
        return result


@dataclass
class ComponentReport:
    """Result of running a single named health check."""
    name: str
    status: HealthStatus

    @property
    def http_status(self) -> int:
        return HTTP_OK if self.status.is_up else HTTP_SERVICE_UNAVAILABLE

    def to_dict(self) -> dict[str, Any]:
        return self.status.to_dict()
