"""
Health entities for the operational endpoints.

The service keeps no state of its own: its health is the reachability of the
reference SensorThings server it is pointed at, when one is configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ServiceStatus(str, Enum):
    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ProbeAttempt:
    """One GET issued while probing the reference server."""

    url: str
    status: ServiceStatus
    status_code: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SourceProbe:
    """Outcome of probing the reference SensorThings server."""

    status: ServiceStatus
    message: str
    checked_at: datetime
    latency_ms: Optional[float] = None
    attempts: Tuple[ProbeAttempt, ...] = ()


@dataclass(frozen=True, slots=True)
class HealthReport:
    status: ServiceStatus
    sensorthings: SourceProbe

    @classmethod
    def from_probe(cls, probe: SourceProbe) -> "HealthReport":
        """
        Derive the service status from the reference server probe.

        Predictions name their own host, so a failing reference server only
        degrades the service. An unconfigured probe leaves it up.
        """
        if probe.status in (ServiceStatus.DOWN, ServiceStatus.DEGRADED):
            return cls(status=ServiceStatus.DEGRADED, sensorthings=probe)
        return cls(status=ServiceStatus.UP, sensorthings=probe)


@dataclass(frozen=True, slots=True)
class ServiceInfo:
    """Build metadata, uptime and effective client settings for /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    health: HealthReport
    sensorthings_client: Dict[str, Any]
