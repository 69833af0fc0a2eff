"""
Application DTOs - Health

Response models of /health and /info, validated straight from the health
entities.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from gost_predict.domain.entities.health import ServiceStatus

_SENSORTHINGS_EXAMPLE = {
    "status": "up",
    "message": "HTTP 200",
    "checked_at": "2024-09-09T12:00:00Z",
    "latency_ms": 21.4,
    "attempts": [
        {
            "url": "http://gost:8080/v1.0",
            "status": "up",
            "status_code": 200,
            "error": None,
        }
    ],
}


class ProbeAttemptDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    url: str
    status: ServiceStatus
    status_code: Optional[int] = None
    error: Optional[str] = None


class SourceProbeDTO(BaseModel):
    """Reachability of the reference SensorThings server."""

    model_config = ConfigDict(from_attributes=True)

    status: ServiceStatus = Field(description="Probe outcome")
    message: str = Field(description="HTTP status or transport error")
    checked_at: datetime = Field(description="When the probe started")
    latency_ms: Optional[float] = Field(
        default=None, description="Time spent on every attempt, in milliseconds"
    )
    attempts: List[ProbeAttemptDTO] = Field(default_factory=list)


class HealthResponseDTO(BaseModel):
    """DTO returned by /health."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {"status": "up", "sensorthings": _SENSORTHINGS_EXAMPLE}
        },
    )

    status: ServiceStatus = Field(description="Overall service status")
    sensorthings: SourceProbeDTO


class ServiceInfoResponseDTO(BaseModel):
    """DTO returned by /info."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "name": "gost-predict",
                "description": "Rate based prediction service for SensorThings",
                "version": "1.0.0",
                "environment": "development",
                "git_commit": "abcdef1",
                "build_time": "2024-09-09T11:30:00Z",
                "started_at": "2024-09-09T12:00:00Z",
                "uptime_seconds": 3600.5,
                "health": {"status": "up", "sensorthings": _SENSORTHINGS_EXAMPLE},
                "sensorthings_client": {
                    "timeout_seconds": 30.0,
                    "max_pages": None,
                    "probe_url": "http://gost:8080",
                },
            }
        },
    )

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float = Field(description="Seconds since startup")
    health: HealthResponseDTO
    sensorthings_client: Dict[str, Any] = Field(
        description="Effective SensorThings client settings"
    )
