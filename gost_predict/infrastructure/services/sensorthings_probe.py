"""
Infrastructure Service - SensorThings Probe

Checks that the reference SensorThings server answers, trying the service
document at /v1.0 before the bare base URL.
"""

from __future__ import annotations

from datetime import datetime, timezone
from time import perf_counter
from typing import List, Optional

import httpx
import structlog

from gost_predict.domain.entities.health import (
    ProbeAttempt,
    ServiceStatus,
    SourceProbe,
)

logger = structlog.get_logger(__name__)

SERVICE_ROOT = "/v1.0"


def status_for_code(status_code: int) -> ServiceStatus:
    if status_code >= 500:
        return ServiceStatus.DOWN
    if status_code >= 400:
        return ServiceStatus.DEGRADED
    return ServiceStatus.UP


class SensorThingsProbe:
    """Reachability probe implementing ``ISourceProbe`` over httpx."""

    def __init__(self, probe_url: Optional[str] = None, timeout: float = 5.0):
        self.probe_url = probe_url
        self.timeout = timeout

    def candidate_urls(self) -> List[str]:
        base = (self.probe_url or "").rstrip("/")
        if base.endswith(SERVICE_ROOT):
            return [base]
        return [f"{base}{SERVICE_ROOT}", base]

    async def check(self) -> SourceProbe:
        checked_at = datetime.now(timezone.utc)
        if not self.probe_url:
            return SourceProbe(
                status=ServiceStatus.UNKNOWN,
                message="Probe URL not configured",
                checked_at=checked_at,
            )

        attempts: List[ProbeAttempt] = []
        start = perf_counter()
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for url in self.candidate_urls():
                attempt = await self._attempt(client, url)
                attempts.append(attempt)
                if attempt.status is not ServiceStatus.DOWN:
                    break
        latency_ms = (perf_counter() - start) * 1000

        last = attempts[-1]
        if last.status_code is None:
            message = f"HTTP request failed: {last.error}"
        else:
            message = f"HTTP {last.status_code}"

        logger.debug(
            "sensorthings.probe",
            status=last.status.value,
            attempts=len(attempts),
            latency_ms=round(latency_ms, 1),
        )
        return SourceProbe(
            status=last.status,
            message=message,
            checked_at=checked_at,
            latency_ms=latency_ms,
            attempts=tuple(attempts),
        )

    async def _attempt(self, client: httpx.AsyncClient, url: str) -> ProbeAttempt:
        try:
            response = await client.get(url)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            return ProbeAttempt(url=url, status=ServiceStatus.DOWN, error=str(exc))
        return ProbeAttempt(
            url=url,
            status=status_for_code(response.status_code),
            status_code=response.status_code,
        )
