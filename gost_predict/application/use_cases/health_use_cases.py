"""Use cases behind the /health and /info endpoints."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from gost_predict.application.dtos.health_dto import (
    HealthResponseDTO,
    ServiceInfoResponseDTO,
)
from gost_predict.application.models import SensorThingsClientConfig, ServiceMetadata
from gost_predict.domain.entities.health import HealthReport, ServiceInfo
from gost_predict.domain.ports.source_probe import ISourceProbe


def redact_credentials(url: Optional[str]) -> Optional[str]:
    """Drop the user info part of a URL."""
    if not url:
        return url
    parts = urlsplit(url)
    if "@" not in parts.netloc:
        return url
    return urlunsplit(parts._replace(netloc=parts.netloc.rsplit("@", 1)[1]))


class GetHealthUseCase:
    def __init__(self, source_probe: ISourceProbe) -> None:
        self._source_probe = source_probe

    async def execute(self) -> HealthResponseDTO:
        report = HealthReport.from_probe(await self._source_probe.check())
        return HealthResponseDTO.model_validate(report, from_attributes=True)


class GetServiceInfoUseCase:
    """Combine build metadata, uptime, health and client settings."""

    def __init__(
        self,
        source_probe: ISourceProbe,
        metadata: ServiceMetadata,
        client_config: SensorThingsClientConfig,
    ) -> None:
        self._source_probe = source_probe
        self._metadata = metadata
        self._client_config = client_config

    async def execute(self, started_at: Optional[datetime]) -> ServiceInfoResponseDTO:
        report = HealthReport.from_probe(await self._source_probe.check())

        now = datetime.now(timezone.utc)
        started = started_at or now

        info = ServiceInfo(
            name=self._metadata.title,
            description=self._metadata.description,
            version=self._metadata.version,
            environment=self._metadata.environment,
            git_commit=self._metadata.git_commit,
            build_time=self._metadata.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            health=report,
            sensorthings_client={
                "timeout_seconds": self._client_config.timeout,
                "max_pages": self._client_config.max_pages,
                "probe_url": redact_credentials(self._client_config.probe_url),
            },
        )
        return ServiceInfoResponseDTO.model_validate(info, from_attributes=True)
