"""Plain settings snapshots handed to the operational use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ServiceMetadata:
    title: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str


@dataclass(frozen=True)
class SensorThingsClientConfig:
    """Effective SensorThings client settings, as reported by /info."""

    timeout: float
    max_pages: Optional[int] = None
    probe_url: Optional[str] = None
