"""Domain port for probing the reference observation store."""

from __future__ import annotations

from typing import Protocol

from gost_predict.domain.entities.health import SourceProbe


class ISourceProbe(Protocol):
    async def check(self) -> SourceProbe:
        """Probe the reference SensorThings server once."""
        ...
