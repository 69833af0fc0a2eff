"""Domain entities for SensorThings observations and rate predictions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

# Raw JSON scalar carried by the SensorThings "result" field.
ObservationResult = Any


@dataclass(frozen=True, slots=True)
class Observation:
    """A single sample of a datastream, with its result as received."""

    timestamp: datetime
    result: ObservationResult


@dataclass(frozen=True, slots=True)
class ObservationPage:
    """One page of an observation collection and its continuation link."""

    observations: List[Observation] = field(default_factory=list)
    next_link: Optional[str] = None
    count: Optional[int] = None

    @property
    def has_next(self) -> bool:
        return bool(self.next_link)


@dataclass(frozen=True, slots=True)
class PredictionRequest:
    """Validated input of a prediction."""

    source_base_url: str
    datastream_id: str
    target_time: datetime
    lookback_span_minutes: int


@dataclass(frozen=True, slots=True)
class PredictionResult:
    """Average rate of change per minute and the value extrapolated from it."""

    rate: float
    prediction: float
