"""
Application Use Case - Rate Prediction

Orchestrates a prediction for a SensorThings datastream:
  * Fetch the observations inside the lookback window
  * Fall back to the latest two observations when the window is too sparse
  * Extrapolate the mean rate of change to the target time
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import structlog

from gost_predict.domain.entities.errors import InsufficientDataError
from gost_predict.domain.entities.observation import (
    Observation,
    PredictionRequest,
    PredictionResult,
)
from gost_predict.domain.gateways.observation_gateway import IObservationGateway
from gost_predict.domain.services.rate_extrapolator import (
    MIN_OBSERVATIONS,
    extrapolate,
)
from gost_predict.domain.services.sensorthings_query import (
    build_latest_query,
    build_window_query,
)

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _window_start(now: datetime, span_minutes: int) -> datetime:
    """Start of the lookback window, clamped to the earliest representable instant."""
    try:
        return now - timedelta(minutes=span_minutes)
    except OverflowError:
        return datetime.min.replace(tzinfo=timezone.utc)


class PredictionUseCase:
    """Coordinates observation retrieval and rate extrapolation."""

    def __init__(
        self,
        observation_gateway: IObservationGateway,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.observation_gateway = observation_gateway
        self._clock = clock or _utc_now

    async def execute(self, request: PredictionRequest) -> PredictionResult:
        """Predict the datastream value at the request's target time."""

        now = self._clock()

        logger.info(
            "prediction.start",
            host=request.source_base_url,
            datastream=request.datastream_id,
            target_time=request.target_time.isoformat(),
            span_minutes=request.lookback_span_minutes,
        )

        observations = await self._collect_observations(request, now)

        result = extrapolate(observations, request.target_time, now=now)

        logger.info(
            "prediction.completed",
            datastream=request.datastream_id,
            observations=len(observations),
            rate=result.rate,
            prediction=result.prediction,
        )
        return result

    async def _collect_observations(
        self, request: PredictionRequest, now: datetime
    ) -> List[Observation]:
        since = _window_start(now, request.lookback_span_minutes)
        window_url = build_window_query(
            request.source_base_url, request.datastream_id, since
        )
        observations = await self.observation_gateway.fetch_observations(window_url)

        if len(observations) >= MIN_OBSERVATIONS:
            return observations

        # Not enough data in the window, use the latest samples instead.
        logger.info(
            "prediction.fallback",
            datastream=request.datastream_id,
            window_observations=len(observations),
            since=since.isoformat(),
        )
        latest_url = build_latest_query(
            request.source_base_url, request.datastream_id, top=MIN_OBSERVATIONS
        )
        observations = await self.observation_gateway.fetch_observations(latest_url)

        if len(observations) < MIN_OBSERVATIONS:
            logger.warning(
                "prediction.insufficient_data",
                datastream=request.datastream_id,
                available=len(observations),
            )
            raise InsufficientDataError(
                len(observations),
                message=(
                    f"Insufficient data to make a prediction: datastream "
                    f"{request.datastream_id} has {len(observations)} "
                    f"observation(s), at least {MIN_OBSERVATIONS} are required"
                ),
            )

        return observations
