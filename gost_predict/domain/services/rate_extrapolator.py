"""
Domain Service - Rate Extrapolator

Turns a newest-first sequence of observations into a linear forecast: the
per-interval rates of change are averaged and projected from the freshest
known value to the target time.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from gost_predict.domain.entities.errors import (
    InsufficientDataError,
    NumericCoercionError,
)
from gost_predict.domain.entities.observation import (
    Observation,
    ObservationResult,
    PredictionResult,
)

MIN_OBSERVATIONS = 2

_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def coerce_result(result: ObservationResult) -> float:
    """
    Convert a loosely-typed observation result into a float.

    Numbers are accepted as they are and strings must hold a plain decimal
    literal. Anything else, including non-finite values, is rejected.

    Raises:
        NumericCoercionError: When the result is not a finite number
    """
    if isinstance(result, bool):
        raise NumericCoercionError(
            f"Unable to convert observation result to a number: {result!r}",
            details={"result": result},
        )

    if not (
        isinstance(result, (int, float))
        or (isinstance(result, str) and _DECIMAL_PATTERN.match(result))
    ):
        raise NumericCoercionError(
            f"Unable to convert observation result to a number: {result!r}",
            details={"result": result},
        )

    try:
        value = float(result)
    except OverflowError as exc:
        raise NumericCoercionError(
            f"Observation result is not a finite number: {result!r}",
            details={"result": result},
        ) from exc

    if not math.isfinite(value):
        raise NumericCoercionError(
            f"Observation result is not a finite number: {result!r}",
            details={"result": result},
        )
    return value


def _minutes(delta_seconds: float) -> float:
    return delta_seconds / 60.0


def _interval_rates(points: Sequence[Tuple[datetime, float]]) -> List[float]:
    rates: List[float] = []
    for (newer_time, newer_value), (older_time, older_value) in zip(
        points, points[1:]
    ):
        delta_minutes = _minutes((newer_time - older_time).total_seconds())
        if delta_minutes == 0:
            raise NumericCoercionError(
                "Zero-length interval between observations at "
                f"{older_time.isoformat()}",
                details={"timestamp": older_time.isoformat()},
            )
        rates.append((newer_value - older_value) / delta_minutes)
    return rates


def extrapolate(
    observations: Sequence[Observation],
    target_time: datetime,
    *,
    now: Optional[datetime] = None,
    anchor_to_now: bool = True,
) -> PredictionResult:
    """
    Extrapolate the value of a datastream at ``target_time``.

    Args:
        observations: Observations ordered newest first (at least two)
        target_time: Timezone-aware instant to predict the value for
        now: Current instant, defaults to the UTC clock
        anchor_to_now: Prepend a synthetic observation at ``now`` carrying the
            freshest value, so a stale sample flattens the average rate.
            Skipped when the freshest sample is not older than ``now``

    Returns:
        PredictionResult with the mean rate per minute and the prediction

    Raises:
        InsufficientDataError: When fewer than two observations are given
        NumericCoercionError: When a result is not numeric or two points share
            a timestamp
    """
    if len(observations) < MIN_OBSERVATIONS:
        raise InsufficientDataError(len(observations))

    current = now or datetime.now(timezone.utc)

    # Every result is coerced before any rate is computed.
    points = [(obs.timestamp, coerce_result(obs.result)) for obs in observations]
    last_known = points[0][1]

    # A sample taken at or after ``now`` is not stale.
    if anchor_to_now and points[0][0] < current:
        points.insert(0, (current, last_known))

    rates = _interval_rates(points)
    mean_rate = sum(rates) / len(rates)

    minutes_ahead = _minutes((target_time - current).total_seconds())

    return PredictionResult(
        rate=mean_rate,
        prediction=last_known + minutes_ahead * mean_rate,
    )
