"""Domain service helpers for validating prediction parameters."""

import re
from datetime import datetime, timezone
from typing import Optional

from gost_predict.domain.entities.errors import ParameterValidationError
from gost_predict.domain.entities.observation import PredictionRequest

TARGET_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

_TARGET_TIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?Z$"
)
_SPAN_PATTERN = re.compile(r"^\+?\d+$")


def _require(name: str, value: Optional[str]) -> str:
    if value is None:
        raise ParameterValidationError(f"missing {name} param", parameter=name)
    return value


def parse_target_time(raw: str) -> datetime:
    """Parse ``YYYY-MM-DDTHH:MM:SS.sssZ`` into an aware UTC datetime."""
    if not _TARGET_TIME_PATTERN.match(raw):
        raise ParameterValidationError(
            f"Unable to parse target time: {raw}", parameter="time"
        )

    normalized = raw if "." in raw else f"{raw[:-1]}.0Z"
    try:
        parsed = datetime.strptime(normalized, TARGET_TIME_FORMAT)
    except ValueError as exc:
        raise ParameterValidationError(
            f"Unable to parse target time: {raw}", parameter="time"
        ) from exc
    return parsed.replace(tzinfo=timezone.utc)


def parse_span(raw: str) -> int:
    """Parse the lookback span as a non-negative number of minutes."""
    if not _SPAN_PATTERN.match(raw.strip()):
        raise ParameterValidationError(
            f"Unable to parse span: {raw}", parameter="span"
        )
    return int(raw.strip())


def validate_prediction_params(
    host: Optional[str],
    datastream: Optional[str],
    time: Optional[str],
    span: Optional[str],
) -> PredictionRequest:
    """
    Validate raw prediction parameters.

    Parameters are checked in order, so the first missing one is reported.

    Raises:
        ParameterValidationError: When a parameter is missing or malformed
    """
    host = _require("host", host)
    datastream = _require("datastream", datastream)
    time = _require("time", time)
    span = _require("span", span)

    return PredictionRequest(
        source_base_url=host,
        datastream_id=datastream,
        target_time=parse_target_time(time),
        lookback_span_minutes=parse_span(span),
    )
