"""Domain services: pure functions over domain entities."""

from .rate_extrapolator import coerce_result, extrapolate
from .request_validator import validate_prediction_params
from .sensorthings_query import build_latest_query, build_window_query, encode_url

__all__ = [
    "coerce_result",
    "extrapolate",
    "validate_prediction_params",
    "build_window_query",
    "build_latest_query",
    "encode_url",
]
