"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .errors import (
    DomainError,
    InsufficientDataError,
    NumericCoercionError,
    ObservationFetchError,
    ParameterValidationError,
    PredictionError,
)
from .health import (
    HealthReport,
    ProbeAttempt,
    ServiceInfo,
    ServiceStatus,
    SourceProbe,
)
from .observation import (
    Observation,
    ObservationPage,
    PredictionRequest,
    PredictionResult,
)

__all__ = [
    "Observation",
    "ObservationPage",
    "PredictionRequest",
    "PredictionResult",
    "ServiceStatus",
    "ProbeAttempt",
    "SourceProbe",
    "HealthReport",
    "ServiceInfo",
    "DomainError",
    "PredictionError",
    "ParameterValidationError",
    "ObservationFetchError",
    "InsufficientDataError",
    "NumericCoercionError",
]
