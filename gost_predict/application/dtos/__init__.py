"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .health_dto import (
    HealthResponseDTO,
    ProbeAttemptDTO,
    ServiceInfoResponseDTO,
    SourceProbeDTO,
)
from .prediction_dto import ErrorResponseDTO, PredictionResponseDTO

__all__ = [
    "PredictionResponseDTO",
    "ErrorResponseDTO",
    "HealthResponseDTO",
    "SourceProbeDTO",
    "ProbeAttemptDTO",
    "ServiceInfoResponseDTO",
]
