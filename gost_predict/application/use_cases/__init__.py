"""
Use Cases Package - Application Layer

Use cases orchestrate the domain services and gateways behind each endpoint.
"""

from .health_use_cases import GetHealthUseCase, GetServiceInfoUseCase
from .prediction_use_case import PredictionUseCase

__all__ = [
    "PredictionUseCase",
    "GetHealthUseCase",
    "GetServiceInfoUseCase",
]
