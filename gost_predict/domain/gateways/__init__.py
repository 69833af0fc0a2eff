"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .observation_gateway import IObservationGateway

__all__ = ["IObservationGateway"]
