"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the SensorThings
HTTP API and dependency probing.
"""

from gost_predict.infrastructure import gateways, services

__all__ = ["gateways", "services"]
