"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PredictionError(DomainError):
    """Base class for errors that abort a prediction."""

    pass


class ParameterValidationError(PredictionError):
    """Raised when a prediction parameter is missing or malformed."""

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.parameter = parameter
        super().__init__(message, details)


class ObservationFetchError(PredictionError):
    """Raised when observations cannot be retrieved from the remote source."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.url = url
        super().__init__(message, details)


class InsufficientDataError(PredictionError):
    """Raised when fewer than two observations are available."""

    def __init__(
        self,
        available: int,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.available = available
        message = message or (
            f"Insufficient data to make a prediction: at least 2 observations "
            f"are required, {available} available"
        )
        super().__init__(message, details)


class NumericCoercionError(PredictionError):
    """Raised when an observation cannot take part in the rate computation."""

    pass
