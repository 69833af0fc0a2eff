"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers validate query parameters,
call the application use cases and map domain errors to HTTP errors.
"""

from .predictions_controller import router as predictions_router
from .system_controller import router as system_router

__all__ = ["predictions_router", "system_router"]
