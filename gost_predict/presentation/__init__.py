"""
Presentation Layer Package

This package contains the presentation layer components,
which are responsible for handling HTTP requests and responses,
including API routes, controllers and the error envelope.
"""

from gost_predict.presentation import controllers, error_handlers

__all__ = ["controllers", "error_handlers"]
