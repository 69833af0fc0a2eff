"""
Application Layer Package

This package contains the application-specific business rules
and use cases. It orchestrates the flow of data between the
observation gateway and the domain services.
"""

# Re-export submodules
from gost_predict.application import dtos, models, use_cases

__all__ = ["dtos", "use_cases", "models"]
