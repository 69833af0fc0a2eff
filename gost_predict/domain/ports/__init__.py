"""Domain ports package."""

from .source_probe import ISourceProbe

__all__ = ["ISourceProbe"]
