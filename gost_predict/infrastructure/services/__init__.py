"""Infrastructure services package."""

from .sensorthings_probe import SensorThingsProbe

__all__ = ["SensorThingsProbe"]
