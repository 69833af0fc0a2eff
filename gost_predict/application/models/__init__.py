"""Plain configuration models handed to application use cases."""

from .service_metadata import SensorThingsClientConfig, ServiceMetadata

__all__ = ["ServiceMetadata", "SensorThingsClientConfig"]
