"""
gost-predict

Predicts the value of a SensorThings datastream at a future instant by
extrapolating the average rate of change of its recent observations.

Layer Structure:
- Domain: Entities, error taxonomy, gateway contracts and the rate extrapolator
- Application: Prediction and health use cases, DTOs
- Infrastructure: SensorThings HTTP gateway and health probes
- Presentation: FastAPI controllers and the error envelope
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, settings and server entry point
"""
