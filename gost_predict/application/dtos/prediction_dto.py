"""
Application DTOs - Prediction

Data Transfer Objects for the prediction endpoint and its error envelope.
"""

from pydantic import BaseModel, Field

from gost_predict.domain.entities.observation import PredictionResult


class PredictionResponseDTO(BaseModel):
    """DTO returned by the prediction endpoint."""

    rate: float = Field(description="Average change of the value per minute")
    prediction: float = Field(description="Extrapolated value at the target time")

    @classmethod
    def from_domain(cls, result: PredictionResult) -> "PredictionResponseDTO":
        return cls(rate=result.rate, prediction=result.prediction)

    model_config = {
        "json_schema_extra": {"example": {"rate": 0.1, "prediction": 22.5}}
    }


class ErrorResponseDTO(BaseModel):
    """Error envelope shared by every endpoint."""

    status: int = Field(description="HTTP status code")
    error: str = Field(description="Human readable error message")

    model_config = {
        "json_schema_extra": {
            "example": {"status": 400, "error": "missing datastream param"}
        }
    }
