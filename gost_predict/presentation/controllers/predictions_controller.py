"""
Presentation Layer - Predictions Controller

Exposes the rate based prediction of a SensorThings datastream.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from gost_predict.application.dtos.prediction_dto import (
    ErrorResponseDTO,
    PredictionResponseDTO,
)
from gost_predict.application.use_cases.prediction_use_case import (
    PredictionUseCase,
)
from gost_predict.domain.entities.errors import (
    ObservationFetchError,
    PredictionError,
)
from gost_predict.domain.services.request_validator import (
    validate_prediction_params,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Predictions"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponseDTO, "description": "Invalid request or data"},
    502: {"model": ErrorResponseDTO, "description": "Observation store failure"},
}


@router.get(
    "/predict",
    response_model=PredictionResponseDTO,
    responses=_ERROR_RESPONSES,
    summary="Predict a datastream value",
    description="""
    Fetch the observations of a datastream inside the lookback span (or its two
    latest observations when the span holds fewer than two), average their rate
    of change per minute and extrapolate it to the target time.

    Errors use the `{status, error}` envelope. Invalid parameters and unusable
    data answer 400 as before, but a failing SensorThings server now answers
    502 and an unexpected failure 500 instead of the former blanket 400.
    """,
)
@router.get("/Predict", response_model=PredictionResponseDTO, include_in_schema=False)
@inject
async def predict(
    host: Optional[str] = Query(
        default=None, description="Base URL of the SensorThings server"
    ),
    datastream: Optional[str] = Query(default=None, description="Datastream id"),
    time: Optional[str] = Query(
        default=None, description="Target time, YYYY-MM-DDTHH:MM:SS.sssZ"
    ),
    span: Optional[str] = Query(
        default=None, description="Lookback span in minutes"
    ),
    prediction_use_case: PredictionUseCase = Depends(Provide["prediction_use_case"]),
) -> PredictionResponseDTO:
    try:
        request = validate_prediction_params(host, datastream, time, span)
        result = await prediction_use_case.execute(request)
        return PredictionResponseDTO.from_domain(result)
    except ObservationFetchError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    except PredictionError as exc:
        logger.info("prediction.rejected", error=str(exc), kind=type(exc).__name__)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except Exception as exc:  # pragma: no cover
        logger.error(
            "prediction.unexpected_error",
            host=host,
            datastream=datastream,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
