"""Operational endpoints: health and service info."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request

from gost_predict.application.dtos.health_dto import (
    HealthResponseDTO,
    ServiceInfoResponseDTO,
)
from gost_predict.application.use_cases.health_use_cases import (
    GetHealthUseCase,
    GetServiceInfoUseCase,
)

router = APIRouter(tags=["System"])


@router.get(
    "/health",
    response_model=HealthResponseDTO,
    summary="Service health",
    description="Probe the reference SensorThings server, when one is configured.",
)
@inject
async def health(
    get_health_use_case: GetHealthUseCase = Depends(Provide["get_health_use_case"]),
) -> HealthResponseDTO:
    return await get_health_use_case.execute()


@router.get("/info", response_model=ServiceInfoResponseDTO, summary="Service info")
@inject
async def info(
    request: Request,
    get_service_info_use_case: GetServiceInfoUseCase = Depends(
        Provide["get_service_info_use_case"]
    ),
) -> ServiceInfoResponseDTO:
    started_at = getattr(request.app.state, "started_at", None)
    return await get_service_info_use_case.execute(started_at)
