"""
Composition Root - Main Layer

Binds settings to the SensorThings gateway, the health probe and the use
cases. Controllers receive the use cases through ``Provide[...]`` markers.
"""

from dependency_injector import containers, providers

from gost_predict.application.models import SensorThingsClientConfig, ServiceMetadata
from gost_predict.application.use_cases.health_use_cases import (
    GetHealthUseCase,
    GetServiceInfoUseCase,
)
from gost_predict.application.use_cases.prediction_use_case import PredictionUseCase
from gost_predict.infrastructure.gateways.sensorthings_gateway import (
    SensorThingsGateway,
)
from gost_predict.infrastructure.services.sensorthings_probe import SensorThingsProbe
from gost_predict.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _enum_value(value):
    return getattr(value, "value", value)


class AppContainer(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    config = providers.Configuration()

    sensorthings_gateway = providers.Singleton(
        SensorThingsGateway,
        timeout=config.sensorthings.timeout,
        max_pages=config.sensorthings.max_pages,
    )

    sensorthings_probe = providers.Singleton(
        SensorThingsProbe,
        probe_url=config.sensorthings.probe_url,
        timeout=config.sensorthings.probe_timeout,
    )

    service_metadata = providers.Singleton(
        ServiceMetadata,
        title=config.ge.title,
        description=config.ge.description,
        version=config.ge.version,
        environment=providers.Callable(_enum_value, config.environment),
        git_commit=config.ge.git_commit,
        build_time=config.ge.build_time,
    )

    sensorthings_client_config = providers.Singleton(
        SensorThingsClientConfig,
        timeout=config.sensorthings.timeout,
        max_pages=config.sensorthings.max_pages,
        probe_url=config.sensorthings.probe_url,
    )

    prediction_use_case = providers.Factory(
        PredictionUseCase,
        observation_gateway=sensorthings_gateway,
    )

    get_health_use_case = providers.Factory(
        GetHealthUseCase,
        source_probe=sensorthings_probe,
    )

    get_service_info_use_case = providers.Factory(
        GetServiceInfoUseCase,
        source_probe=sensorthings_probe,
        metadata=service_metadata,
        client_config=sensorthings_client_config,
    )


_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Create the container from settings and make it the global one."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    logger.debug(
        "container.initialized",
        sensorthings_timeout=settings.sensorthings.timeout,
        sensorthings_max_pages=settings.sensorthings.max_pages,
    )
    return container


def get_container() -> AppContainer:
    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")
    return _app_container
