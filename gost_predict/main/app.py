"""
ASGI Application - Main Layer

``app`` is what uvicorn serves. Logging is bootstrapped from the environment
before settings load, then reconfigured from them.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gost_predict.main.config import get_settings
from gost_predict.main.container import init_container
from gost_predict.presentation.controllers import predictions_router, system_router
from gost_predict.presentation.error_handlers import register_error_handlers
from gost_predict.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

configure_logging()
update_logging_from_settings(get_settings())

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Every prediction opens its own HTTP clients; only the start time is kept.
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("app.startup", title=app.title, version=app.version)
    yield
    logger.info("app.shutdown")


def create_app() -> FastAPI:
    """Build the FastAPI application around a fresh container."""
    settings = get_settings()
    container = init_container(settings)

    app = FastAPI(
        title=settings.ge.title,
        description=settings.ge.description,
        version=settings.ge.version,
        debug=settings.ge.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(predictions_router)
    app.include_router(system_router)
    return app


app = create_app()
