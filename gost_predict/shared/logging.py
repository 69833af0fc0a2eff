"""
Logging Configuration - Shared Layer

structlog renders both the service's own events and the records emitted
through the standard library by uvicorn and httpx. Development gets the
console renderer, production one JSON object per line.
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from gost_predict.shared.consts import EnumEnvironment

# Per-request INFO records of the HTTP client are capped at WARNING.
NOISY_LOGGERS = ("httpx", "httpcore")

# uvicorn records go through the root handlers.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _pre_chain() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(environment: str) -> Processor:
    if str(environment).lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Route structlog and stdlib logging through the same handlers.

    Called once at import of the entry points with LOG_LEVEL / LOG_FILE_PATH
    from the environment, then again once settings are loaded.
    """
    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    log_file = file_path or os.environ.get("LOG_FILE_PATH")
    numeric_level = getattr(logging, level_name, logging.INFO)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(environment),
        ],
    )
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    get_logger(__name__).debug(
        "logging.configured", level=level_name, file_path=log_file
    )


def update_logging_from_settings(settings: Any) -> None:
    """Reconfigure logging from loaded ``AppSettings``."""
    level = settings.logging.level
    environment = settings.environment
    configure_logging(
        level=getattr(level, "value", level),
        file_path=settings.logging.file_path,
        environment=getattr(environment, "value", environment),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
