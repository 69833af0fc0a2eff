#!/usr/bin/env python3
"""
Server Entry Point - Main Layer

This module starts the HTTP listener for the prediction service.
The listener address comes from the --host/--port flags, overridden by the
gost_predict_host and gost_predict_port environment variables when they
are set to a non-empty value.
"""

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

import uvicorn

from gost_predict.main.config import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    ServerSettings,
    get_settings,
)
from gost_predict.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListenAddress:
    host: str
    port: int

    @property
    def bind(self) -> str:
        return f"{self.host}:{self.port}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gost-predict",
        description="Rate based prediction service for SensorThings datastreams",
    )
    parser.add_argument(
        "--host",
        "-host",
        default=DEFAULT_HOST,
        help="Host to run the predict service on, can also be set by "
        "environment variable gost_predict_host (default: all interfaces)",
    )
    parser.add_argument(
        "--port",
        "-port",
        type=int,
        default=DEFAULT_PORT,
        help="Port to run the predict service on, can also be set by "
        f"environment variable gost_predict_port (default: {DEFAULT_PORT})",
    )
    return parser


def resolve_listen_address(
    argv: Optional[Sequence[str]] = None,
    server_settings: Optional[ServerSettings] = None,
) -> ListenAddress:
    """Combine flags and environment, the environment taking precedence."""
    args = build_parser().parse_args(argv)
    overrides = server_settings or ServerSettings()

    host = overrides.host if overrides.host is not None else args.host
    port = overrides.port if overrides.port is not None else args.port
    return ListenAddress(host=host, port=port)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the prediction server."""

    configure_logging()
    settings = get_settings()
    update_logging_from_settings(settings)

    address = resolve_listen_address(argv, settings.server)
    logger.info(
        f"Starting gost-predict server: {address.bind}",
        host=address.host,
        port=address.port,
    )

    # An empty host binds every interface.
    uvicorn.run(
        "gost_predict.main.app:app",
        host=address.host or "0.0.0.0",
        port=address.port,
        reload=settings.ge.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
