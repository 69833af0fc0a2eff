"""
Settings - Main Layer

pydantic-settings models for every configurable concern. Values come from
environment variables, a local .env file and the defaults below; Docker
``*_FILE`` secrets are resolved into the environment first.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gost_predict.shared import EnumEnvironment, EnumLogLevel
from gost_predict.shared.env import load_secret_file_variables

DEFAULT_HOST = ""
DEFAULT_PORT = 8080


class GESettings(BaseSettings):
    """Service identity, build metadata and development switches."""

    title: str = "gost-predict"
    description: str = (
        "Predicts SensorThings datastream values by extrapolating "
        "their recent rate of change"
    )
    version: str = "1.0.0"
    git_commit: str = Field(
        default="unknown",
        validation_alias=AliasChoices("GE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        validation_alias=AliasChoices("GE_BUILD_TIME", "BUILD_TIME"),
    )
    debug: bool = False
    reload: bool = Field(default=False, description="uvicorn auto-reload")

    model_config = SettingsConfigDict(
        env_prefix="GE_", case_sensitive=False, extra="ignore"
    )


class ServerSettings(BaseSettings):
    """
    Listener overrides read from gost_predict_host / gost_predict_port.

    Unset or empty variables leave the command-line flags in charge.
    """

    host: Optional[str] = Field(
        default=None, description="Interface to bind, empty for all interfaces"
    )
    port: Optional[int] = Field(default=None, ge=0, le=65535)

    model_config = SettingsConfigDict(
        env_prefix="GOST_PREDICT_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )


class SensorThingsSettings(BaseSettings):
    """HTTP client settings for SensorThings servers."""

    timeout: float = Field(
        default=30.0, gt=0, description="Per-request timeout in seconds"
    )
    max_pages: Optional[int] = Field(
        default=None,
        ge=1,
        description="Continuation links followed per query, unbounded if unset",
    )
    probe_url: Optional[str] = Field(
        default=None, description="Reference server probed by /health"
    )
    probe_timeout: float = Field(
        default=5.0, gt=0, description="Timeout of each /health probe request"
    )

    model_config = SettingsConfigDict(
        env_prefix="SENSORTHINGS_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    level: EnumLogLevel = EnumLogLevel.INFO
    file_path: Optional[str] = Field(
        default=None, description="Also write logs to this file"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    environment: EnumEnvironment = EnumEnvironment.DEVELOPMENT

    ge: GESettings = Field(default_factory=GESettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    sensorthings: SensorThingsSettings = Field(default_factory=SensorThingsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """Load settings, resolving secret files first. Patched in tests."""
    load_secret_file_variables()
    return AppSettings()
