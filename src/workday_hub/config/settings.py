"""
Configuration management for Workday Hub.

This module provides environment-based configuration using Pydantic BaseSettings,
so credentials for the Workday integration user never have to be hard-coded.

Environment variables are loaded with the WDAY_ prefix, for example
WDAY_API_USERNAME overrides ``api_username``. A ``.env`` file at the project
root is read as well; WDAY_ENV_FILE points at a different one.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workday_hub.auth.models import PasswordType

logger = structlog.get_logger(__name__)

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("WDAY_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class WorkdaySettings(BaseSettings):
    """
    Session configuration for the Workday web service client.

    Required at client construction (validated there, not here, so that
    tooling can load settings without credentials):
    - WDAY_API_USERNAME: integration system user, e.g. ``isu_hr@tenant``
    - WDAY_API_PASSWORD: password of the integration system user
    - WDAY_WSDL: URL or local path of the Human_Resources WSDL
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    api_username: str = Field(default="", description="WS-Security username")
    api_password: str = Field(default="", description="WS-Security password")
    api_password_type: PasswordType = Field(
        default=PasswordType.TEXT,
        description="PasswordText (PlainText) or PasswordDigest (Digest)",
    )

    wsdl: str = Field(
        default="",
        description="Location of the Workday WSDL (URL or file path)",
    )

    debug: bool = Field(
        default=False,
        description="Transport debug: pretty-print captured envelopes and log them",
    )

    timeout: int = Field(
        default=300, description="Timeout in seconds for loading the WSDL"
    )
    operation_timeout: Optional[int] = Field(
        default=None,
        description="Timeout in seconds for each SOAP operation (None = no limit)",
    )
    strict_schema: bool = Field(
        default=False,
        description="Enforce strict XSD validation of responses",
    )

    @field_validator("api_password_type", mode="before")
    @classmethod
    def _parse_password_type(cls, value: object) -> object:
        if isinstance(value, str):
            return PasswordType.parse(value)
        return value

    model_config = SettingsConfigDict(
        env_prefix="WDAY_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> WorkdaySettings:
    """
    Get cached settings instance.

    Returns:
        WorkdaySettings instance with loaded configuration
    """
    settings = WorkdaySettings()
    logger.debug(
        "configuration.loaded",
        has_username=bool(settings.api_username),
        auth_mode=settings.api_password_type.value,
        wsdl=settings.wsdl,
        env_file=str(SETTINGS_ENV_FILE),
    )
    return settings
