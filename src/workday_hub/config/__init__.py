"""Configuration management for Workday Hub.

Settings are loaded from WDAY_* environment variables (and an optional .env
file) with validation using Pydantic BaseSettings.

Usage:
    >>> from workday_hub.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.wsdl)
"""

from workday_hub.config.settings import WorkdaySettings, get_settings

__all__ = [
    "WorkdaySettings",
    "get_settings",
]
