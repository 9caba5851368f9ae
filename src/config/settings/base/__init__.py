"""Agregador de settings base."""

from __future__ import annotations

from config.settings.base.core import (
    DEFAULT_SERVICE_NAME,
    VALID_LOG_LEVELS,
    BaseSettings,
    Environment,
    get_base_settings,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "VALID_LOG_LEVELS",
    "BaseSettings",
    "Environment",
    "get_base_settings",
]
