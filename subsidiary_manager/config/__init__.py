"""Configuration module."""

from subsidiary_manager.config.logging import configure_logging, get_logger
from subsidiary_manager.config.settings import (
    DatabaseSettings,
    DbEngine,
    Settings,
    get_settings,
    read_env_value,
    reset_settings,
    write_env_value,
)

__all__ = [
    "DatabaseSettings",
    "DbEngine",
    "Settings",
    "get_settings",
    "read_env_value",
    "reset_settings",
    "write_env_value",
    "configure_logging",
    "get_logger",
]
