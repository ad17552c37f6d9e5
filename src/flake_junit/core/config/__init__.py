"""Configuration management for flake-junit."""

from flake_junit.core.config.loader import ConfigLoader
from flake_junit.core.config.settings import (
    LoggingSettings,
    NixSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "LoggingSettings",
    "NixSettings",
    "Settings",
    "get_settings",
]
