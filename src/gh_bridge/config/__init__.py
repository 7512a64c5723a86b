"""Configuration management module."""

from .settings import (
    Settings,
    AppConfig,
    GitHubConfig,
    LoggingConfig,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "AppConfig",
    "GitHubConfig",
    "LoggingConfig",
    "get_settings",
    "reload_settings",
]
