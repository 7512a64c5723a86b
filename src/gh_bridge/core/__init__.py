"""Core functionality for gh-bridge."""

from .exceptions import (
    GhBridgeError,
    ConfigurationError,
    RepositoryExistsError,
    APIError,
    NotFoundError,
    AccessPermissionError,
    AuthenticationError,
    TwoFactorRequiredError,
    RateLimitError,
)
from .project import Project, current_project
from .credentials import Config, Credentials, current_config
from .authorizations import find_or_create_token

__all__ = [
    # Models
    "Project",
    "Config",
    "Credentials",
    "current_project",
    "current_config",
    "find_or_create_token",
    # Exceptions
    "GhBridgeError",
    "ConfigurationError",
    "RepositoryExistsError",
    "APIError",
    "NotFoundError",
    "AccessPermissionError",
    "AuthenticationError",
    "TwoFactorRequiredError",
    "RateLimitError",
]
