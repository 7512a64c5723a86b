"""Custom exceptions for gh-bridge."""

import logging
from typing import Optional

from gh_bridge.utils.logger import get_logger

logger = get_logger(__name__)


class GhBridgeError(Exception):
    """Base exception for gh-bridge."""

    # Level the creation of the exception is logged at
    log_level = logging.ERROR

    def __init__(self, message: str, details: str = None):
        super().__init__(message)
        self.message = message
        self.details = details

        logger.log(self.log_level, f"Exception raised: {message}")
        if details:
            logger.debug(f"Exception details: {details}")


class ConfigurationError(GhBridgeError):
    """Raised when there's a configuration problem."""
    pass


class RepositoryExistsError(GhBridgeError):
    """Raised when a repository with the requested name already exists."""

    def __init__(self, full_name: str, host: str):
        super().__init__(f"Error creating fork: {full_name} exists on {host}")
        self.full_name = full_name
        self.host = host


class APIError(GhBridgeError):
    """Raised when API calls fail."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: str = None):
        super().__init__(message, details)
        self.status_code = status_code


class NotFoundError(APIError):
    """Raised when a resource is not found."""

    # expected by existence checks
    log_level = logging.DEBUG

    def __init__(self, message: str, details: str = None):
        super().__init__(message, status_code=404, details=details)


class AccessPermissionError(APIError):
    """Raised when lacking required permissions."""

    def __init__(self, message: str, details: str = None):
        super().__init__(message, status_code=403, details=details)


class AuthenticationError(APIError):
    """Raised when credentials are rejected."""

    def __init__(self, message: str, details: str = None):
        super().__init__(message, status_code=401, details=details)


class TwoFactorRequiredError(AuthenticationError):
    """Raised when the account needs a one-time passcode."""

    log_level = logging.INFO

    def __init__(self, message: str, delivery: Optional[str] = None):
        super().__init__(message, details=f"OTP delivery: {delivery}" if delivery else None)
        self.delivery = delivery


class RateLimitError(APIError):
    """Raised when hitting rate limits."""

    def __init__(
        self,
        message: str,
        reset_at: Optional[int] = None,
        status_code: int = 403,
        details: str = None
    ):
        super().__init__(message, status_code=status_code, details=details)
        self.reset_at = reset_at
