"""Utility modules for gh-bridge."""

from .logger import get_logger, LoggerSetup
from .git_remote import GitRepository, parse_remote_url

__all__ = [
    "get_logger",
    "LoggerSetup",
    "GitRepository",
    "parse_remote_url",
]
