"""Adapter modules for hosting platform integrations."""

from .base import HostingAdapter, PlatformType
from .github import GitHubAdapter
from .factory import AdapterFactory, new, new_without_project

__all__ = [
    "HostingAdapter",
    "PlatformType",
    "GitHubAdapter",
    "AdapterFactory",
    "new",
    "new_without_project",
]
