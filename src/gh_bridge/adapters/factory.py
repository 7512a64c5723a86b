"""
Factory for creating platform-specific adapters.
"""
from typing import Optional

from gh_bridge.core import Config, Project, current_config, current_project
from gh_bridge.utils import get_logger
from .base import HostingAdapter, PlatformType

logger = get_logger(__name__)


class AdapterFactory:
    """Factory for creating platform adapters."""

    _adapters = {}  # Registry of available adapters

    @classmethod
    def register_adapter(cls, platform: PlatformType, adapter_class: type):
        """
        Register an adapter class for a platform.

        Args:
            platform: Platform type
            adapter_class: Adapter class to register
        """
        cls._adapters[platform] = adapter_class
        logger.debug(f"Registered adapter for {platform.value}: {adapter_class.__name__}")

    @classmethod
    def create_adapter(
        cls,
        platform: PlatformType,
        project: Optional[Project] = None,
        config: Optional[Config] = None,
    ) -> HostingAdapter:
        """
        Create an adapter instance for the specified platform.

        The user login is resolved (and prompted for if needed) before the
        adapter is returned.

        Args:
            platform: Platform type
            project: Project to bind, or None for credential-only use
            config: Credentials config (process-wide one if not provided)

        Returns:
            Configured adapter instance

        Raises:
            ValueError: If platform is not supported
        """
        if platform not in cls._adapters:
            available = ", ".join(p.value for p in cls._adapters.keys())
            raise ValueError(
                f"Unsupported platform: {platform.value}. "
                f"Available platforms: {available}"
            )

        if config is None:
            config = current_config()
        config.fetch_user()

        adapter = cls._adapters[platform](project, config)

        logger.debug(f"Created {platform.value} adapter for {project.full_name if project else 'no project'}")
        return adapter

    @classmethod
    def list_available_platforms(cls) -> list[str]:
        """Get list of available platforms."""
        return [platform.value for platform in cls._adapters.keys()]


def new(config: Optional[Config] = None) -> HostingAdapter:
    """Create a GitHub adapter bound to the project of the current checkout."""
    return AdapterFactory.create_adapter(
        PlatformType.GITHUB, project=current_project(), config=config
    )


def new_without_project(config: Optional[Config] = None) -> HostingAdapter:
    """Create a GitHub adapter for operations that need no repository context."""
    return AdapterFactory.create_adapter(PlatformType.GITHUB, project=None, config=config)


def _auto_register_adapters():
    """Auto-register available adapters."""
    from .github import GitHubAdapter
    AdapterFactory.register_adapter(PlatformType.GITHUB, GitHubAdapter)


_auto_register_adapters()
