"""
Base adapter interface for code-hosting services.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional, Union

from gh_bridge.config import get_settings
from gh_bridge.core import Config, ConfigurationError, GhBridgeError, Project
from gh_bridge.utils import get_logger

logger = get_logger(__name__)


class PlatformType(Enum):
    """Supported hosting platforms."""
    GITHUB = "github"


class HostingAdapter(ABC):
    """
    Base adapter interface for hosting platforms.

    An adapter is bound to the project of the current checkout (or to no
    project) and to the user's credentials config. It is meant to live for
    a single command invocation.
    """

    def __init__(self, project: Optional[Project], config: Config):
        """
        Initialize the adapter.

        Args:
            project: Project operations act on, or None
            config: Credentials config
        """
        self.project = project
        self.config = config
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self.logger.debug(f"Initializing {self.__class__.__name__}")

    @abstractmethod
    def pull_request(self, pr_id: Union[int, str]) -> Any:
        """
        Fetch one pull request of the project.

        Raises:
            NotFoundError: If the PR doesn't exist
            APIError: For other API errors
        """
        pass

    @abstractmethod
    def create_pull_request(self, base: str, head: str, title: str, body: str) -> str:
        """
        Open a pull request.

        Returns:
            Web URL of the new pull request
        """
        pass

    @abstractmethod
    def create_pull_request_for_issue(self, base: str, head: str, issue: Union[int, str]) -> str:
        """
        Turn an existing issue into a pull request.

        Returns:
            Web URL of the pull request
        """
        pass

    @abstractmethod
    def repository(self, project: Project) -> Any:
        """
        Fetch a repository.

        Raises:
            NotFoundError: If the repository doesn't exist
            APIError: For other API errors
        """
        pass

    @abstractmethod
    def create_repository(
        self,
        project: Project,
        description: str = "",
        homepage: str = "",
        is_private: bool = False
    ) -> Any:
        """Create a repository for a user or an organization."""
        pass

    @abstractmethod
    def fork_repository(self, name: str, owner: str, no_remote: bool = False) -> Any:
        """
        Fork owner/name into the authenticated user's account.

        Raises:
            RepositoryExistsError: If the user already has a repository called name
        """
        pass

    @abstractmethod
    def releases(self) -> List[Any]:
        """List releases of the project."""
        pass

    @abstractmethod
    def ci_status(self, sha: str) -> Optional[Any]:
        """Get the most recent status of a commit, or None if there is none."""
        pass

    @abstractmethod
    def issues(self) -> List[Any]:
        """List issues of the project."""
        pass

    def is_repository_exist(self, project: Project) -> bool:
        """
        Check whether a repository exists.

        Never raises: any failure to fetch the repository counts as absence.
        """
        return self._error_to_bool(lambda: self.repository(project) is not None)

    def expand_remote_url(self, owner: str, name: str, is_ssh: bool) -> str:
        """
        Compute a clone URL.

        Args:
            owner: Repository owner; "origin" stands for the authenticated user
            name: Repository name
            is_ssh: Use the SSH form instead of HTTPS

        Returns:
            Clone URL
        """
        if owner == "origin":
            owner = self.config.fetch_user()

        project = self.project or Project(owner=owner, name=name, host=get_settings().github.host)
        return project.git_url(name, owner, is_ssh)

    def _require_project(self) -> Project:
        if self.project is None:
            raise ConfigurationError(
                "This operation needs a project; run it inside a repository checkout"
            )
        return self.project

    def _error_to_bool(self, probe) -> bool:
        try:
            return bool(probe())
        except GhBridgeError as e:
            self.logger.debug(f"Probe failed, treating as False: {e}")
            return False

    def __repr__(self) -> str:
        """String representation of adapter."""
        project = self.project.full_name if self.project else None
        return f"{self.__class__.__name__}(project={project}, user={self.config.user or None})"
