"""
Project identification: which hosted repository the local checkout maps to.
"""
from dataclasses import dataclass
from typing import Optional

from git.exc import GitError

from gh_bridge.config import get_settings
from gh_bridge.utils.git_remote import GitRepository, parse_remote_url
from gh_bridge.utils.logger import get_logger
from .exceptions import ConfigurationError

logger = get_logger(__name__)


@dataclass(frozen=True)
class Project:
    """
    A repository on the hosting service.

    Attributes:
        owner: User or organization login owning the repository
        name: Repository name
        host: Hostname of the service
    """
    owner: str
    name: str
    host: str = "github.com"

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def web_url(self) -> str:
        return f"https://{self.host}/{self.full_name}"

    def git_url(
        self,
        name: Optional[str] = None,
        owner: Optional[str] = None,
        is_ssh: bool = False
    ) -> str:
        """
        Build a clone URL for a repository on this project's host.

        Args:
            name: Repository name (defaults to this project's)
            owner: Repository owner (defaults to this project's)
            is_ssh: Return the SSH form instead of HTTPS

        Returns:
            Clone URL
        """
        name = name or self.name
        owner = owner or self.owner

        if is_ssh:
            return f"git@{self.host}:{owner}/{name}.git"
        return f"https://{self.host}/{owner}/{name}.git"

    @classmethod
    def from_remote_url(cls, url: str) -> "Project":
        """Build a project from a git remote URL."""
        host, owner, name = parse_remote_url(url)
        return cls(owner=owner, name=name, host=host)


def current_project(repo_path: str = '.', remote: str = 'origin') -> Project:
    """
    Resolve the project of the local git repository.

    Args:
        repo_path: Path inside the working tree
        remote: Name of the remote pointing at the hosting service

    Returns:
        Project for the remote

    Raises:
        ConfigurationError: If there is no usable remote
    """
    try:
        url = GitRepository(repo_path).remote_url(remote)
        project = Project.from_remote_url(url)
    except (ValueError, GitError) as e:
        raise ConfigurationError(
            f"Cannot determine project from remote '{remote}'",
            details=str(e)
        ) from e

    expected_host = get_settings().github.host
    if project.host != expected_host:
        logger.warning(
            f"Remote '{remote}' points at {project.host}, expected {expected_host}"
        )

    logger.debug(f"Current project: {project.full_name}")
    return project
