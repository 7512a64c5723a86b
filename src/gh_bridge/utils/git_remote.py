"""
Local git repository helpers: remote discovery and URL parsing.
"""
import re
from typing import Tuple

from gh_bridge.utils.logger import get_logger

logger = get_logger(__name__)

# git@github.com:owner/name.git
_SCP_LIKE = re.compile(r'^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$')
# ssh://git@github.com/owner/name.git, https://github.com/owner/name, git://...
_URL_LIKE = re.compile(
    r'^(?:ssh|git|https?)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<path>.+)$'
)


def parse_remote_url(url: str) -> Tuple[str, str, str]:
    """
    Split a git remote URL into host, owner and repository name.

    Args:
        url: Remote URL in scp-like, ssh://, git:// or http(s):// form

    Returns:
        Tuple of (host, owner, name)

    Raises:
        ValueError: If the URL does not point at an owner/name repository
    """
    url = url.strip()

    match = _URL_LIKE.match(url) or _SCP_LIKE.match(url)
    if not match:
        raise ValueError(f"Unsupported git remote URL: {url}")

    path = match.group('path').rstrip('/')
    if path.endswith('.git'):
        path = path[:-4]

    parts = path.split('/')
    if len(parts) != 2 or not all(parts):
        raise ValueError(
            f"Invalid remote URL: {url}. "
            "Expected a path of the form 'owner/repo'"
        )

    return match.group('host').lower(), parts[0], parts[1]


class GitRepository:
    """Interface for the local git repository."""

    def __init__(self, repo_path: str = '.'):
        """
        Initialize git repository interface.

        Args:
            repo_path: Path inside a git working tree
        """
        try:
            import git
            self.repo = git.Repo(repo_path, search_parent_directories=True)
            logger.debug(f"Initialized git repository at {self.repo.working_dir}")
        except Exception as e:
            logger.error(f"Failed to initialize git repository: {e}")
            raise

    def remote_url(self, name: str = 'origin') -> str:
        """
        Get the fetch URL of a remote.

        Raises:
            ValueError: If the remote does not exist
        """
        try:
            remote = self.repo.remote(name)
        except ValueError:
            logger.error(f"Remote '{name}' is not configured")
            raise

        return remote.url

    def head_sha(self) -> str:
        """Get the full SHA of HEAD."""
        return self.repo.head.commit.hexsha

    def current_branch(self) -> str:
        """Get the current branch name."""
        return self.repo.active_branch.name
