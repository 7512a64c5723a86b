"""
GitHub adapter: project-scoped operations against the GitHub REST API.
"""
from typing import List, Optional, Union

import requests
from github import Auth, Github, GithubException, RateLimitExceededException
from github.CommitStatus import CommitStatus
from github.GitRelease import GitRelease
from github.Issue import Issue
from github.PullRequest import PullRequest
from github.Repository import Repository

from gh_bridge.config import get_settings
from gh_bridge.core import (
    APIError,
    AccessPermissionError,
    AuthenticationError,
    GhBridgeError,
    NotFoundError,
    Project,
    RateLimitError,
    RepositoryExistsError,
)
from gh_bridge.utils import get_logger
from .base import HostingAdapter

logger = get_logger(__name__)

_TRANSPORT_ERRORS = (GithubException, requests.RequestException)


class GitHubAdapter(HostingAdapter):
    """
    GitHub-specific adapter implementation.

    Uses PyGithub for every resource call. Each operation resolves the
    credentials and builds a fresh client, then issues its request.
    Resources are fetched eagerly, so a missing one raises inside the
    operation that asked for it.
    """

    def pull_request(self, pr_id: Union[int, str]) -> PullRequest:
        """
        Fetch one pull request of the project.

        Args:
            pr_id: Pull request number

        Returns:
            PyGithub PullRequest

        Raises:
            NotFoundError: If the PR doesn't exist
            APIError: For other API errors
        """
        project = self._require_project()
        number = int(pr_id)
        client = self._client()

        try:
            logger.info(f"Fetching PR #{number} from {project.full_name}")
            repo = client.get_repo(project.full_name)
            return repo.get_pull(number)
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"fetch pull request #{number}") from e

    def create_pull_request(self, base: str, head: str, title: str, body: str) -> str:
        """
        Open a pull request on the project.

        Args:
            base: Branch the changes go into
            head: Branch (or owner:branch) holding the changes
            title: Pull request title
            body: Pull request description

        Returns:
            Web URL of the new pull request
        """
        project = self._require_project()
        client = self._client()

        try:
            logger.info(f"Creating PR {head} -> {base} on {project.full_name}")
            repo = client.get_repo(project.full_name)
            pr = repo.create_pull(base=base, head=head, title=title, body=body)
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"create pull request from {head}") from e

        logger.info(f"Created PR #{pr.number}: {pr.html_url}")
        return pr.html_url

    def create_pull_request_for_issue(self, base: str, head: str, issue: Union[int, str]) -> str:
        """
        Attach a head branch to an existing issue, turning it into a pull request.

        Returns:
            Web URL of the pull request
        """
        project = self._require_project()
        number = int(issue)
        client = self._client()

        try:
            logger.info(f"Converting issue #{number} into a PR {head} -> {base}")
            repo = client.get_repo(project.full_name)
            pr = repo.create_pull(base=base, head=head, issue=repo.get_issue(number))
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"create pull request for issue #{number}") from e

        return pr.html_url

    def repository(self, project: Project) -> Repository:
        """
        Fetch a repository.

        Raises:
            NotFoundError: If the repository doesn't exist
            APIError: For other API errors
        """
        client = self._client()

        try:
            logger.debug(f"Fetching repository {project.full_name}")
            return client.get_repo(project.full_name)
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"fetch repository {project.full_name}") from e

    def create_repository(
        self,
        project: Project,
        description: str = "",
        homepage: str = "",
        is_private: bool = False
    ) -> Repository:
        """
        Create a repository.

        The user endpoint is used when the project owner is the
        authenticated user, the organization endpoint otherwise.
        """
        user = self.config.fetch_user()
        client = self._client()

        try:
            if project.owner.lower() != user.lower():
                logger.info(f"Creating repository {project.full_name} in organization {project.owner}")
                owner = client.get_organization(project.owner)
            else:
                logger.info(f"Creating repository {project.full_name}")
                owner = client.get_user()

            return owner.create_repo(
                project.name,
                description=description,
                homepage=homepage,
                private=is_private,
            )
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"create repository {project.full_name}") from e

    def fork_repository(self, name: str, owner: str, no_remote: bool = False) -> Repository:
        """
        Fork owner/name into the authenticated user's account.

        Args:
            name: Repository name
            owner: Owner of the repository to fork
            no_remote: Passed through for callers that set up git remotes;
                has no effect on the API request

        Returns:
            The fork

        Raises:
            RepositoryExistsError: If the user already has a repository called name
        """
        user = self.config.fetch_user()
        host = get_settings().github.host

        try:
            existing = self.repository(Project(owner=user, name=name, host=host))
        except GhBridgeError:
            existing = None

        if existing is not None:
            raise RepositoryExistsError(existing.full_name, host)

        client = self._client()

        try:
            logger.info(f"Forking {owner}/{name} (no_remote={no_remote})")
            return client.get_repo(f"{owner}/{name}").create_fork()
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"fork {owner}/{name}") from e

    def releases(self) -> List[GitRelease]:
        """List releases of the project."""
        project = self._require_project()
        client = self._client()

        try:
            repo = client.get_repo(project.full_name)
            releases = list(repo.get_releases())
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"list releases of {project.full_name}") from e

        logger.debug(f"Found {len(releases)} releases")
        return releases

    def ci_status(self, sha: str) -> Optional[CommitStatus]:
        """
        Get the most recent status of a commit.

        Returns:
            First status GitHub reports for the commit, or None if it has none
        """
        project = self._require_project()
        client = self._client()

        try:
            repo = client.get_repo(project.full_name)
            statuses = list(repo.get_commit(sha).get_statuses())
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"fetch statuses of {sha}") from e

        if not statuses:
            logger.debug(f"No statuses for {sha}")
            return None

        return statuses[0]

    def issues(self) -> List[Issue]:
        """List issues of the project."""
        project = self._require_project()
        client = self._client()

        try:
            repo = client.get_repo(project.full_name)
            issues = list(repo.get_issues())
        except _TRANSPORT_ERRORS as e:
            raise self._translate_error(e, f"list issues of {project.full_name}") from e

        logger.debug(f"Found {len(issues)} issues")
        return issues

    def _client(self) -> Github:
        """Resolve credentials and build an authenticated client."""
        credentials = self.config.fetch_credentials()
        settings = get_settings().github

        return Github(
            auth=Auth.Token(credentials.token),
            base_url=settings.api_base_url,
            timeout=settings.timeout,
            retry=settings.max_retries,
        )

    @staticmethod
    def _translate_error(e: Exception, action: str) -> APIError:
        """
        Map a PyGithub or transport error onto our exceptions.

        Args:
            e: Error raised by the client
            action: What was being attempted, for the message

        Returns:
            Exception to raise
        """
        if not isinstance(e, GithubException):
            return APIError(f"Failed to {action}: {e}")

        if isinstance(e, RateLimitExceededException):
            reset = (e.headers or {}).get("x-ratelimit-reset")
            return RateLimitError(
                f"Rate limit exceeded while trying to {action}",
                reset_at=int(reset) if reset else None,
                status_code=e.status,
            )

        message = e.data.get('message', str(e)) if isinstance(e.data, dict) else str(e)

        if e.status == 401:
            return AuthenticationError(f"Failed to {action}: {message}")
        if e.status == 403:
            return AccessPermissionError(f"Failed to {action}: {message}")
        if e.status == 404:
            return NotFoundError(f"Failed to {action}: {message}")

        return APIError(f"Failed to {action}: {message}", status_code=e.status)
