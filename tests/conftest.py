"""
Shared test fixtures and configuration for pytest.
This file is automatically discovered by pytest.
"""

import pytest
from unittest.mock import Mock, patch

from github import GithubException

from gh_bridge.adapters.github import GitHubAdapter
from gh_bridge.config import Settings
from gh_bridge.core import Config, Project


def _no_prompt(question):
    raise AssertionError(f"Unexpected prompt: {question}")


@pytest.fixture
def project():
    """Project the adapter is bound to."""
    return Project(owner="upstream-org", name="hello-world")


@pytest.fixture
def fake_config():
    """Config with a known user and token that must never prompt."""
    return Config(
        user="octocat",
        token="token-123",
        prompt=_no_prompt,
        secret_prompt=_no_prompt,
    )


@pytest.fixture
def mock_github():
    """Patch the PyGithub client class used by the adapter."""
    with patch('gh_bridge.adapters.github.Github') as mock:
        yield mock


@pytest.fixture
def mock_client(mock_github):
    """The client instance every adapter operation builds."""
    return mock_github.return_value


@pytest.fixture
def github_adapter(project, fake_config, mock_github):
    """GitHub adapter bound to the sample project."""
    return GitHubAdapter(project, fake_config)


@pytest.fixture
def projectless_adapter(fake_config, mock_github):
    """GitHub adapter created without a project."""
    return GitHubAdapter(None, fake_config)


@pytest.fixture
def not_found():
    """A PyGithub 404."""
    return GithubException(status=404, data={'message': 'Not Found'})


@pytest.fixture
def settings(tmp_path):
    """Fresh settings writing credentials under tmp_path."""
    settings = Settings()
    settings.github.credentials_file = str(tmp_path / "credentials.yaml")
    return settings


@pytest.fixture
def mock_pr():
    """A PyGithub-like pull request."""
    pr = Mock()
    pr.number = 42
    pr.title = "Add feature"
    pr.state = "open"
    pr.html_url = "https://github.com/upstream-org/hello-world/pull/42"
    pr.head.ref = "feature"
    pr.base.ref = "main"
    return pr


# Pytest configuration hooks
def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
