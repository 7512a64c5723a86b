"""Tests for adapter factory."""

import pytest
from unittest.mock import patch

from gh_bridge.adapters import GitHubAdapter, new, new_without_project
from gh_bridge.adapters.base import HostingAdapter, PlatformType
from gh_bridge.adapters.factory import AdapterFactory
from gh_bridge.core import Config, ConfigurationError, Project


class DummyAdapter(HostingAdapter):
    """Dummy adapter for testing factory - implements all abstract methods."""

    def pull_request(self, pr_id):
        return {"number": int(pr_id)}

    def create_pull_request(self, base, head, title, body):
        return "https://example.com/pull/1"

    def create_pull_request_for_issue(self, base, head, issue):
        return "https://example.com/pull/1"

    def repository(self, project):
        if project.name == "missing":
            raise ConfigurationError("no such repository")
        return {"full_name": project.full_name}

    def create_repository(self, project, description="", homepage="", is_private=False):
        return {"full_name": project.full_name}

    def fork_repository(self, name, owner, no_remote=False):
        return {"full_name": f"{self.config.user}/{name}"}

    def releases(self):
        return []

    def ci_status(self, sha):
        return None

    def issues(self):
        return []


@pytest.fixture
def restore_registry():
    """Keep registrations made by a test from leaking."""
    saved = dict(AdapterFactory._adapters)
    yield
    AdapterFactory._adapters.clear()
    AdapterFactory._adapters.update(saved)


class TestAdapterFactory:
    """Test adapter creation."""

    def test_github_is_registered(self):
        assert "github" in AdapterFactory.list_available_platforms()

    def test_create_adapter_resolves_user(self, project):
        prompts = []
        config = Config(prompt=lambda q: prompts.append(q) or "octocat")

        adapter = AdapterFactory.create_adapter(PlatformType.GITHUB, project=project, config=config)

        assert isinstance(adapter, GitHubAdapter)
        assert adapter.project is project
        assert adapter.config is config
        assert config.user == "octocat"
        assert len(prompts) == 1

    def test_create_adapter_uses_current_config(self, fake_config):
        with patch('gh_bridge.adapters.factory.current_config', return_value=fake_config):
            adapter = AdapterFactory.create_adapter(PlatformType.GITHUB)

        assert adapter.config is fake_config
        assert adapter.project is None

    def test_unsupported_platform(self, fake_config, restore_registry):
        AdapterFactory._adapters.clear()

        with pytest.raises(ValueError, match="Unsupported platform"):
            AdapterFactory.create_adapter(PlatformType.GITHUB, config=fake_config)

    def test_register_adapter(self, fake_config, restore_registry):
        AdapterFactory.register_adapter(PlatformType.GITHUB, DummyAdapter)

        adapter = AdapterFactory.create_adapter(PlatformType.GITHUB, config=fake_config)

        assert isinstance(adapter, DummyAdapter)


class TestConstructors:
    """Test new() and new_without_project()."""

    def test_new_binds_current_project(self, project, fake_config):
        with patch('gh_bridge.adapters.factory.current_project', return_value=project):
            adapter = new(fake_config)

        assert adapter.project is project

    def test_new_outside_repository(self, fake_config):
        with patch(
            'gh_bridge.adapters.factory.current_project',
            side_effect=ConfigurationError("Cannot determine project"),
        ):
            with pytest.raises(ConfigurationError):
                new(fake_config)

    def test_new_without_project(self, fake_config):
        with patch('gh_bridge.adapters.factory.current_project') as current:
            adapter = new_without_project(fake_config)

        current.assert_not_called()
        assert adapter.project is None


class TestHostingAdapterDefaults:
    """Test behaviour shared by every adapter."""

    def test_is_repository_exist(self, fake_config):
        adapter = DummyAdapter(None, fake_config)

        assert adapter.is_repository_exist(Project("octocat", "hello-world")) is True
        assert adapter.is_repository_exist(Project("octocat", "missing")) is False

    def test_is_repository_exist_none_entity(self, fake_config):
        adapter = DummyAdapter(None, fake_config)

        with patch.object(DummyAdapter, "repository", return_value=None):
            assert adapter.is_repository_exist(Project("octocat", "hello-world")) is False

    def test_expand_remote_url_uses_project_host(self, fake_config):
        adapter = DummyAdapter(Project("upstream", "tool", host="ghe.example.com"), fake_config)

        assert adapter.expand_remote_url("origin", "tool", True) == "git@ghe.example.com:octocat/tool.git"

    def test_abstract_base_cannot_be_instantiated(self, fake_config):
        with pytest.raises(TypeError):
            HostingAdapter(None, fake_config)
