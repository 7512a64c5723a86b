"""
Configuration management for gh-bridge.
"""
import os
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
import yaml
from dotenv import load_dotenv


@dataclass
class AppConfig:
    """Application-level configuration."""
    name: str = "gh-bridge"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"


@dataclass
class GitHubConfig:
    """GitHub-specific configuration."""
    host: str = "github.com"
    api_base_url: str = "https://api.github.com"
    user: Optional[str] = None
    token: Optional[str] = None
    timeout: int = 30
    max_retries: int = 0
    credentials_file: str = "~/.config/gh-bridge/credentials.yaml"
    oauth_app_url: str = "http://owenou.com/gh"
    oauth_note: str = "gh"
    oauth_scopes: List[str] = field(default_factory=lambda: ["repo"])
    protocol: str = "https"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str = "logs/gh_bridge.log"
    max_size_mb: int = 10
    backup_count: int = 5


@dataclass
class Settings:
    """Main configuration class."""
    app: AppConfig = field(default_factory=AppConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load_from_file(cls, config_path: Optional[str] = None) -> "Settings":
        """Load settings from YAML file and environment variables."""
        # Load environment variables
        load_dotenv()

        if config_path is None:
            config_path = os.getenv("CONFIG_FILE", "config/config.yaml")

        config_path = Path(config_path)

        config_data = {}
        if config_path.exists():
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}

        settings = cls()

        if config_data:
            settings._update_from_dict(config_data)

        # Environment wins over the file
        settings._update_from_env()

        return settings

    def _update_from_dict(self, data: Dict[str, Any]) -> None:
        """Update settings from dictionary."""
        if "app" in data:
            self._update_dataclass(self.app, data["app"])
        if "github" in data:
            self._update_dataclass(self.github, data["github"])
            if "api_base_url" not in data["github"]:
                self._derive_api_base_url()
        if "logging" in data:
            self._update_dataclass(self.logging, data["logging"])

    def _update_from_env(self) -> None:
        """Update settings from environment variables"""
        if os.getenv("GITHUB_TOKEN"):
            self.github.token = os.getenv("GITHUB_TOKEN")

        if os.getenv("GITHUB_USER"):
            self.github.user = os.getenv("GITHUB_USER")

        if os.getenv("GITHUB_HOST"):
            self.github.host = os.getenv("GITHUB_HOST")
            self._derive_api_base_url()

        if os.getenv("DEBUG"):
            self.app.debug = os.getenv("DEBUG").lower() in ("true", "1", "yes")

        if os.getenv("LOG_LEVEL"):
            self.app.log_level = os.getenv("LOG_LEVEL")

    def _derive_api_base_url(self) -> None:
        # GitHub Enterprise installs serve the API under /api/v3
        if self.github.host != "github.com":
            self.github.api_base_url = f"https://{self.github.host}/api/v3"

    @staticmethod
    def _update_dataclass(instance: Any, data: Dict[str, Any]) -> None:
        """Update a dataclass instance with dictionary data."""
        for key, value in data.items():
            if hasattr(instance, key):
                current_value = getattr(instance, key)
                if isinstance(current_value, dict) and isinstance(value, dict):
                    current_value.update(value)
                else:
                    setattr(instance, key, value)

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.github.host:
            errors.append("GitHub host must not be empty")

        if not self.github.api_base_url.startswith(("http://", "https://")):
            errors.append("GitHub API base URL must be an http(s) URL")

        if self.github.protocol not in ("https", "ssh"):
            errors.append("Git protocol must be one of: ['https', 'ssh']")

        if self.github.timeout <= 0:
            errors.append("GitHub timeout must be a positive number of seconds")

        if not self.github.oauth_scopes:
            errors.append("At least one OAuth scope must be requested")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return {
            "app": self.app.__dict__,
            "github": {k: v for k, v in self.github.__dict__.items() if k != "token"},
            "logging": self.logging.__dict__,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings(config_path: Optional[str] = None, reload: bool = False) -> Settings:
    """Get the global settings instance."""
    global _settings

    if _settings is None or reload:
        _settings = Settings.load_from_file(config_path)

    return _settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """Reload settings from file."""
    return get_settings(config_path, reload=True)
