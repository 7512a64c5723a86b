"""
User credentials: lazy resolution, interactive prompting and persistence.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import yaml
from rich.prompt import Prompt

from gh_bridge.config import Settings, get_settings
from gh_bridge.utils.logger import get_logger
from . import authorizations
from .exceptions import ConfigurationError, TwoFactorRequiredError

logger = get_logger(__name__)


@dataclass(frozen=True)
class Credentials:
    """Resolved login and access token."""
    user: str
    token: str


def _ask(question: str) -> str:
    return Prompt.ask(question)


def _ask_secret(question: str) -> str:
    return Prompt.ask(question, password=True)


class Config:
    """
    Holder of the authenticated user and token.

    Values missing from the credentials file and the environment are
    prompted for on first use and then written back to the file.
    """

    def __init__(
        self,
        user: Optional[str] = None,
        token: Optional[str] = None,
        path: Optional[Path] = None,
        prompt: Callable[[str], str] = _ask,
        secret_prompt: Callable[[str], str] = _ask_secret,
    ):
        self.user = user or ""
        self.token = token or ""
        self.path = path
        self._prompt = prompt
        self._secret_prompt = secret_prompt

    @classmethod
    def load(cls, settings: Optional[Settings] = None, **kwargs) -> "Config":
        """
        Load credentials from the credentials file, then the environment.

        Args:
            settings: Settings to read paths and overrides from
            **kwargs: Passed through to the constructor (prompt hooks)

        Returns:
            Config instance

        Raises:
            ConfigurationError: If the credentials file is unreadable
        """
        settings = settings or get_settings()
        path = Path(settings.github.credentials_file).expanduser()

        data = {}
        if path.exists():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(
                    f"Cannot read credentials file {path}", details=str(e)
                ) from e

        host_data = data.get(settings.github.host) or {}
        user = settings.github.user or host_data.get("user")
        token = settings.github.token or host_data.get("token")

        logger.debug(f"Loaded credentials config from {path} (user: {user or 'unset'})")
        return cls(user=user, token=token, path=path, **kwargs)

    def fetch_user(self) -> str:
        """Return the login, prompting for it once if unknown."""
        if not self.user:
            user = self._prompt("GitHub username").strip()
            if not user:
                raise ConfigurationError("GitHub username is required")
            self.user = user
            self.save()

        return self.user

    def fetch_credentials(self) -> Credentials:
        """
        Make sure both login and token are known.

        A missing token is obtained through the Authorizations API with the
        account password; when the account uses two-factor authentication the
        passcode is asked for and the call is made a second time.

        Returns:
            Credentials value

        Raises:
            APIError: If the token cannot be obtained
        """
        changed = False

        if not self.user:
            self.fetch_user()

        if not self.token:
            password = self._secret_prompt(f"GitHub password for {self.user} (never stored)")
            try:
                token = authorizations.find_or_create_token(self.user, password)
            except TwoFactorRequiredError:
                code = self._prompt("two-factor authentication code").strip()
                token = authorizations.find_or_create_token(self.user, password, code)

            self.token = token
            changed = True

        if changed:
            self.save()

        return Credentials(user=self.user, token=self.token)

    def save(self) -> None:
        """Write credentials to the credentials file, readable by the owner only."""
        if self.path is None:
            return

        settings = get_settings()
        data = {}
        if self.path.exists():
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}

        entry = {"user": self.user}
        if self.token:
            entry["token"] = self.token
        data[settings.github.host] = entry

        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            os.chmod(self.path, 0o600)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False)

        logger.info(f"Saved credentials for {self.user} to {self.path}")

    def __repr__(self) -> str:
        return f"Config(user={self.user!r}, token={'***' if self.token else None})"


# Process-wide config instance
_config: Optional[Config] = None


def current_config() -> Config:
    """Get the process-wide config, loading it on first use."""
    global _config

    if _config is None:
        _config = Config.load()

    return _config
