"""Configuration loading for ticketsync."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_POLL_INTERVAL = 300.0
DEFAULT_CONFIG_FILE = "ticketsync.yaml"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


def _get_github_token() -> str:
    """Get GitHub token from environment or gh CLI."""
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return ""


@dataclass
class Settings:
    """Runtime settings.

    Attributes:
        repo: GitHub repository holding the tickets, in "owner/repo" format.
        token: GitHub token used for all API calls.
        api_url: GitHub REST API base URL (override for GitHub Enterprise).
        poll_interval: Seconds between open-issue syncs. 0 disables polling.
    """

    repo: str
    token: str = ""
    api_url: str = DEFAULT_API_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from a dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed settings object.

        Raises:
            ConfigError: If required fields are missing or malformed.
        """
        github = data.get("github") or {}
        if not isinstance(github, dict):
            raise ConfigError("'github' must be a mapping")

        repo = github.get("repo")
        if not repo:
            raise ConfigError("Missing required field: github.repo")
        if str(repo).count("/") != 1:
            raise ConfigError(f"github.repo must be in 'owner/repo' format, got {repo!r}")

        poll_interval = data.get("poll_interval", DEFAULT_POLL_INTERVAL)
        try:
            poll_interval = float(poll_interval)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"poll_interval must be a number, got {poll_interval!r}") from e
        if poll_interval < 0:
            raise ConfigError("poll_interval must not be negative")

        return cls(
            repo=str(repo),
            token=str(github.get("token") or ""),
            api_url=str(github.get("api_url") or DEFAULT_API_URL).rstrip("/"),
            poll_interval=poll_interval,
        )


def _apply_env(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay environment variables onto a raw configuration mapping.

    Raises:
        ConfigError: If the github section is not a mapping.
    """
    github = data.get("github") or {}
    if not isinstance(github, dict):
        raise ConfigError("'github' must be a mapping")
    github = dict(github)
    if os.environ.get("TICKETSYNC_REPO"):
        github["repo"] = os.environ["TICKETSYNC_REPO"]
    if os.environ.get("TICKETSYNC_API_URL"):
        github["api_url"] = os.environ["TICKETSYNC_API_URL"]
    if os.environ.get("GITHUB_TOKEN"):
        github["token"] = os.environ["GITHUB_TOKEN"]

    result = {**data, "github": github}
    if os.environ.get("TICKETSYNC_POLL_INTERVAL"):
        result["poll_interval"] = os.environ["TICKETSYNC_POLL_INTERVAL"]
    return result


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from a YAML file and the environment.

    Environment variables take precedence over the file. Without a file,
    settings come from the environment alone. When no token is configured,
    `gh auth token` is tried.

    Args:
        config_path: Path to a ticketsync.yaml file. Defaults to
            TICKETSYNC_CONFIG, then ./ticketsync.yaml if it exists.

    Returns:
        Parsed settings.

    Raises:
        ConfigError: If the file doesn't exist or is invalid.
    """
    data: dict[str, Any] = {}

    if config_path is None:
        env_path = os.environ.get("TICKETSYNC_CONFIG")
        if env_path:
            config_path = env_path
        elif Path(DEFAULT_CONFIG_FILE).exists():
            config_path = DEFAULT_CONFIG_FILE

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        try:
            with open(config_path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Configuration must be a YAML mapping, got {type(loaded).__name__}")
        data = loaded

    settings = Settings.from_dict(_apply_env(data))
    if not settings.token:
        settings.token = _get_github_token()
    return settings
