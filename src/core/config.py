"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (HTTP/platform API) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "appship"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "appship"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "appship"
    return Path.home() / ".config" / "appship"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated values at the edge (env vars) keep the core free of parsing.
    - A single config contract shared by the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="APPSHIP_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the per-user config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://appship.dev/api/platform/cli",
        min_length=8,
        description="Base URL of the platform management API.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="appship-cli/0.1",
        min_length=1,
        description="User-Agent sent to the platform API.",
    )

    deploy_key: str | None = Field(
        default=None,
        description="Deploy key; overrides the one stored in the auth file.",
    )
    auth_file: Path = Field(
        default_factory=lambda: Path.home() / ".appshiprc",
        description="JSON file holding the stored deploy key (`deployKey`).",
    )
    app_rc_filename: str = Field(
        default=".appshipapprc",
        min_length=1,
        description="Per-project file linking a directory to a remote app.",
    )
    changelog_filename: str = Field(
        default="CHANGELOG.md",
        min_length=1,
        description="Changelog file looked up in the project directory.",
    )
