"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking them
  into the CLI.
- Lets adapters (HTTP, config store) read settings consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "dominos-cli"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Application settings.

    These are runtime knobs (where the config lives, which API to talk to),
    not the user's order configuration. That one is the JSON document handled
    by `adapters.config_store`.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOMINOS_CLI_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    config_dir: Path | None = Field(
        default=None,
        description="Directory holding config.json (defaults to the per-user config dir).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per provider request (seconds).",
    )
    user_agent: str = Field(
        default="dominos-cli/0.1 (+https://local)",
        min_length=1,
        description="User-Agent sent to the ordering API.",
    )
    api_base_url: str = Field(
        default="https://order.dominos.com",
        min_length=8,
        description="Base URL for store lookup, validate, price and place calls.",
    )
    tracker_base_url: str = Field(
        default="https://tracker.dominos.com",
        min_length=8,
        description="Base URL for phone-based order tracking.",
    )
    language_code: str = Field(
        default="en",
        min_length=2,
        max_length=5,
        description="Language code sent with orders.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level for the RichHandler (DEBUG, INFO, WARNING...).",
    )

    def resolve_config_path(self) -> Path:
        base = self.config_dir or get_user_config_dir()
        return base / "config.json"
