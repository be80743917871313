"""Application settings.

Values come from `YAMMER_*` environment variables, a `.env` in the working
directory, and the per-user `.env` (in that order of precedence). CLI flags
override them per invocation.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from yammer import __version__
from yammer.core.domain.models import ConflictPolicy


def get_user_config_dir() -> Path:
    """Per-user configuration directory, following each platform's convention."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "yammer"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "yammer"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "yammer"
    return Path.home() / ".config" / "yammer"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central configuration shared by the CLI and the adapters."""

    model_config = SettingsConfigDict(
        env_prefix="YAMMER_",
        extra="ignore",
        case_sensitive=False,
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default=f"yammer/{__version__}",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    raw_base_url: str = Field(
        default="https://raw.githubusercontent.com",
        min_length=8,
        description="Base URL of the raw file host (<base>/<owner>/<repo>/<ref>/<path>).",
    )
    max_concurrency: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Maximum number of documents fetched at the same time.",
    )
    on_conflict: ConflictPolicy = Field(
        default=ConflictPolicy.FAIL,
        description="What to do when two selectors define the same name differently.",
    )
