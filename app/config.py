"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class AssistantSettings:
    """
    Runtime settings for the assistant API and UI.
    """

    log_level: str = "INFO"
    response_delay_seconds: float = 0.0
    bookmark_store_dir: str = ".bookmarks"
    api_title: str = "Call Center Analytics Assistant API"
    default_user_role: str = "agent"


@lru_cache(maxsize=1)
def get_assistant_settings() -> AssistantSettings:
    """
    Return cached assistant settings from environment variables.

    Missing or malformed values fall back to the defaults.
    """

    return AssistantSettings(
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
        response_delay_seconds=max(0.0, _get_float_env("ASSISTANT_RESPONSE_DELAY_SECONDS", 0.0)),
        bookmark_store_dir=_get_str_env("BOOKMARK_STORE_DIR", ".bookmarks"),
        api_title=_get_str_env("API_TITLE", "Call Center Analytics Assistant API"),
        default_user_role=_get_str_env("DEFAULT_USER_ROLE", "agent").lower(),
    )
