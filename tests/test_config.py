"""
tests/test_config.py

Environment-driven settings: defaults, overrides and safe fallback on
malformed values.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from app.config import AssistantSettings, get_assistant_settings

_ENV_NAMES = (
    "LOG_LEVEL",
    "ASSISTANT_RESPONSE_DELAY_SECONDS",
    "BOOKMARK_STORE_DIR",
    "API_TITLE",
    "DEFAULT_USER_ROLE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_assistant_settings.cache_clear()
    yield
    get_assistant_settings.cache_clear()


def test_defaults() -> None:
    assert get_assistant_settings() == AssistantSettings()


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ASSISTANT_RESPONSE_DELAY_SECONDS", "1.5")
    monkeypatch.setenv("BOOKMARK_STORE_DIR", "/tmp/marks")
    monkeypatch.setenv("DEFAULT_USER_ROLE", "Supervisor")

    settings = get_assistant_settings()

    assert settings.log_level == "DEBUG"
    assert settings.response_delay_seconds == pytest.approx(1.5)
    assert settings.bookmark_store_dir == "/tmp/marks"
    assert settings.default_user_role == "supervisor"


@pytest.mark.parametrize("raw, expected", [("abc", 0.0), ("-2", 0.0), ("0.25", 0.25)])
def test_delay_is_parsed_safely(monkeypatch: pytest.MonkeyPatch, raw: str, expected: float) -> None:
    monkeypatch.setenv("ASSISTANT_RESPONSE_DELAY_SECONDS", raw)
    assert get_assistant_settings().response_delay_seconds == pytest.approx(expected)


def test_blank_string_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_TITLE", "   ")
    assert get_assistant_settings().api_title == AssistantSettings().api_title


def test_settings_are_cached() -> None:
    assert get_assistant_settings() is get_assistant_settings()
