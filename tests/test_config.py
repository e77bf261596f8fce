"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from matrix_todo.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("SLACK_SIGNING_SECRET", raising=False)
    settings = Settings(_env_file=None)

    assert settings.slack_signing_secret == ""
    assert settings.message_fetch_timeout == 10.0
    assert settings.title_timeout == 15.0
    assert settings.app_base_url == "http://localhost:8080"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SLACK_SIGNING_SECRET", "from-env")
    monkeypatch.setenv("APP_BASE_URL", "https://todo.example.com/")

    settings = Settings(_env_file=None)

    assert settings.slack_signing_secret == "from-env"
    assert settings.app_base_url == "https://todo.example.com"


def test_timeouts_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, message_fetch_timeout=0)
