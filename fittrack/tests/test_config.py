from __future__ import annotations

import pytest
from pydantic import ValidationError

from fittrack.shared.config import AppConfig, load_config
from fittrack.shared.config.settings import SecurityConfig, SessionConfig


def test_loaded_config_reflects_environment() -> None:
    config = load_config()

    assert config.session.cookie_secret == "test-cookie-secret"
    assert config.session.cookie_name == "session"
    assert config.session.lifetime_seconds == 30 * 24 * 60 * 60
    assert config.pagination.max_limit == 100
    assert config.pagination.default_limit == 10
    assert config.security.enable_rate_limit is False


def test_missing_cookie_secret_refuses_to_load(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SESSION_COOKIE_SECRET", raising=False)

    with pytest.raises(ValidationError):
        SessionConfig(_env_file=None)


def test_allowed_origins_from_comma_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    assert SecurityConfig(_env_file=None).allowed_origins == [
        "https://a.example",
        "https://b.example",
    ]


def test_production_rejects_weak_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SESSION_COOKIE_SECRET", "secret")

    with pytest.raises(SystemExit):
        AppConfig(_env_file=None)
