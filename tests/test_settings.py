"""Configuration loading for the admin console."""

import pytest
from pydantic import ValidationError

from app.config.settings import Settings


def test_backend_variables_are_required(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_backend_variable_is_rejected(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://backend.test")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "   ")

    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None)

    assert "Missing backend environment variables" in str(exc_info.value)


def test_backend_url_is_normalized(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.backend.test/")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")

    settings = Settings(_env_file=None)

    assert settings.supabase_url == "https://project.backend.test"
    assert settings.backend_host == "project.backend.test"


def test_defaults(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://backend.test")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.delenv("BACKEND_TIMEOUT", raising=False)

    settings = Settings(_env_file=None)

    assert settings.backend_timeout is None
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.host == "127.0.0.1"
    assert settings.cors_origins == []


def test_timeout_from_environment(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://backend.test")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    monkeypatch.setenv("BACKEND_TIMEOUT", "2.5")

    assert Settings(_env_file=None).backend_timeout == 2.5
