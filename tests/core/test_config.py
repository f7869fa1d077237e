"""Tests for settings loading."""

from skills_service.core.config import Settings, get_settings


def test_defaults():
    settings = Settings()

    assert settings.MAX_SELF_REPORT_MESSAGE_LENGTH == 500
    assert settings.API_PREFIX == "/api"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("MAX_SELF_REPORT_MESSAGE_LENGTH", "42")

    assert Settings().MAX_SELF_REPORT_MESSAGE_LENGTH == 42


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
