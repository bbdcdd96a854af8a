"""Tests for configuration settings loading."""

from license_fetch.config.config import Settings


def test_defaults_without_environment():
    settings = Settings()

    assert settings.license_max_attempts == 3
    assert settings.license_base_delay_ms == 1000.0
    assert settings.license_backoff_factor == 2.0
    assert settings.license_request_timeout_ms == 0.0
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LICENSE_MAX_ATTEMPTS", "7")
    monkeypatch.setenv("LICENSE_BASE_DELAY_MS", "125.5")
    monkeypatch.setenv("LICENSE_BACKOFF_FACTOR", "3")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.license_max_attempts == 7
    assert settings.license_base_delay_ms == 125.5
    assert settings.license_backoff_factor == 3.0
    assert settings.log_level == "DEBUG"


def test_legacy_delay_alias(monkeypatch):
    monkeypatch.setenv("LICENSE_RETRY_DELAY_MS", "40")

    assert Settings().license_base_delay_ms == 40.0


def test_unparseable_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("LICENSE_MAX_ATTEMPTS", "not-an-int")
    monkeypatch.setenv("LICENSE_BACKOFF_FACTOR", "fast")

    settings = Settings()

    assert settings.license_max_attempts == 3
    assert settings.license_backoff_factor == 2.0


def test_out_of_range_values_are_clamped(monkeypatch, caplog):
    caplog.set_level("WARNING")
    monkeypatch.setenv("LICENSE_MAX_ATTEMPTS", "0")
    monkeypatch.setenv("LICENSE_BASE_DELAY_MS", "-5")
    monkeypatch.setenv("LICENSE_BACKOFF_FACTOR", "0.25")

    settings = Settings()

    assert settings.license_max_attempts == 1
    assert settings.license_base_delay_ms == 0.0
    assert settings.license_backoff_factor == 1.0
    assert "must be at least 1" in caplog.text
    assert "must not be negative" in caplog.text
