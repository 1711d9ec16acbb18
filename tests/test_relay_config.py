"""Tests for environment-driven relay configuration."""
import logging

import pytest

from scp_relay.server.config import (
    CorsConfig,
    JanitorConfig,
    RelayConfig,
    _parse_bool,
    load_config_from_env,
)

_RELAY_VARS = (
    "RELAY_HOST", "PORT", "RELAY_LOG_LEVEL", "RELAY_ACK_DELAY", "RELAY_SWEEP_INTERVAL",
    "RELAY_SESSION_MAX_AGE", "RELAY_CORS_ENABLED", "RELAY_CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _RELAY_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_matches_dataclass_defaults(self) -> None:
        assert load_config_from_env() == RelayConfig()

    def test_retention_window(self) -> None:
        config = RelayConfig()
        assert config.janitor == JanitorConfig(sweep_interval=300.0, session_max_age=3600.0)
        assert config.ack_delay == 0.1
        assert config.port == 3001

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            RelayConfig().port = 1  # type: ignore[misc]


class TestOverrides:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELAY_HOST", "127.0.0.1")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("RELAY_LOG_LEVEL", "debug")
        monkeypatch.setenv("RELAY_ACK_DELAY", "0.5")
        monkeypatch.setenv("RELAY_SWEEP_INTERVAL", "60")
        monkeypatch.setenv("RELAY_SESSION_MAX_AGE", "600")
        monkeypatch.setenv("RELAY_CORS_ENABLED", "false")
        monkeypatch.setenv("RELAY_CORS_ORIGINS", "http://a.example, http://b.example")

        config = load_config_from_env()

        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.log_level == "DEBUG"
        assert config.ack_delay == 0.5
        assert config.janitor == JanitorConfig(sweep_interval=60.0, session_max_age=600.0)
        assert config.cors == CorsConfig(enabled=False, allow_origins=("http://a.example", "http://b.example"))

    def test_bad_number_names_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELAY_ACK_DELAY", "soon")
        with pytest.raises(ValueError, match="RELAY_ACK_DELAY"):
            load_config_from_env()

    def test_negative_number_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELAY_SWEEP_INTERVAL", "-1")
        with pytest.raises(ValueError, match="RELAY_SWEEP_INTERVAL"):
            load_config_from_env()

    def test_empty_origins_fall_back_to_wildcard(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELAY_CORS_ORIGINS", " , ")
        assert load_config_from_env().cors.allow_origins == ("*",)


class TestParseBool:
    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("1", True), ("YES", True),
        ("false", False), ("0", False), ("No", False),
    ])
    def test_recognised(self, value: str, expected: bool) -> None:
        assert _parse_bool(value, default=not expected) is expected

    def test_empty_uses_default(self) -> None:
        assert _parse_bool("", default=True) is True

    def test_unrecognised_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            assert _parse_bool("ture", default=False) is False
        assert "Unrecognised boolean value" in caplog.text
