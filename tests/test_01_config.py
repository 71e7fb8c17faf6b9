"""
Tests for configuration defaults, loading and validation.

Tests cover:
- Defaults class values
- Settings properties and fallbacks
- ClientConfig.from_settings() validation
- load_settings() from YAML with env overrides
- Password masking in repr
"""

from dataclasses import FrozenInstanceError

import pytest

from cerevoice.core.config import (
    ClientConfig,
    ConfigValidationError,
    Defaults,
    Settings,
    load_settings,
    settings_from_env,
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("CEREVOICE_API_URL", "CEREVOICE_ACCOUNT_ID", "CEREVOICE_PASSWORD", "CEREVOICE_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Tests for Defaults class values."""

    def test_api_defaults(self):
        """Default endpoint is the public CereVoice REST URL."""
        assert Defaults.API_URL == "https://cerevoice.com/rest/rest_1_1.php"
        assert Defaults.API_TIMEOUT_S == 5.0

    def test_logging_defaults(self):
        assert Defaults.LOGGING_LEVEL == 2


class TestSettings:
    """Tests for Settings properties."""

    def test_empty_settings_use_defaults(self):
        """Missing api section falls back to defaults."""
        settings = Settings(raw={})
        assert settings.api_url == Defaults.API_URL
        assert settings.account_id == ""
        assert settings.password == ""
        assert settings.timeout_s == Defaults.API_TIMEOUT_S

    def test_values_from_raw(self):
        settings = Settings(raw={"api": {
            "url": "http://localhost:9000/rest",
            "account_id": "abc",
            "password": "pw",
            "timeout_s": "12.5",
        }})
        assert settings.api_url == "http://localhost:9000/rest"
        assert settings.account_id == "abc"
        assert settings.password == "pw"
        assert settings.timeout_s == 12.5

    def test_non_numeric_timeout_rejected(self):
        settings = Settings(raw={"api": {"timeout_s": "soon"}})
        with pytest.raises(ConfigValidationError):
            _ = settings.timeout_s

    def test_settings_is_frozen(self):
        settings = Settings(raw={})
        with pytest.raises(FrozenInstanceError):
            settings.raw = {"api": {}}


class TestClientConfig:
    """Tests for ClientConfig construction and validation."""

    def test_defaults(self):
        config = ClientConfig(account_id="a", password="p")
        assert config.api_url == Defaults.API_URL
        assert config.timeout_s == Defaults.API_TIMEOUT_S

    def test_from_settings(self):
        settings = Settings(raw={"api": {"account_id": "a", "password": "p", "timeout_s": 3}})
        config = ClientConfig.from_settings(settings)
        assert config == ClientConfig(account_id="a", password="p", timeout_s=3.0)

    def test_get_client_config_shortcut(self):
        settings = Settings(raw={"api": {"account_id": "a"}})
        assert settings.get_client_config().account_id == "a"

    def test_zero_timeout_rejected(self):
        settings = Settings(raw={"api": {"timeout_s": 0}})
        with pytest.raises(ConfigValidationError, match="timeout_s must be positive"):
            ClientConfig.from_settings(settings)

    def test_negative_timeout_rejected(self):
        settings = Settings(raw={"api": {"timeout_s": -1}})
        with pytest.raises(ConfigValidationError):
            ClientConfig.from_settings(settings)

    def test_blank_url_rejected(self):
        settings = Settings(raw={"api": {"url": "   "}})
        with pytest.raises(ConfigValidationError, match="api.url"):
            ClientConfig.from_settings(settings)

    def test_repr_masks_password(self):
        config = ClientConfig(account_id="a", password="hunter2")
        assert "hunter2" not in repr(config)
        assert "***" in repr(config)

    def test_immutable(self):
        config = ClientConfig(account_id="a", password="p")
        with pytest.raises(FrozenInstanceError):
            config.password = "other"


class TestLoadSettings:
    """Tests for load_settings() and environment overrides."""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(str(tmp_path / "nope.yaml"))

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "api:\n  account_id: from-file\n  password: pw\n  timeout_s: 2.5\n",
            encoding="utf-8",
        )
        settings = load_settings(str(path))
        assert settings.account_id == "from-file"
        assert settings.timeout_s == 2.5

    def test_empty_yaml_is_empty_settings(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(str(path)).raw == {}

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("api:\n  account_id: from-file\n", encoding="utf-8")
        monkeypatch.setenv("CEREVOICE_ACCOUNT_ID", "from-env")
        monkeypatch.setenv("CEREVOICE_API_URL", "http://override/rest")
        settings = load_settings(str(path))
        assert settings.account_id == "from-env"
        assert settings.api_url == "http://override/rest"

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("CEREVOICE_ACCOUNT_ID", "env-id")
        monkeypatch.setenv("CEREVOICE_PASSWORD", "env-pw")
        monkeypatch.setenv("CEREVOICE_TIMEOUT_S", "9")
        config = settings_from_env().get_client_config()
        assert config.account_id == "env-id"
        assert config.password == "env-pw"
        assert config.timeout_s == 9.0


class TestEmptyApiSection:
    """An `api:` key with every entry commented out loads as None."""

    def test_properties_fall_back_to_defaults(self):
        settings = Settings(raw={"api": None})
        assert settings.api_url == Defaults.API_URL
        assert settings.account_id == ""
        assert settings.timeout_s == Defaults.API_TIMEOUT_S

    def test_file_without_env(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("api:\n  # account_id: x\n", encoding="utf-8")
        config = load_settings(str(path)).get_client_config()
        assert config.account_id == ""
        assert config.api_url == Defaults.API_URL

    def test_env_fills_empty_section(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("api:\n  # account_id: x\n", encoding="utf-8")
        monkeypatch.setenv("CEREVOICE_ACCOUNT_ID", "acc")
        settings = load_settings(str(path))
        assert settings.raw["api"] == {"account_id": "acc"}
        assert settings.account_id == "acc"
