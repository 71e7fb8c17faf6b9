"""
Configuration Management for cerevoice-client.

This module provides centralized configuration handling with:
    - Default values (Defaults class)
    - A frozen ClientConfig used by CereVoiceClient
    - YAML file loading with environment variable overrides
    - Validation with meaningful error messages

Configuration Hierarchy (highest priority first):
    1. Environment variables (CEREVOICE_ACCOUNT_ID, CEREVOICE_PASSWORD, ...)
    2. YAML config file (config/settings.yaml)
    3. Defaults class values

Example settings.yaml:
    api:
      url: https://cerevoice.com/rest/rest_1_1.php
      account_id: my-account
      password: my-password
      timeout_s: 5.0

    logging:
      level: 2  # NORMAL
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import os
import yaml


class ConfigValidationError(Exception):
    """Raised when a configuration value is outside acceptable bounds."""
    pass


class Defaults:
    """
    Centralized default configuration values.

    Used when no override is provided via YAML config or environment.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # API Endpoint
    # ─────────────────────────────────────────────────────────────────────────
    API_URL = "https://cerevoice.com/rest/rest_1_1.php"
    API_TIMEOUT_S = 5.0             # Same as httpx's default timeout

    # ─────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────
    LOGGING_LEVEL = 2                   # 1=MINIMAL, 2=NORMAL, 3=VERBOSE, 4=DEBUG
    LOGGING_TEXT_PREVIEW_CHARS = 40     # Characters of input text shown in logs

    SETTINGS_PATH = "config/settings.yaml"


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection settings for CereVoiceClient.

    Immutable for the lifetime of a client. Build it directly or from
    loaded Settings via from_settings().

    Attributes:
        account_id: CereVoice Cloud account id.
        password: CereVoice Cloud password (sent in every request body).
        api_url: REST endpoint receiving the XML requests.
        timeout_s: Per-request timeout handed to httpx.
    """
    account_id: str
    password: str
    api_url: str = Defaults.API_URL
    timeout_s: float = Defaults.API_TIMEOUT_S

    def __repr__(self) -> str:
        return (
            f"ClientConfig(account_id={self.account_id!r}, password='***', "
            f"api_url={self.api_url!r}, timeout_s={self.timeout_s!r})"
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ClientConfig":
        """
        Create a validated ClientConfig from Settings.

        Raises:
            ConfigValidationError: If the URL is empty or the timeout is
                not positive.
        """
        config = cls(
            account_id=settings.account_id,
            password=settings.password,
            api_url=settings.api_url,
            timeout_s=settings.timeout_s,
        )
        if not config.api_url.strip():
            raise ConfigValidationError("api.url must not be empty")
        cls._validate_positive("api.timeout_s", config.timeout_s)
        return config

    @staticmethod
    def _validate_positive(name: str, value: int | float) -> None:
        """Validate that a value is positive (> 0)."""
        if value <= 0:
            raise ConfigValidationError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings container loaded from YAML.

    Attributes:
        raw: Dictionary of raw configuration values.

    Properties provide typed access with defaults applied.
    """
    raw: Dict[str, Any]

    @property
    def _api(self) -> Dict[str, Any]:
        # An "api:" key with every entry commented out loads as None
        return self.raw.get("api") or {}

    @property
    def api_url(self) -> str:
        """Get the CereVoice REST endpoint."""
        return str(self._api.get("url") or Defaults.API_URL)

    @property
    def account_id(self) -> str:
        """Get the account id (empty string if unset)."""
        return str(self._api.get("account_id") or "")

    @property
    def password(self) -> str:
        """Get the account password (empty string if unset)."""
        return str(self._api.get("password") or "")

    @property
    def timeout_s(self) -> float:
        """Get the HTTP timeout in seconds."""
        value = self._api.get("timeout_s", Defaults.API_TIMEOUT_S)
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigValidationError(f"api.timeout_s must be a number, got {value!r}") from exc

    def get_client_config(self) -> ClientConfig:
        """Get validated ClientConfig from these settings."""
        return ClientConfig.from_settings(self)


def apply_env_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply CEREVOICE_* environment variables on top of a raw settings dict.

    Environment variable overrides:
        - CEREVOICE_API_URL: api.url
        - CEREVOICE_ACCOUNT_ID: api.account_id
        - CEREVOICE_PASSWORD: api.password
        - CEREVOICE_TIMEOUT_S: api.timeout_s
    """
    env_map = {
        "CEREVOICE_API_URL": "url",
        "CEREVOICE_ACCOUNT_ID": "account_id",
        "CEREVOICE_PASSWORD": "password",
        "CEREVOICE_TIMEOUT_S": "timeout_s",
    }
    for env_name, key in env_map.items():
        value = os.getenv(env_name)
        if value:
            api = raw.get("api") or {}
            api[key] = value
            raw["api"] = api
    return raw


def load_settings(path: str = Defaults.SETTINGS_PATH) -> Settings:
    """
    Load settings from a YAML configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Settings object with loaded configuration and env overrides.

    Raises:
        FileNotFoundError: If the settings file doesn't exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"settings file not found: {p.resolve()}")

    with p.open("r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    return Settings(raw=apply_env_overrides(raw))


def settings_from_env() -> Settings:
    """Build Settings from environment variables alone (no YAML file)."""
    return Settings(raw=apply_env_overrides({}))
