"""
Call Context and Configuration State for Logging.

A contextvar carries the current call id so every line logged during one
API call (or one CLI invocation) can be correlated. Module-level state
holds the resolved logging configuration.

Environment Variables:
    - CEREVOICE_LOG_LEVEL: Override log level (1-4 or name)
    - CEREVOICE_LOG_DIR: Directory for the JSONL log file
    - CEREVOICE_JSONL_FILE: JSONL filename
    - CEREVOICE_SETTINGS: Settings file holding a `logging:` section
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict

import yaml

from .levels import LEVEL_NAMES, LogLevel

_request_id: ContextVar[str] = ContextVar("request_id", default="-")

_configured: bool = False
_log_config: Dict[str, Any] = {}
_current_level: LogLevel = LogLevel.NORMAL


def get_request_id() -> str:
    """Get current call id from context, or "-" if not set."""
    return _request_id.get()


def set_request_id(rid: str) -> None:
    """Set the call id used to correlate log lines."""
    _request_id.set(rid)


def get_level() -> LogLevel:
    return _current_level


def set_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_level_name() -> str:
    """Get current log level as human-readable name."""
    return LEVEL_NAMES.get(_current_level, "NORMAL")


def is_configured() -> bool:
    return _configured


def set_configured(value: bool) -> None:
    global _configured
    _configured = value


def get_log_config() -> Dict[str, Any]:
    return _log_config


def set_log_config(config: Dict[str, Any]) -> None:
    global _log_config
    _log_config = config


def read_logging_config() -> Dict[str, Any]:
    """
    Read logging configuration from settings file and environment.

    Environment variables take precedence over the settings file's
    `logging:` section. A missing or unreadable settings file is not an
    error here; defaults apply.

    Returns:
        Dictionary with resolved logging configuration.
    """
    cfg: Dict[str, Any] = {}

    settings_path = os.getenv("CEREVOICE_SETTINGS", "config/settings.yaml")
    try:
        from cerevoice.core.config import load_settings
        settings = load_settings(settings_path)
        cfg.update(settings.raw.get("logging", {}) or {})
    except (FileNotFoundError, yaml.YAMLError):
        pass

    if os.getenv("CEREVOICE_LOG_LEVEL"):
        cfg["level"] = os.environ["CEREVOICE_LOG_LEVEL"]
    if os.getenv("CEREVOICE_LOG_DIR"):
        cfg["log_dir"] = os.environ["CEREVOICE_LOG_DIR"]
    if os.getenv("CEREVOICE_JSONL_FILE"):
        cfg["jsonl_file"] = os.environ["CEREVOICE_JSONL_FILE"]

    return cfg
