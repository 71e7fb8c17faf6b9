"""Tests for the logging system and client call logging."""
from __future__ import annotations

import json
import logging
import subprocess
import sys

import httpx
import pytest

import cerevoice.core.logging as core_log
from cerevoice.core.logging import (
    LEVEL_MAP,
    LogLevel,
    coerce_level,
    configure_logging,
    get_level,
    get_logger,
    info,
    set_request_id,
    verbose,
)
from cerevoice.core.logging.formatters import ColoredConsoleFormatter, JsonlFormatter


@pytest.fixture
def clean_logging(monkeypatch):
    """Reconfigure logging from a clean environment, restore afterwards."""
    for name in ("CEREVOICE_LOG_LEVEL", "CEREVOICE_LOG_DIR", "CEREVOICE_JSONL_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CEREVOICE_SETTINGS", "does-not-exist.yaml")
    monkeypatch.setenv("CEREVOICE_NO_COLOR", "1")
    yield monkeypatch
    monkeypatch.undo()
    configure_logging(force=True)
    set_request_id("-")


def _flush():
    for handler in logging.getLogger("cerevoice").handlers:
        handler.flush()


class TestLevels:
    """LogLevel enum and coercion."""

    def test_enum_values(self):
        assert LogLevel.MINIMAL == 1
        assert LogLevel.NORMAL == 2
        assert LogLevel.VERBOSE == 3
        assert LogLevel.DEBUG == 4

    def test_coerce_int(self):
        assert coerce_level(3) == LogLevel.VERBOSE

    def test_coerce_names(self):
        assert coerce_level("debug") == LogLevel.DEBUG
        assert coerce_level("INFO") == LogLevel.NORMAL
        assert coerce_level("warning") == LogLevel.MINIMAL
        assert coerce_level("4") == LogLevel.DEBUG

    def test_coerce_python_levels(self):
        assert coerce_level(logging.WARNING) == LogLevel.MINIMAL
        assert coerce_level(logging.INFO) == LogLevel.NORMAL
        assert coerce_level(logging.DEBUG) == LogLevel.DEBUG

    def test_unknown_defaults_to_normal(self):
        assert coerce_level("loud") == LogLevel.NORMAL
        assert coerce_level(None) == LogLevel.NORMAL


class TestConfigure:
    """configure_logging() behaviour."""

    def test_env_level(self, clean_logging):
        clean_logging.setenv("CEREVOICE_LOG_LEVEL", "VERBOSE")
        configure_logging(force=True)
        assert get_level() == LogLevel.VERBOSE

    def test_explicit_level_wins(self, clean_logging):
        clean_logging.setenv("CEREVOICE_LOG_LEVEL", "4")
        configure_logging(level=1, force=True)
        assert get_level() == LogLevel.MINIMAL

    def test_level_filters_messages(self, clean_logging, capsys):
        configure_logging(level=LogLevel.NORMAL, force=True)
        log = get_logger("cerevoice.test")
        info(log, "shown_message")
        verbose(log, "hidden_message")
        err = capsys.readouterr().err
        assert "shown_message" in err
        assert "hidden_message" not in err

    def test_console_line_format(self, clean_logging, capsys):
        configure_logging(level=2, force=True)
        set_request_id("rid-42")
        info(get_logger("cerevoice.test"), "hello", operation="getCredit", seconds=0.25)
        err = capsys.readouterr().err
        assert "[ INFO  ]" in err
        assert "(rid-42)" in err
        assert "operation=getCredit" in err
        assert "0.250s" in err

    def test_jsonl_file(self, clean_logging, tmp_path):
        clean_logging.setenv("CEREVOICE_LOG_DIR", str(tmp_path))
        clean_logging.setenv("CEREVOICE_JSONL_FILE", "test.jsonl")
        configure_logging(force=True)
        set_request_id("rid-1")
        info(get_logger("cerevoice.test"), "hello", foo="bar")
        _flush()

        line = (tmp_path / "test.jsonl").read_text(encoding="utf-8").strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["message"] == "hello"
        assert payload["request_id"] == "rid-1"
        assert payload["extra"]["foo"] == "bar"


class TestFormatters:
    """Formatter output without handlers."""

    def _record(self, **extra):
        record = logging.LogRecord("cerevoice.x", logging.INFO, __file__, 1, "msg", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_jsonl_minimal(self):
        payload = json.loads(JsonlFormatter().format(self._record()))
        assert payload["message"] == "msg"
        assert "extra" not in payload
        assert "seconds" not in payload

    def test_console_without_colors(self, monkeypatch):
        monkeypatch.setattr(core_log.formatters, "USE_COLORS", False)
        line = ColoredConsoleFormatter().format(self._record(tag="WARN", extra_data={"status": 500}))
        assert "\033[" not in line
        assert "[ WARN  ]" in line
        assert "status=500" in line

    def test_console_with_colors(self, monkeypatch):
        monkeypatch.setattr(core_log.formatters, "USE_COLORS", True)
        line = ColoredConsoleFormatter().format(self._record(tag="FAIL"))
        assert "\033[" in line


class TestClientLogging:
    """The client logs each call and never the password."""

    def _client(self, handler):
        from cerevoice.client import CereVoiceClient
        from cerevoice.core.config import ClientConfig

        config = ClientConfig(account_id="acc", password="top-secret-pw", api_url="https://cv.test/rest")
        return CereVoiceClient(config, transport=httpx.MockTransport(handler))

    def test_call_ok_logged_without_password(self, clean_logging, tmp_path):
        clean_logging.setenv("CEREVOICE_LOG_DIR", str(tmp_path))
        configure_logging(level=LogLevel.DEBUG, force=True)

        client = self._client(lambda request: httpx.Response(200, content=b"<r/>"))
        assert client.get_credit().ok
        _flush()

        text = (tmp_path / "cerevoice.jsonl").read_text(encoding="utf-8")
        messages = [json.loads(line)["message"] for line in text.splitlines()]
        assert "request_envelope" in messages
        assert "call_ok" in messages
        assert "top-secret-pw" not in text

    def test_failure_logged(self, clean_logging, tmp_path):
        clean_logging.setenv("CEREVOICE_LOG_DIR", str(tmp_path))
        configure_logging(level=LogLevel.MINIMAL, force=True)

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert not self._client(handler).list_voices().ok
        _flush()

        payloads = [json.loads(line) for line in (tmp_path / "cerevoice.jsonl").read_text(encoding="utf-8").splitlines()]
        failed = [p for p in payloads if p["message"] == "call_failed"]
        assert failed
        assert failed[-1]["tag"] == "FAIL"
        assert failed[-1]["extra"]["error"] == "TRANSPORT_ERROR"


class TestLoggerLevels:
    """The package logger lets every helper's records reach the handlers."""

    def test_effective_level_below_debug(self, clean_logging):
        configure_logging(level=LogLevel.DEBUG, force=True)
        lowest = LEVEL_MAP[LogLevel.DEBUG]
        assert logging.getLogger("cerevoice").getEffectiveLevel() <= lowest
        assert logging.getLogger("cerevoice.client").getEffectiveLevel() <= lowest

    def test_root_level_does_not_filter(self, clean_logging, capsys):
        root = logging.getLogger()
        clean_logging.setattr(root, "level", logging.ERROR)
        configure_logging(level=LogLevel.VERBOSE, force=True)
        verbose(get_logger("cerevoice.client"), "verbose_line")
        assert "verbose_line" in capsys.readouterr().err

    def test_cli_dry_run_logged_at_debug(self, clean_logging, capsys, tmp_path):
        from cerevoice import cli

        clean_logging.chdir(tmp_path)
        clean_logging.delenv("CEREVOICE_SETTINGS")
        configure_logging(level=LogLevel.DEBUG, force=True)
        assert cli.main(["--account-id", "a", "--password", "p", "--dry-run", "speak", "Jess", "hi"]) == 0
        assert "dry_run" in capsys.readouterr().err


class TestImportSideEffects:
    """Importing the library leaves logging to the host application."""

    def test_import_does_not_configure(self, tmp_path):
        code = (
            "import logging, cerevoice\n"
            "from cerevoice.core.logging import context\n"
            "pkg = logging.getLogger('cerevoice')\n"
            "print(context.is_configured(), len(pkg.handlers), pkg.propagate)\n"
        )
        result = subprocess.run(
            [sys.executable, "-c", code],
            capture_output=True,
            text=True,
            cwd=tmp_path,
        )
        assert result.returncode == 0, result.stderr
        assert result.stdout.split() == ["False", "0", "True"]

    def test_unconfigured_records_propagate(self, clean_logging, caplog):
        from cerevoice.client import CereVoiceClient
        from cerevoice.core.config import ClientConfig

        pkg = logging.getLogger("cerevoice")
        clean_logging.setattr(pkg, "handlers", [])
        clean_logging.setattr(pkg, "propagate", True)
        config = ClientConfig(account_id="a", password="p", api_url="https://cv.test/rest")
        client = CereVoiceClient(config, transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"")))

        with caplog.at_level(logging.INFO):
            assert not client.get_credit().ok
        assert any(r.name == "cerevoice.client" and r.getMessage() == "call_failed" for r in caplog.records)


class TestPublicHelpers:
    """Exported helpers match what the package uses."""

    def test_all_names_resolve(self):
        for name in core_log.__all__:
            assert hasattr(core_log, name), name

    def test_helper_set(self):
        helpers = {"info", "warn", "fail", "verbose", "debug"}
        assert helpers <= set(core_log.__all__)
        assert not {"error", "success"} & set(core_log.__all__)
