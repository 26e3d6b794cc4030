"""Tests for structured logging."""

import json
import logging

import pytest
import structlog

from mission_control.observability.logging import (
    _add_request_id,
    _redact_sensitive,
    clear_request_id,
    configure_logging,
    get_logger,
    request_id_var,
    set_request_id,
)


class TestRequestIdContext:
    """Tests for request ID context variable."""

    def test_request_id_default_none(self):
        """Request ID is None by default."""
        clear_request_id()
        assert request_id_var.get() is None

    def test_set_and_clear(self):
        """set_request_id and clear_request_id update the context variable."""
        set_request_id("1700000000.000100")
        assert request_id_var.get() == "1700000000.000100"
        clear_request_id()
        assert request_id_var.get() is None


class TestAddRequestIdProcessor:
    """Tests for _add_request_id processor."""

    def test_adds_request_id_when_set(self):
        """Adds request_id to event dict when set."""
        set_request_id("req-abc")
        try:
            result = _add_request_id(None, None, {"event": "test"})
            assert result["request_id"] == "req-abc"
        finally:
            clear_request_id()

    def test_no_request_id_when_not_set(self):
        """Does not add request_id when not set."""
        clear_request_id()
        result = _add_request_id(None, None, {"event": "test"})
        assert "request_id" not in result


class TestRedactSensitiveProcessor:
    """Tests for _redact_sensitive processor."""

    @pytest.mark.parametrize(
        "field",
        ["account_key", "private_key", "bot_token", "app_token", "slack_bot_token", "password"],
    )
    def test_redacts_secret_fields(self, field):
        """Secret fields are replaced."""
        result = _redact_sensitive(None, None, {"event": "test", field: "xoxb-secret"})
        assert result[field] == "[REDACTED]"

    def test_redacts_case_insensitive(self):
        """Redacts fields case-insensitively."""
        result = _redact_sensitive(None, None, {"event": "test", "Account_Key": "0x123"})
        assert result["Account_Key"] == "[REDACTED]"

    def test_preserves_token_settings(self):
        """token_count and token_symbol are not secrets."""
        event_dict = {"event": "startup", "token_count": 10, "token_symbol": "DEV"}
        result = _redact_sensitive(None, None, event_dict)
        assert result["token_count"] == 10
        assert result["token_symbol"] == "DEV"

    def test_preserves_non_sensitive(self):
        """Preserves ordinary fields."""
        result = _redact_sensitive(None, None, {"event": "test", "user_id": "U123"})
        assert result["user_id"] == "U123"


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def setup_method(self):
        """Reset structlog before each test."""
        structlog.reset_defaults()

    def test_configure_json_format(self):
        """Configures JSON format logging."""
        configure_logging(level="INFO", log_format="json")

        assert get_logger("test") is not None

    def test_configure_console_format(self):
        """Configures console format logging."""
        configure_logging(level="DEBUG", log_format="console")

        assert get_logger("test") is not None

    def test_configure_log_level(self):
        """Sets the root log level."""
        configure_logging(level="warning", log_format="json")

        assert logging.getLogger().level == logging.WARNING

    def test_configure_invalid_log_level_raises(self):
        """Invalid log level raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(level="INVALID", log_format="json")


def test_logging_integration(capfd):
    """Structured events carry the request ID and redact secrets."""
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()

    configure_logging(level="INFO", log_format="json")
    set_request_id("1700000000.000200")

    logger = get_logger("integration")
    logger.info("faucet event", user_id="U123", account_key="0xdeadbeef")

    clear_request_id()

    captured = capfd.readouterr()
    output = captured.out + captured.err
    assert "1700000000.000200" in output
    assert "faucet event" in output
    assert "U123" in output
    assert "0xdeadbeef" not in output


def test_stdlib_records_rendered_as_json(capsys):
    """Module loggers with extra= fields go through the structlog chain."""
    structlog.reset_defaults()
    configure_logging(level="INFO", log_format="json")
    set_request_id("1700000000.000100")

    try:
        logging.getLogger("mission_control.faucet.service").info(
            "Faucet transfer complete",
            extra={"user_id": "U1", "amount": 10, "private_key": "0xdeadbeef"},
        )
    finally:
        clear_request_id()

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "Faucet transfer complete"
    assert record["logger"] == "mission_control.faucet.service"
    assert record["level"] == "info"
    assert record["user_id"] == "U1"
    assert record["amount"] == 10
    assert record["request_id"] == "1700000000.000100"
    assert record["private_key"] == "[REDACTED]"


def test_stdlib_exception_includes_traceback(capsys):
    """logger.exception output carries the formatted traceback."""
    structlog.reset_defaults()
    configure_logging(level="INFO", log_format="json")

    try:
        raise ConnectionError("RPC down")
    except ConnectionError:
        logging.getLogger("mission_control.slack.commands").exception(
            "Error handling chat command", extra={"command": "faucet_send"}
        )

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["command"] == "faucet_send"
    assert "ConnectionError: RPC down" in record["exception"]


def test_reconfigure_replaces_handler():
    """Calling configure_logging twice leaves a single installed handler."""
    structlog.reset_defaults()
    configure_logging(level="INFO", log_format="json")
    configure_logging(level="INFO", log_format="console")

    formatters = [
        h
        for h in logging.getLogger().handlers
        if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    assert len(formatters) == 1
