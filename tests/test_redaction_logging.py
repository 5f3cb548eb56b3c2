"""Credential redaction in log output."""

from __future__ import annotations

import json
import logging

from weather_dashboard.log_setup import JsonConsoleFormatter, setup_logger
from weather_dashboard.redaction import REDACTED, sanitize_for_logging, sanitize_text


def test_appid_query_parameter_is_redacted() -> None:
    uri = "https://api.openweathermap.org/data/2.5/forecast?appid=abc123&lat=1&lon=2"
    assert sanitize_text(uri) == (
        f"https://api.openweathermap.org/data/2.5/forecast?appid={REDACTED}&lat=1&lon=2"
    )


def test_key_value_secrets_are_redacted() -> None:
    assert sanitize_text("api_key=abc123 other=1") == f"api_key={REDACTED} other=1"
    assert "s3cr3t" not in sanitize_text("OPENWEATHER_API_KEY: s3cr3t")


def test_plain_text_is_untouched() -> None:
    assert sanitize_text("Resolved location 'Paris' to (48.85, 2.35)") == (
        "Resolved location 'Paris' to (48.85, 2.35)"
    )


def test_nested_structures_redact_sensitive_keys() -> None:
    payload = {
        "appid": "abc",
        "query": {"url": "https://x/y?appid=abc&q=Rome", "openweather_api_key": "abc"},
        "items": [("https://x?appid=abc",)],
    }
    sanitized = sanitize_for_logging(payload)
    assert sanitized["appid"] == REDACTED
    assert sanitized["query"]["url"] == f"https://x/y?appid={REDACTED}&q=Rome"
    assert sanitized["query"]["openweather_api_key"] == REDACTED
    assert sanitized["items"][0][0] == f"https://x?appid={REDACTED}"


def test_json_formatter_redacts_messages() -> None:
    record = logging.LogRecord(
        name="weather_dashboard",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg="build_query endpoint=%s query=%s",
        args=("forecast", "https://x/forecast?appid=abc123&lat=0"),
        exc_info=None,
    )
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["level"] == "DEBUG"
    assert event["logger"] == "weather_dashboard"
    assert "abc123" not in event["message"]


def test_setup_logger_attaches_single_handler() -> None:
    logger = setup_logger("weather_dashboard_test_logger")
    again = setup_logger("weather_dashboard_test_logger", level=logging.DEBUG)
    assert logger is again
    assert len(again.handlers) == 1
    assert again.level == logging.DEBUG
    assert isinstance(again.handlers[0].formatter, JsonConsoleFormatter)


def test_json_formatter_emits_redacted_context() -> None:
    record = logging.LogRecord(
        name="weather_dashboard",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=1,
        msg="Loaded settings",
        args=None,
        exc_info=None,
    )
    record.context = {
        "forecast_url": "https://x/forecast?appid=abc123&lat=0",
        "openweather_api_key": "abc123",
        "units": "metric",
    }
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["context"]["units"] == "metric"
    assert event["context"]["openweather_api_key"] == REDACTED
    assert event["context"]["forecast_url"] == f"https://x/forecast?appid={REDACTED}&lat=0"


def test_records_without_context_omit_the_field() -> None:
    record = logging.LogRecord(
        name="weather_dashboard",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="plain",
        args=None,
        exc_info=None,
    )
    assert "context" not in json.loads(JsonConsoleFormatter().format(record))


def test_setup_logger_debug_flag_forces_debug_level() -> None:
    logger = setup_logger("weather_dashboard_test_debug_logger", level=logging.WARNING, debug=True)
    assert logger.level == logging.DEBUG
