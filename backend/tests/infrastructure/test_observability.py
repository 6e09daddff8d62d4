"""Structured logging — JSON formatter output."""

import json
import logging

from notes_api.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "notes_api.test", logging.WARNING, __file__, 1, "Request rate limited", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_known_extras():
    line = JSONFormatter().format(_record(client_id="1.2.3.4", error_code="RATE_LIMITED"))
    payload = json.loads(line)
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Request rate limited"
    assert payload["client_id"] == "1.2.3.4"
    assert payload["error_code"] == "RATE_LIMITED"


def test_json_formatter_ignores_unknown_extras():
    payload = json.loads(JSONFormatter().format(_record(token="abc")))
    assert "token" not in payload
