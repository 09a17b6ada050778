"""Structured logging - verifies formatter output and idempotent setup."""

import json
import logging
from decimal import Decimal

from marketplace.infrastructure.observability import (
    JSONFormatter, KeyValueFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "marketplace.test", logging.INFO, __file__, 1, "Tickets purchased", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_marketplace_extras():
    line = JSONFormatter().format(_record(user_id="u-1", event_id="1", quantity=2))
    payload = json.loads(line)
    assert payload["message"] == "Tickets purchased"
    assert payload["level"] == "INFO"
    assert payload["user_id"] == "u-1"
    assert payload["quantity"] == 2
    assert "session_id" not in payload


def test_json_formatter_stringifies_decimals():
    payload = json.loads(JSONFormatter().format(_record(discount_percent=Decimal("20"))))
    assert payload["discount_percent"] == "20"


def test_key_value_formatter_appends_extras():
    line = KeyValueFormatter().format(_record(event_id="3"))
    assert line.endswith("[event_id=3]")


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    setup_logging("DEBUG", "text")
    setup_logging("INFO", "json")
    ours = [h for h in root.handlers if h.get_name() == "marketplace"]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JSONFormatter)
    assert root.level == logging.INFO
    root.removeHandler(ours[0])
