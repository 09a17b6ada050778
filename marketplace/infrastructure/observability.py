"""Structured Logging - JSON and key=value formatters, one-shot setup.

Invariants:
    - Every record carries timestamp (from the record, not the wall clock at format
      time), level, logger name and message
    - Marketplace extras (user_id, event_id, quantity, ...) are surfaced when present,
      in both formats
    - setup_logging is idempotent: calling it twice does not duplicate output

Design Decisions:
    - stdlib logging only; formatters are small enough to own
    - Decimal/UUID/date extras serialize via str()
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "user_id", "event_id", "error_code", "path",
    "quantity", "discount_percent", "fixture_key",
)
_HANDLER_NAME = "marketplace"


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with extras appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = " ".join(f"{k}={v}" for k, v in _extras(record).items())
        return f"{line} [{pairs}]" if pairs else line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the marketplace handler on the root logger (replacing a previous one)."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo is opt-in through the engine, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
