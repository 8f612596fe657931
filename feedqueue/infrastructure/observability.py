"""Structured Logging — JSON and key=value formatters for feed transitions.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Queue fields (item_id, cycle, current_index, queue_length, appended) surfaced when present
    - JSON format in production, key=value text in development; same fields in both

Design Decisions:
    - Formatters on stdlib logging: zero dependencies, full control
    - setup_logging called once by the host application on startup
    - Infrastructure never imports core/: fields arrive via logging `extra`
"""

import logging
import json
from datetime import datetime, timezone

QUEUE_LOG_FIELDS: tuple[str, ...] = (
    "item_id", "cycle", "current_index", "queue_length",
    "appended", "error_code", "field",
)


def _extra_fields(record: logging.LogRecord) -> dict:
    fields = {}
    for key in QUEUE_LOG_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            fields[key] = val
    return fields


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with queue fields appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _extra_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging. Returns the installed handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
