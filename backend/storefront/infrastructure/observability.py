"""Structured Logging — store-aware formatters and process-wide setup.

Invariants:
    - Every record carries timestamp (from the record, not format time), level, logger, message
    - Store context (store, entity, entity_id) and error context (error_code, path, status)
      surface as top-level keys when present, never as nulls
    - Text format prefixes the store in brackets so a degraded store stands out in a tail
    - setup_logging installs at most one storefront handler, however often it is called

Design Decisions:
    - stdlib logging with a JSON formatter, no third-party logging library
    - Handler tagged by name: lifespan re-runs (tests, reloads) replace it instead of stacking
"""

import json
import logging
from datetime import datetime, timezone

STORE_FIELDS = ("store", "entity", "entity_id")
ERROR_FIELDS = ("error_code", "path", "status")
EXTRA_FIELDS = STORE_FIELDS + ERROR_FIELDS

_HANDLER_NAME = "storefront"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(store_tag)s%(message)s"


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

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


class StoreTextFormatter(logging.Formatter):
    """Human-readable lines, tagged with the store when the record names one."""

    def __init__(self):
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        store = getattr(record, "store", None)
        record.store_tag = f"[{store}] " if store else ""
        return super().format(record)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the storefront handler on the root logger, replacing a previous one."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else StoreTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
