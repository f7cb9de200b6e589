"""
Logging setup for the ledger.

Every module asks get_logger() for a logger under the
"ledger_engine" namespace, so one call to configure_logging()
controls the whole package. Records can be rendered as plain
text for local work or as one JSON object per line for log
shippers.
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

_LOGGER_PREFIX = "ledger_engine"

# Attributes every LogRecord has. Anything else on a record
# came from the caller's `extra=` and belongs in the payload.
_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


class _JSONEncoder(json.JSONEncoder):
    """Handle Decimal and datetime values in log payloads."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_message"] = str(exc)
            kind = getattr(exc, "kind", None)
            if kind is not None:
                payload["exc_kind"] = kind
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, cls=_JSONEncoder, default=str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ledger_engine namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Attach a single stream handler to the package logger.

    Safe to call more than once: existing handlers are replaced,
    so reloading the app under a dev server does not duplicate
    every line.
    """
    root = logging.getLogger(_LOGGER_PREFIX)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s"
        ))

    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
