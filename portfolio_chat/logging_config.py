"""Structured logging: one JSON line per event, errors to stderr."""

import json
import logging
import secrets
import string
import sys
from datetime import datetime, timezone

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}

_LEVEL_NAMES = {"WARNING": "WARN", "CRITICAL": "ERROR"}

_REQUEST_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_request_id() -> str:
    """Short correlation id grouping the log lines of one request."""
    return "".join(secrets.choice(_REQUEST_ID_ALPHABET) for _ in range(7))


class JSONFormatter(logging.Formatter):
    """Render records as ``{"ts", "level", "message", **context}``."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": _LEVEL_NAMES.get(record.levelname, record.levelname),
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["stack"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class _BelowErrorFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def configure_logging(level: str = "INFO") -> None:
    """Install JSON handlers on the root logger (idempotent)."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_portfolio_chat", False):
            root.removeHandler(handler)

    formatter = JSONFormatter()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowErrorFilter())
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)

    for handler in (stdout_handler, stderr_handler):
        handler.setFormatter(formatter)
        handler._portfolio_chat = True
        root.addHandler(handler)

    root.setLevel(level.upper())

    # Suppress per-request transport chatter
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
