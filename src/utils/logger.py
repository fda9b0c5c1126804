"""Logging for Pantry Chef.

Every service logs through children of the "pantry_chef" logger. Recipe
events carry context passed with `extra=`:

- ingredient_key: canonical key of the ingredient set (cache hits, misses, saves)
- error_kind: ErrorKind value when a request fails
- request_id: set by callers that track requests

Environment:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text for terminals, json for Cloud Logging (default: text)
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

# Context attribute -> short label used by the text formatter
CONTEXT_FIELDS = {
    "request_id": "req",
    "ingredient_key": "key",
    "error_kind": "kind",
}

# SDK loggers that are chatty at INFO
QUIET_LOGGERS = ("google.genai", "google.cloud", "google.auth", "httpx", "urllib3")


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with recipe context as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class RichTextFormatter(logging.Formatter):
    """Colored single-line output with a level icon and a [label=value] context suffix."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "RESET": "\033[0m",
    }

    ICONS = {
        "DEBUG": "🔍",
        "INFO": "ℹ️",
        "WARNING": "⚠️",
        "ERROR": "❌",
    }

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = self.COLORS.get(level, self.COLORS["RESET"])
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")

        line = f"{color}{self.ICONS.get(level, '')} {timestamp} {level:<8} {record.name:<20} {record.getMessage()}"
        context = _context(record)
        if context:
            line += " [" + " ".join(f"{CONTEXT_FIELDS[field]}={value}" for field, value in context.items()) + "]"
        line += self.COLORS["RESET"]

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str) -> logging.Logger:
    """Return the named logger, attaching a stdout handler on first use.

    Args:
        name: Logger name, "pantry_chef" or one of its children.

    Returns:
        Configured logger instance.
    """
    logger_instance = logging.getLogger(name)
    if logger_instance.handlers:
        return logger_instance

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    formatter = JSONFormatter() if os.getenv("LOG_TYPE", "text").lower() == "json" else RichTextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    logger_instance.setLevel(level)
    logger_instance.addHandler(handler)
    return logger_instance


logger = get_logger("pantry_chef")

for _name in QUIET_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)
