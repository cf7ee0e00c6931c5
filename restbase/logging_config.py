"""Structured JSON logging configuration.

Configures Python logging to emit JSON-formatted log entries with the
fields: timestamp, level, logger, message. HTTP fields are added
contextually by the logging interceptor (method, url, status_code,
duration_ms) and the error classifier (error_kind).

SECURITY: Never logs access tokens, passwords or authorization headers.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

# Patterns that should be redacted from log output
_SENSITIVE_PATTERNS = re.compile(
    r"(access.token|api.key|secret|password|token|authorization)"
    r"[\"']?[\s]*[=:]\s*(bearer\s+)?[^\s,}]+",
    re.IGNORECASE,
)

_HTTP_FIELDS = ("method", "url", "status_code", "duration_ms", "error_kind")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON with structured fields.

    Additional fields can be attached via the ``extra`` dict on log calls.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._sanitize(record.getMessage()),
        }

        for name in _HTTP_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self._sanitize(self.formatException(record.exc_info))

        return json.dumps(entry, default=str, ensure_ascii=False)

    @staticmethod
    def _sanitize(text: str) -> str:
        return redact(text)


def redact(text: str) -> str:
    """Remove sensitive values from log text."""
    return _SENSITIVE_PATTERNS.sub("[REDACTED]", text)


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger with JSON formatting.

    Parameters
    ----------
    level:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
