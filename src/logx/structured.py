"""Structured JSON log formatter.

This module renders log records as single-line JSON objects carrying the
module tag, context fields and, optionally, the call site.
"""

import json
import logging
import math
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Name of the LogRecord attribute holding key/value pairs of a log call
FIELDS_ATTR = "logx_fields"

LEVEL_NAMES = {
    logging.WARNING: "WARN",
}


class StructuredFormatter(logging.Formatter):
    """JSON log formatter with structured output.

    Produces log entries in JSON format with:
    - ISO 8601 timestamps
    - Log level
    - Message
    - Source location when enabled
    - Key/value fields of the log call
    - Static fields (the module tag)

    Example output:
        {
            "timestamp": "2024-01-15T10:30:45.123456+00:00",
            "level": "INFO",
            "message": "Session started",
            "source": {"file": "app.py", "function": "handle", "line": 12},
            "request_id": "req-001",
            "module": "payments"
        }
    """

    def __init__(
        self,
        include_source_location: bool = False,
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the structured formatter.

        Args:
            include_source_location: Include file, function, and line number.
            extra_fields: Static fields to include in every log entry.
        """
        super().__init__()
        self.include_source_location = include_source_location
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-encoded log entry.
        """
        log_entry = self._build_log_entry(record)
        try:
            return json.dumps(
                log_entry, default=self._json_serializer, allow_nan=False
            )
        except ValueError:
            # NaN and Infinity have no JSON representation
            return json.dumps(
                _replace_non_finite(log_entry),
                default=self._json_serializer,
                allow_nan=False,
            )

    def _build_log_entry(self, record: logging.LogRecord) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "timestamp": self._format_timestamp(record),
            "level": LEVEL_NAMES.get(record.levelno, record.levelname),
            "message": record.getMessage(),
        }

        if self.include_source_location:
            entry["source"] = {
                "file": record.pathname,
                "function": record.funcName,
                "line": record.lineno,
            }

        if record.exc_info:
            entry["exception"] = self._format_exception(record)

        fields = getattr(record, FIELDS_ATTR, None)
        if fields:
            entry.update(fields)

        # Static fields last so the module tag cannot be overwritten
        entry.update(self.extra_fields)

        return entry

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.isoformat(timespec="microseconds")

    def _format_exception(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Format exception information.

        Args:
            record: The log record with exception info.

        Returns:
            Dictionary with exception details.
        """
        exc_type, exc_value, exc_tb = record.exc_info
        return {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
            "traceback": traceback.format_exception(exc_type, exc_value, exc_tb)
            if exc_tb
            else None,
        }

    def _json_serializer(self, obj: Any) -> str:
        """Serialize objects that aren't JSON-serializable."""
        try:
            return str(obj)
        except Exception:
            return f"<unserializable: {type(obj).__name__}>"


def _replace_non_finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _replace_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_replace_non_finite(item) for item in value]
    return value


class StdoutHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stdout`` is at emit time."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stdout
