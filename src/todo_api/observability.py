"""
Logging setup for the todo service.

setup_logging() is called once from the application lifespan. The JSON
formatter surfaces request and todo fields passed through ``extra=``.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client",
    "todo_id",
    "database",
    "collection",
)


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


# PUBLIC_INTERFACE
def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger with a single stream handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_todo_api", False):
            root.removeHandler(existing)
    handler._todo_api = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
