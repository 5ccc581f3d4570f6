"""Structured Logging — JSON log lines carrying registry context.

Invariants:
    - Each line has timestamp, level, logger and message
    - Registry context (endpoint_key, room, address, connection_count) and
      API context (error_code, path) appear only when the record carries them
    - Non-JSON values in extras are rendered with str()

Design Decisions:
    - A logging.Formatter subclass on the stdlib logging tree; core modules
      only ever call logging.getLogger(__name__)
    - setup_logging runs once, from the FastAPI lifespan
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "endpoint_key", "room", "address", "connection_count", "error_code", "path",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging. Returns the installed handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
