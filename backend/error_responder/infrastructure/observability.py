"""Structured Logging — error-response records as JSON lines.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Error-response fields (error_code, status, path) appear only when the
      record was logged with them as `extra`
    - setup_logging owns a single root handler: calling it again swaps the
      previous one out instead of stacking a duplicate

Design Decisions:
    - Formatter on the standard logging module; handlers keep using
      logging.getLogger(__name__) and never see this module
"""

import json
import logging
from datetime import datetime, timezone

ERROR_RESPONSE_FIELDS = ("error_code", "status", "path")

_installed_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """One JSON object per record; exceptions rendered with their type."""

    def __init__(self, fields: tuple[str, ...] = ERROR_RESPONSE_FIELDS):
        super().__init__()
        self.fields = fields

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            name: record.__dict__[name]
            for name in self.fields
            if record.__dict__.get(name) is not None
        })
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception_type"] = record.exc_info[0].__name__
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the root handler for the given level and format."""
    global _installed_handler
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s — %(message)s")
    )
    if _installed_handler is not None:
        logging.root.removeHandler(_installed_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed_handler = handler
    return handler
