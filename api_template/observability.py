"""Logging setup for the service runtime.

`observability_setup_logging` is called once at startup. `text` output is meant
for local development; `json` emits one object per line for log collectors.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from api_template.domain import timestamp_from_datetime

_OBSERVABILITY_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_OBSERVABILITY_HANDLER_NAME = "api_template"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": timestamp_from_datetime(datetime.fromtimestamp(record.created, timezone.utc)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("method", "path", "status_code", "error_kind"):
            value = record.__dict__.get(key)
            if value is not None:
                log_entry[key] = value
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def observability_setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Configure the root logger with one stream handler.

    Args:
        level: Logging level name.
        log_format: `json` for structured lines, anything else for plain text.

    Returns:
        None: Configures logging as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    root_logger = logging.getLogger()
    for existing_handler in list(root_logger.handlers):
        if existing_handler.get_name() == _OBSERVABILITY_HANDLER_NAME:
            root_logger.removeHandler(existing_handler)

    handler = logging.StreamHandler()
    handler.set_name(_OBSERVABILITY_HANDLER_NAME)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_OBSERVABILITY_TEXT_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
