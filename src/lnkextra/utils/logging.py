"""Centralized JSON formatter for structured logging."""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional, TextIO, Union

PACKAGE_LOGGER = "lnkextra"

_RESERVED_ATTRS = {
    "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno",
    "funcName", "created", "msecs", "relativeCreated", "thread",
    "threadName", "processName", "process", "name", "message",
    "taskName",
}


class JsonFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects.
    
    Merges any `extra=` kwargs directly into the payload.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for key, value in getattr(record, "__dict__", {}).items():
            if key not in _RESERVED_ATTRS:
                payload[key] = value

        # safe fallback for non-serializable objects
        return json.dumps(payload, default=str)


def configure_logging(
    level: Union[int, str] = "INFO",
    json_format: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again replaces the handler installed by a previous call
    instead of stacking a second one.

    Args:
        level:       Logging level name or number.
        json_format: Use ``JsonFormatter``; otherwise a plain text format.
        stream:      Target stream (defaults to ``sys.stderr``).

    Returns:
        The configured ``lnkextra`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_lnkextra_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    handler._lnkextra_handler = True
    logger.addHandler(handler)
    return logger
