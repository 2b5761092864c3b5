"""Logging setup for the command line."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(level: str = "WARNING", json_format: bool = False) -> None:
    """Send ``pwtrace`` logs to stderr at *level*."""
    formatter = (
        {"()": "pwtrace.logging_config.JSONFormatter"}
        if json_format
        else {"format": "%(levelname)s %(name)s: %(message)s"}
    )
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "pwtrace": {"level": level.upper(), "handlers": ["console"], "propagate": False},
        },
    })
