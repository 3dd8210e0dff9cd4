# highlights/logging_conf.py
from __future__ import annotations

import json
import logging
import os
from logging.config import dictConfig
from typing import Any


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs to stdout."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for extra_key in ("module", "funcName", "year"):
            val = getattr(record, extra_key, None)
            if val is not None and val != "":
                payload[extra_key] = val
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str | None = None) -> None:
    """Configure JSON logging for the service and uvicorn, without duplicate access lines."""
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    dict_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": log_level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": {"level": log_level, "handlers": ["console"], "propagate": False},
            "uvicorn.error": {"level": log_level, "handlers": ["console"], "propagate": False},
            # the timing middleware writes its own request line
            "uvicorn.access": {"level": "WARNING", "handlers": ["console"], "propagate": False},
            "fastapi": {"level": log_level, "handlers": ["console"], "propagate": False},
            "starlette": {"level": log_level, "handlers": ["console"], "propagate": False},
            "httpx": {"level": "WARNING", "handlers": ["console"], "propagate": False},
            "highlights": {"level": log_level, "handlers": ["console"], "propagate": False},
            "request": {"level": log_level, "handlers": ["console"], "propagate": False},
        },
    }

    dictConfig(dict_config)
