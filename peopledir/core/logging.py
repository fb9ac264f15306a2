"""Logging setup for the directory API.

Everything goes to stdout through a single console handler. Levels and format
come from environment variables instead of Settings so logging can be set up
before the rest of the package is imported:

- LOG_LEVEL: level for the app and uvicorn loggers (default INFO)
- LOG_JSON: emit one JSON object per line instead of text
- LOG_REQUESTS: per-request lines from core.request_logging (default on)
- LOG_UVICORN_ACCESS: uvicorn's own access log; defaults to the opposite of
  LOG_REQUESTS so each request is logged once
- HTTPX_LOG_LEVEL, SQL_LOG_LEVEL: levels for the HTTP client and the ORM
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
import sys
from datetime import UTC, datetime
from typing import Any

TRUTHY = frozenset({"1", "true", "t", "yes", "y", "on"})

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# LogRecord extras copied into JSON output when present.
EXTRA_FIELDS = (
    "method",
    "path",
    "query",
    "status_code",
    "duration_ms",
    "client_ip",
    "user_agent",
    "error_type",
    "user_id",
)


def env_bool(name: str, *, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


class JsonFormatter(logging.Formatter):
    """Render a record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, getattr(record, key))
            for key in EXTRA_FIELDS
            if hasattr(record, key)
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _logger_levels(level: str) -> dict[str, dict[str, Any]]:
    uvicorn_access = env_bool(
        "LOG_UVICORN_ACCESS",
        default=not env_bool("LOG_REQUESTS", default=True),
    )
    levels = {
        "peopledir": level,
        "uvicorn": level,
        "uvicorn.error": level,
        "uvicorn.access": "INFO" if uvicorn_access else "WARNING",
        "httpx": os.getenv("HTTPX_LOG_LEVEL", "WARNING").upper(),
        "sqlalchemy.engine": os.getenv("SQL_LOG_LEVEL", "WARNING").upper(),
    }
    # All of them propagate to the root console handler.
    return {
        name: {"level": value, "propagate": True} for name, value in levels.items()
    }


def build_logging_config(
    level: str | None = None, *, json_output: bool | None = None
) -> dict[str, Any]:
    """dictConfig for the app; arguments left as None are read from the env."""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    if json_output is None:
        json_output = env_bool("LOG_JSON", default=False)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "text": {"format": TEXT_FORMAT},
            "json": {"()": f"{__name__}.JsonFormatter"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json" if json_output else "text",
                "stream": sys.stdout,
            }
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": _logger_levels(level),
    }


def configure_logging(
    level: str | None = None, *, json_output: bool | None = None
) -> None:
    logging.config.dictConfig(build_logging_config(level, json_output=json_output))
