"""Structured JSON logging for the API and the job runner.

Every record carries an ``event`` name and, inside a request, the request ID
taken from a context variable set by the request middleware.
"""

import contextvars
import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from quizbank.core.config import settings

request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

# Extra keys whose values never reach the log stream
REDACTED_KEYS = {"password", "password_hash", "token", "access_token", "authorization", "secret"}


class RequestContextFilter(logging.Filter):
    """Stamp records with the current request ID unless one was passed explicitly."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON envelope: timestamp, level, logger, event, request_id, then extras."""

    def add_fields(
        self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = settings.PROJECT_NAME
        log_record["env"] = settings.ENV
        # Free-text records without an event name fall back to their message
        log_record["event"] = log_record.get("event") or record.getMessage()
        log_record["request_id"] = getattr(record, "request_id", None)

        for key in REDACTED_KEYS.intersection(log_record):
            log_record[key] = "[REDACTED]"
        log_record.pop("asctime", None)


def build_handler(stream=None) -> logging.Handler:
    """Stream handler wired with the JSON formatter and request context."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        CustomJsonFormatter("%(timestamp)s %(level)s %(logger)s", datefmt="%Y-%m-%dT%H:%M:%S")
    )
    handler.addFilter(RequestContextFilter())
    return handler


def setup_logging() -> None:
    """Route all records through one JSON handler on the root logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(build_handler())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
