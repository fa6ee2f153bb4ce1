"""
Logging setup for HTTP client messages.

Call `init_logging()` once at process start. Every record gets the
`trace_id` of the current context, which `trace_middleware` binds to the
`X-Trace-ID` header of outgoing requests.
"""

import logging
import os
import sys
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler

from configs import app_config

trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)


def trace_id_generator() -> str:
    return uuid.uuid4().hex


def init_logging(level: str | None = None) -> None:
    handlers = _build_handlers()
    for handler in handlers:
        handler.addFilter(TraceIdFilter())
        handler.setFormatter(TraceIdFormatter(app_config.LOG_FORMAT, app_config.LOG_DATEFORMAT))

    logging.basicConfig(
        level=level or app_config.LOG_LEVEL,
        handlers=handlers,
        force=True,
    )
    # httpx logs every request at INFO; logging_middleware already does
    logging.getLogger("httpx").propagate = False


def _build_handlers() -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = app_config.LOG_FILE
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=log_file,
                maxBytes=app_config.LOG_FILE_MAX_SIZE * 1024 * 1024,
                backupCount=app_config.LOG_FILE_BACKUP_COUNT,
            )
        )
    return handlers


class TraceIdFilter(logging.Filter):
    def filter(self, record):
        record.trace_id = trace_id_var.get() or ""
        return True


class TraceIdFormatter(logging.Formatter):
    # records from handlers without TraceIdFilter
    def format(self, record):
        if not hasattr(record, "trace_id"):
            record.trace_id = ""
        return super().format(record)
