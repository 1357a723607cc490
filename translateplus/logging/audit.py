"""JSON request logging for the TranslatePlus client.

Each logical API call runs inside ``request_scope()``, which tags every
record it emits (admission, retries, classification, completion) with one
request id. Records carry the client version so lines from different SDK
releases can be told apart in a shared sink.

Handlers are only attached when the application calls ``setup_logging()``.
Until then records flow to whatever the host application configured for the
``translateplus`` logger hierarchy.
"""

import json
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator

from translateplus.config.settings import VERSION, get_settings

LOGGER_NAME = "translateplus.requests"
CLIENT_NAME = "translateplus-python"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    return uuid.uuid4().hex[:12]


@contextmanager
def request_scope(request_id: str | None = None) -> Iterator[str]:
    """Bind a request id for the duration of one API call.

    The previous value is restored on exit, including when the call raises,
    so ids never leak into unrelated log lines of the calling task.
    """
    token = request_id_var.set(request_id or generate_request_id())
    try:
        yield request_id_var.get()
    finally:
        request_id_var.reset(token)


def audit_extra(method: str, path: str, **fields: Any) -> dict[str, Any]:
    """``extra=`` payload describing one endpoint call.

    None-valued fields are dropped so optional attributes (status, error)
    only appear on the lines where they apply.
    """
    data = {"method": method, "path": path}
    data.update({key: value for key, value in fields.items() if value is not None})
    return {"audit_data": data}


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "client": CLIENT_NAME,
            "client_version": VERSION,
        }
        request_id = request_id_var.get()
        if request_id:
            log_entry["request_id"] = request_id
        if hasattr(record, "audit_data"):
            log_entry.update(record.audit_data)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging() -> None:
    """Attach JSON handlers to the request logger.

    Level and optional log file come from ``TRANSLATEPLUS_LOG_LEVEL`` and
    ``TRANSLATEPLUS_LOG_FILE``. Calling it again replaces the handlers.
    """
    settings = get_settings()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = JSONFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Records stop here once our handlers are attached
    logger.propagate = False


def get_request_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def mask_api_key(api_key: str) -> str:
    """Keep only a short prefix of the key for log correlation."""
    if len(api_key) <= 8:
        return "***"
    return f"{api_key[:4]}***"


class RequestTimer:
    """Wall-clock latency of one HTTP attempt, in milliseconds."""

    def __init__(self):
        self.start_time: float = 0
        self.elapsed_ms: float = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed_ms = round((time.perf_counter() - self.start_time) * 1000, 2)
