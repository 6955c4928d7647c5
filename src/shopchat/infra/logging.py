"""Root logger setup for the shopchat service.

Every module logs through ``logging.getLogger(__name__)``; this module
decides where those records go.  ``json_output`` (the default) writes one
JSON object per line, otherwise uvicorn's coloured formatter is used for
local runs.

Each record is stamped with the chat intent being handled (see
``log_intent``) and, when a span is active, the OpenTelemetry trace and
span ids.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from opentelemetry import trace

from shopchat.configs.system import LoggingConfig

_current_intent: ContextVar[str] = ContextVar("shopchat_intent", default="")

_RECORD_FIELDS = ("intent", "trace_id", "span_id")

_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s " + " ".join(
    f"%({f})s" for f in _RECORD_FIELDS
)
_JSON_RENAMES = {"asctime": "timestamp", "levelname": "level", "name": "logger"}

_DEV_FORMAT = "%(levelprefix)s %(asctime)s %(name)s [%(intent)s] %(message)s"
_DEV_DATEFMT = "%H:%M:%S"

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
# Chatty at INFO: one line per request or connection.
_NOISY_LOGGERS = ("httpx", "httpcore", "opentelemetry")


@contextmanager
def log_intent(name: str) -> Iterator[None]:
    """Tag every record logged inside the block with intent *name*."""
    token = _current_intent.set(name)
    try:
        yield
    finally:
        _current_intent.reset(token)


class _ChatRecordFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.intent = _current_intent.get()  # type: ignore[attr-defined]
        ctx = trace.get_current_span().get_span_context()
        valid = ctx is not None and ctx.is_valid
        record.trace_id = format(ctx.trace_id, "032x") if valid else ""  # type: ignore[attr-defined]
        record.span_id = format(ctx.span_id, "016x") if valid else ""  # type: ignore[attr-defined]
        return True


def _build_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        from pythonjsonlogger.json import JsonFormatter

        return JsonFormatter(
            fmt=_JSON_FORMAT,
            rename_fields=_JSON_RENAMES,
            defaults={f: "" for f in _RECORD_FIELDS},
        )

    from uvicorn.logging import DefaultFormatter

    return DefaultFormatter(fmt=_DEV_FORMAT, datefmt=_DEV_DATEFMT, use_colors=True)


def setup_logging(config: LoggingConfig | None = None) -> logging.Handler:
    """Point the root and uvicorn loggers at a single stdout handler.

    Safe to call again: the previous handler is replaced, not stacked.
    Returns the installed handler.
    """
    config = config or LoggingConfig()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_ChatRecordFilter())
    handler.setFormatter(_build_formatter(config.json_output))

    root = logging.getLogger()
    root.setLevel(config.level.upper())
    root.handlers = [handler]

    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler
