from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from opentelemetry import trace

from tableside.api.middleware.request_id import get_connection_id, get_request_id

_LOGGING_CONFIGURED = False

# ``extra=`` keys copied into the JSON line when present on the record
_EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "event",
    "outcome",
    "table_id",
    "order_id",
    "room",
    "reason",
    "backend",
    "last_backup",
    "dropped",
)

# uvicorn's own access log duplicates AccessLogMiddleware
_QUIET_LOGGERS = ("uvicorn.access",)


def _correlation_fields() -> dict[str, str | None]:
    fields: dict[str, str | None] = {
        "request_id": get_request_id(),
        "connection_id": get_connection_id(),
        "trace_id": None,
        "span_id": None,
    }
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        fields["trace_id"] = format(span_context.trace_id, "032x")
        fields["span_id"] = format(span_context.span_id, "016x")
    return fields


class JsonFormatter(logging.Formatter):
    """One JSON object per line, tagged with the current request or socket."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_correlation_fields(),
        }
        payload.update(
            (key, getattr(record, key))
            for key in _EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(level: str | None = None) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
