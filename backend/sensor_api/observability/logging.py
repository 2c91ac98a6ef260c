from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict

from opentelemetry.trace import get_current_span

# Request fields passed through `extra=` by the middlewares.
_EXTRA_FIELDS = ("method", "path", "status_code", "duration_ms")


class JsonFormatter(logging.Formatter):
    """
    JSON-line formatter.

    trace_id and span_id are injected via the custom log record factory.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        log_record: Dict[str, Any] = {
            "level": record.levelname,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in _EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value

        trace_id = getattr(record, "trace_id", None)
        span_id = getattr(record, "span_id", None)

        if trace_id is not None:
            log_record["trace_id"] = trace_id
        if span_id is not None:
            log_record["span_id"] = span_id

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_record, separators=(",", ":"), default=str)


def _install_log_record_factory() -> None:
    """
    Install a log record factory that enriches log records with OTel trace/span IDs.
    """
    old_factory = logging.getLogRecordFactory()
    if getattr(old_factory, "_sensor_api_trace", False):
        return

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record: logging.LogRecord = old_factory(*args, **kwargs)  # type: ignore[assignment]

        span = get_current_span()
        ctx = span.get_span_context() if span is not None else None

        if ctx is not None and ctx.is_valid:
            record.trace_id = f"{ctx.trace_id:032x}"
            record.span_id = f"{ctx.span_id:016x}"
        else:
            record.trace_id = None
            record.span_id = None

        return record

    record_factory._sensor_api_trace = True  # type: ignore[attr-defined]
    logging.setLogRecordFactory(record_factory)


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logger for JSON logs to stdout and install trace/span enrichment.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers = [handler]

    _install_log_record_factory()
