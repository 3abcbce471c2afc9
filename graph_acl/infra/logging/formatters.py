"""JSON Lines formatter for ACL service logs."""
from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# Standard LogRecord attributes; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

DEFAULT_FIELDS = {"level": "levelname", "logger": "name", "message": "message"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    The object holds the ``fields`` mapping (output key -> record attribute),
    a UTC ``timestamp``, ``trace_id``/``span_id`` of the active span, the
    ``static`` fields, and every ``extra`` passed by the caller, e.g.:

        {"level": "WARNING", "logger": "graph_acl.app.middleware.acl",
         "message": "Access denied", "timestamp": "2026-01-01T00:00:00.123Z",
         "service": "graph-acl", "role": "guest", "resource": "admin_panel"}

    Exceptions and stack traces are folded onto the same line.
    """

    def __init__(
        self,
        fmt_keys: dict[str, str] | None = None,
        static: dict[str, Any] | None = None,
    ) -> None:
        """Initialize JSON formatter.

        Args:
            fmt_keys: Output key -> LogRecord attribute. Defaults to level, logger and message.
            static: Fields added to every record, e.g. ``{"service": "graph-acl"}``.
        """
        super().__init__()
        self.fmt_keys = fmt_keys or dict(DEFAULT_FIELDS)
        self.static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        payload = {key: getattr(record, attr, None) for key, attr in self.fmt_keys.items()}
        payload["timestamp"] = _utc_timestamp(record.created)
        payload.update(_trace_context())

        if record.exc_info:
            payload["exception"] = _one_line(self.formatException(record.exc_info))
        if record.stack_info:
            payload["stack_trace"] = _one_line(record.stack_info)

        payload.update(self.static)
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _utc_timestamp(created: float) -> str:
    stamp = datetime.fromtimestamp(created, tz=UTC).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def _trace_context() -> dict[str, str]:
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return {}
    return {"trace_id": format(context.trace_id, "032x"), "span_id": format(context.span_id, "016x")}


def _one_line(text: str) -> str:
    return text.replace("\n", "\\n")
