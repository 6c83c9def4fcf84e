"""Structured logging helpers and timed spans for audit runs."""

from __future__ import annotations

import enum
import json
import logging
import math
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel

__all__ = ["TraceSpan", "trace", "log_event", "safe_json", "preview"]

MAX_PREVIEW_CHARS = 400


def preview(value: str, *, limit: int = MAX_PREVIEW_CHARS) -> str:
    """Return ``value`` shortened to ``limit`` characters for log lines."""

    value = value.strip()
    if len(value) <= limit:
        return value
    return value[: limit - 1] + "…"


def safe_json(value: Any) -> Any:
    """Return ``value`` converted into a JSON-serialisable structure."""

    if value is None or isinstance(value, (str, int, float, bool)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return repr(value)
        return value

    if isinstance(value, enum.Enum):
        return safe_json(value.value)

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")

    if isinstance(value, (list, tuple)):
        return [safe_json(item) for item in value]

    if isinstance(value, dict):
        return {str(key): safe_json(val) for key, val in value.items()}

    return repr(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool | BaseException | tuple[Any, Any, Any] | None = None,
    **fields: Any,
) -> None:
    """Emit a structured log line encoded as JSON."""

    payload: Dict[str, Any] = {"event": event}
    if fields:
        payload.update({key: safe_json(value) for key, value in fields.items() if value is not None})

    message = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    logger.log(level, message, exc_info=exc_info)


@dataclass
class TraceSpan:
    """An active span opened by :func:`trace`."""

    name: str
    logger: logging.Logger
    fields: Dict[str, Any]
    start_time: float

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.start_time) * 1000, 2)

    def note(self, **fields: Any) -> None:
        """Emit an in-span structured debug note."""

        base = {"trace": self.name}
        base.update(self.fields)
        base.update(fields)
        log_event(self.logger, logging.DEBUG, "trace.note", **base)


@contextmanager
def trace(name: str, *, logger: Optional[logging.Logger] = None, **fields: Any) -> Iterator[TraceSpan]:
    """Log start/end events with duration, and an error event when the body raises."""

    logger = logger or logging.getLogger("trace")
    span = TraceSpan(name=name, logger=logger, fields=dict(fields), start_time=time.perf_counter())
    base_fields = {"trace": name}
    base_fields.update(fields)
    log_event(logger, logging.INFO, "trace.start", **base_fields)
    try:
        yield span
    except Exception as exc:
        log_event(
            logger,
            logging.ERROR,
            "trace.error",
            exc_info=True,
            duration_ms=span.elapsed_ms,
            error=repr(exc),
            **base_fields,
        )
        raise
    else:
        log_event(logger, logging.INFO, "trace.end", duration_ms=span.elapsed_ms, **base_fields)
