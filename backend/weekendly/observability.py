"""Structured JSON logging, request correlation and in-memory counters for the planner."""

from __future__ import annotations

import contextvars
import json
import logging
import os
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Iterator

from .errors import CatalogError, SchedulingError

SERVICE_NAME = "weekendly"

request_id_ctx: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class JsonFormatter(logging.Formatter):
    """One JSON object per line; fields passed to ``log_event`` are merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": int(record.created * 1000),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "event": record.getMessage(),
            "request_id": request_id_ctx.get(),
        }

        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update({k: v for k, v in fields.items() if v is not None})

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class PlainFormatter(logging.Formatter):
    """Readable single-line output for local runs (LOG_FORMAT=plain)."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{self.formatTime(record, '%H:%M:%S')} {record.levelname:<7} {record.name}: {record.getMessage()}"
        fields = getattr(record, "fields", None)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items() if v is not None)
        return line


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    fmt = (fmt or os.getenv("LOG_FORMAT", "json")).lower()

    root = logging.getLogger()
    root.setLevel(level)
    # Replace handlers so repeated calls (reload, lifespan) do not duplicate output
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(PlainFormatter() if fmt == "plain" else JsonFormatter())
    root.addHandler(handler)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    logger.log(level, event, extra={"fields": fields})


class Metrics:
    """Process-local counters and timing totals, exposed on ``/metrics``."""

    def __init__(self) -> None:
        self.counters: defaultdict[str, int] = defaultdict(int)
        self.timings_ms: defaultdict[str, int] = defaultdict(int)

    def incr(self, key: str, value: int = 1) -> None:
        self.counters[key] += value

    def observe_ms(self, key: str, elapsed_ms: int) -> None:
        self.timings_ms[key] += elapsed_ms

    def snapshot(self) -> dict[str, int]:
        snap = dict(self.counters)
        snap.update({f"{k}_ms_total": v for k, v in self.timings_ms.items()})
        return snap

    def reset(self) -> None:
        self.counters.clear()
        self.timings_ms.clear()


metrics = Metrics()


@contextmanager
def timed(key: str) -> Iterator[None]:
    """Add the wall time of the block to ``<key>_ms_total``."""
    started = time.perf_counter()
    try:
        yield
    finally:
        metrics.observe_ms(key, int((time.perf_counter() - started) * 1000))


def classify_error(exc: Exception) -> str:
    """Coarse error bucket used for metric names and log fields."""
    if isinstance(exc, SchedulingError):
        return exc.error_type
    if isinstance(exc, CatalogError):
        return "catalog"

    name = type(exc).__name__.lower()
    msg = str(exc).lower()

    if "timeout" in name or "timed out" in msg:
        return "timeout"
    if "connection" in name or "network" in msg:
        return "network"
    if "validation" in name:
        return "validation"
    if "sqlite" in name or "database" in msg:
        return "storage"
    return "internal"
