"""Tracing helpers for location lookups and CLI commands."""
from __future__ import annotations

import contextlib
import logging
import time
from typing import Any, Iterator, Optional

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars


def _logger() -> Any:
    return structlog.wrap_logger(logging.getLogger("geopoint.trace"))


def bind_context(**values: object) -> None:
    bind_contextvars(**values)
    _logger().debug("trace_context", **values)


def clear_context() -> None:
    clear_contextvars()


@contextlib.contextmanager
def span(*, name: str, url: Optional[str] = None) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        _logger().info("trace_span", span=name, url=url, elapsed_ms=elapsed_ms)
