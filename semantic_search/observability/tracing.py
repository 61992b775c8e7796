"""
Scoped spans.

A span covers one unit of work (handler invocation, record, dependency call).
It is opened with trace_span() and always closed, whether the block returns,
raises or exits early; the closing log line carries its duration and status.

Dependencies: logging, time
System role: Explicit replacement for decorator-based tracing
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

logger = logging.getLogger(__name__)


class Span:
    """Timing and annotations for one unit of work."""

    def __init__(self, name: str, annotations: dict[str, Any] | None = None) -> None:
        self.name = name
        self.annotations: dict[str, Any] = dict(annotations or {})
        self.error: BaseException | None = None
        self.closed = False
        self.duration_ms: float | None = None
        self._start = time.perf_counter()

    def annotate(self, **annotations: Any) -> None:
        """Attach key/value annotations to the span."""
        self.annotations.update(annotations)

    def record_error(self, exc: BaseException) -> None:
        """Mark the span as failed."""
        self.error = exc

    @property
    def status(self) -> str:
        return "error" if self.error is not None else "ok"

    def close(self) -> None:
        if self.closed:
            return
        self.duration_ms = round((time.perf_counter() - self._start) * 1000, 2)
        self.closed = True


@contextmanager
def trace_span(name: str, **annotations: Any) -> Iterator[Span]:
    """
    Open a span for the enclosed block.

    Args:
        name: Span name
        **annotations: Initial annotations

    Yields:
        Span: The open span
    """
    span = Span(name, annotations)
    try:
        yield span
    except BaseException as e:
        span.record_error(e)
        raise
    finally:
        span.close()
        logger.debug(
            "span %s closed (%s, %.2f ms)",
            name,
            span.status,
            span.duration_ms,
            extra={"span": name, "span_status": span.status, "annotations": span.annotations},
        )
