"""
Observability module.

Provides logging configuration, correlation ID tracking and scoped spans.
"""

from semantic_search.observability.correlation import (
    bind_correlation,
    clear_correlation,
    correlation_scope,
    get_correlation,
)
from semantic_search.observability.logger import configure_logging
from semantic_search.observability.tracing import Span, trace_span

__all__ = [
    "Span",
    "bind_correlation",
    "clear_correlation",
    "configure_logging",
    "correlation_scope",
    "get_correlation",
    "trace_span",
]
