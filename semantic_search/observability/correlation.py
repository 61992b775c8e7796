"""
Correlation context.

Manages correlation identifiers (message ID, document ID, request ID) across
a unit of work using contextvars. Keys are bound for the duration of a scope
and the previous mapping is restored when the scope exits.

Dependencies: contextvars
System role: Request and record tracing across service boundaries
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

_correlation_ctx: ContextVar[dict[str, str] | None] = ContextVar("correlation", default=None)


def get_correlation() -> dict[str, str]:
    """
    Get a copy of the correlation keys bound in the current context.

    Returns:
        dict[str, str]: Correlation keys (empty when nothing is bound)
    """
    return dict(_correlation_ctx.get() or {})


def bind_correlation(**keys: Any) -> None:
    """
    Add keys to the current correlation context.

    Inside a correlation_scope the keys are discarded when the scope exits.

    Args:
        **keys: Correlation keys; None values are skipped
    """
    merged = get_correlation()
    merged.update({k: str(v) for k, v in keys.items() if v is not None})
    _correlation_ctx.set(merged)


def clear_correlation() -> None:
    """Clear all correlation keys from the current context."""
    _correlation_ctx.set(None)


@contextmanager
def correlation_scope(**keys: Any) -> Iterator[dict[str, str]]:
    """
    Bind correlation keys for the duration of a block.

    Args:
        **keys: Correlation keys to bind

    Yields:
        dict[str, str]: The correlation mapping active at scope entry
    """
    merged = get_correlation()
    merged.update({k: str(v) for k, v in keys.items() if v is not None})
    token = _correlation_ctx.set(merged)
    try:
        yield dict(merged)
    finally:
        _correlation_ctx.reset(token)

