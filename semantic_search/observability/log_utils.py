"""
Structured logging helpers.

Extra fields attached to log records pass through log_value first, so
embedding vectors are summarised and connection string credentials never
reach the log.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
import re
from typing import Any

_CREDENTIALS = re.compile(r"(mongodb(?:\+srv)?://)[^@/\s]+@")


def log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a value for a structured log field.

    Args:
        value: Value to render
        max_length: Length above which strings are cut

    Returns:
        str: Printable representation
    """
    if isinstance(value, (list, tuple)) and value and all(
        isinstance(v, (int, float)) for v in value
    ):
        text = f"vector({len(value)} dims)"
    elif isinstance(value, (list, tuple)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({', '.join(sorted(map(str, value)))})"
    else:
        text = _CREDENTIALS.sub(r"\1***@", str(value))

    if len(text) > max_length:
        return f"{text[:max_length]}... ({len(text)} chars)"
    return text


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an error together with its cause chain.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported
        **context: Extra fields, rendered with log_value
    """
    fields = {key: log_value(val) for key, val in context.items()}
    causes = []
    cause = exc.__cause__
    while cause is not None:
        causes.append(f"{type(cause).__name__}: {cause}")
        cause = cause.__cause__
    fields["error_type"] = type(exc).__name__
    fields["error_msg"] = log_value(exc)
    fields["error_causes"] = causes
    logger.error(message, exc_info=exc, extra=fields)
