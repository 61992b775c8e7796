"""
Shared helpers for Lambda entrypoints.
"""

import base64
import json
import logging
from typing import Any, Callable

from dotenv import load_dotenv

from semantic_search.configs import Settings
from semantic_search.observability.logger import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)

_logging_configured = False


def init_logging(settings: Settings) -> None:
    """Configure logging once per execution environment."""
    global _logging_configured
    if _logging_configured:
        return
    configure_logging(
        level=settings.effective_log_level,
        environment=settings.environment,
        aws_account_id=settings.aws_account_id,
    )
    _logging_configured = True


def remaining_time_getter(context: Any) -> Callable[[], float] | None:
    """Return the context's remaining-time function, if it has one."""
    getter = getattr(context, "get_remaining_time_in_millis", None)
    return getter if callable(getter) else None


def check_visibility_window(context: Any, visibility_timeout_seconds: int) -> bool:
    """
    Warn when the invocation can outlive the queue visibility timeout.

    Records still in flight after the window closes become visible again and
    may be delivered to a second consumer.

    Returns:
        bool: False when the remaining invocation time exceeds the window
    """
    getter = remaining_time_getter(context)
    if getter is None:
        return True
    remaining_ms = getter()
    if remaining_ms > visibility_timeout_seconds * 1000:
        logger.warning(
            "Invocation time exceeds the queue visibility timeout, records may be redelivered",
            extra={
                "remaining_ms": remaining_ms,
                "visibility_timeout_seconds": visibility_timeout_seconds,
            },
        )
        return False
    return True


def request_id(context: Any) -> str | None:
    return getattr(context, "aws_request_id", None)


def read_json_body(event: dict[str, Any]) -> Any:
    """
    Decode an API Gateway proxy event body.

    Raises:
        ValueError: Body is not valid JSON
    """
    body = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)


def api_response(status_code: int, body: Any) -> dict[str, Any]:
    """Build an API Gateway proxy response."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }
