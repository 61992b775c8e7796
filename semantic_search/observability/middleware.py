"""
FastAPI middleware for observability.

Every request runs inside a correlation scope and a span; the span's
closing status and duration are logged with the response status.

Dependencies: fastapi, starlette
System role: Request/response observability injection
"""

import logging
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from semantic_search.observability.correlation import correlation_scope
from semantic_search.observability.tracing import trace_span

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request and its outcome inside an http.request span."""

    async def dispatch(self, request: Request, call_next):
        route = f"{request.method} {request.url.path}"
        with trace_span("http.request", route=route) as span:
            try:
                response: Response = await call_next(request)
            except Exception as e:
                logger.error("%s failed: %s", route, type(e).__name__)
                raise
            span.annotate(status_code=response.status_code)

        logger.info(
            "%s - %d (%.2f ms)",
            route,
            response.status_code,
            span.duration_ms,
            extra={"route": route, "status_code": response.status_code},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID for the request and echo it in the response."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        with correlation_scope(correlation_id=correlation_id):
            response: Response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
