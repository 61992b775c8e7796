"""
Lambda handler for vector search.

Accepts {"query": "<text>"} and returns up to three documents ranked by
similarity as [{"_id", "title", "plot", "score"}, ...].

Dependencies: semantic_search.core.search, semantic_search.dependencies
System role: Lambda entry point for the search API
"""

import logging
from typing import Any

from semantic_search.configs import validate_environment
from semantic_search.core.exceptions import ConfigurationError
from semantic_search.core.search import SEARCH_ERROR_MESSAGE
from semantic_search.dependencies import get_service_cache
from semantic_search.lambdas.lambda_utils import api_response, init_logging, read_json_body, request_id
from semantic_search.observability.correlation import correlation_scope
from semantic_search.observability.log_utils import log_exception_with_context
from semantic_search.observability.tracing import trace_span

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Answer a search request.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        dict: API Gateway proxy response
    """
    cache = get_service_cache()
    init_logging(cache.settings)

    with correlation_scope(request_id=request_id(context)):
        with trace_span("search.handler") as span:
            try:
                payload = read_json_body(event)
            except ValueError:
                return api_response(400, {"message": "Request body must be valid JSON"})

            try:
                validate_environment(cache.settings)
            except ConfigurationError as e:
                log_exception_with_context(logger, "Search is not configured", e)
                return api_response(500, {"message": SEARCH_ERROR_MESSAGE})

            query = payload.get("query") if isinstance(payload, dict) else None
            status_code, body = cache.query_service.search_response(query)
            span.annotate(status_code=status_code)

    return api_response(status_code, body)
