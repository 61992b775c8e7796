"""
Lambda handler for the backfill trigger.

Reads documents that have text but no embedding and enqueues them as change
events. The number of documents to read comes from the ``count`` query
string parameter (default 50).

    curl --request POST \
      'https://<api-id>.execute-api.us-east-1.amazonaws.com/prod/create-initial-embeddings?count=10'

Responds with {"read": <documents read>, "sent": <messages enqueued>}.

Dependencies: semantic_search.core.backfill, semantic_search.dependencies
System role: Lambda entry point for backfill
"""

import logging
from typing import Any

from semantic_search.configs import validate_environment
from semantic_search.core.exceptions import ClientInputError
from semantic_search.dependencies import get_service_cache
from semantic_search.lambdas.lambda_utils import api_response, init_logging, request_id
from semantic_search.observability.correlation import correlation_scope
from semantic_search.observability.log_utils import log_exception_with_context
from semantic_search.observability.tracing import trace_span

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Run a backfill.

    Send failures propagate so the invocation is reported as failed; batches
    sent before the failure stay on the queue.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        dict: API Gateway proxy response
    """
    cache = get_service_cache()
    init_logging(cache.settings)

    with correlation_scope(request_id=request_id(context)):
        logger.debug("handler - Received backfill request", extra={"event": event})
        params = event.get("queryStringParameters") or {}

        with trace_span("backfill.handler"):
            try:
                validate_environment(cache.settings, require_queue=True)
                result = cache.backfill_dispatcher.run(params.get("count"))
            except ClientInputError as e:
                logger.warning("handler - ClientInputError: %s", e.message)
                return api_response(400, {"message": e.message})
            except Exception as e:
                log_exception_with_context(logger, "Unable to create initial embeddings", e)
                raise

    return api_response(200, result.model_dump())
