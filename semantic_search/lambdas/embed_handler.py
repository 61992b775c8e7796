"""
Lambda handler for SQS-triggered embedding.

Receives batches of change events from the events queue, computes the
embedding for each document and writes it back to MongoDB Atlas. Returns a
partial batch response so SQS redelivers only the records that failed.

The event source mapping must enable ReportBatchItemFailures.

Dependencies: semantic_search.core.embedding, semantic_search.dependencies
System role: Lambda entry point for async embedding
"""

import logging
from typing import Any

from semantic_search.configs import validate_environment
from semantic_search.core.models import SQSEvent
from semantic_search.dependencies import get_service_cache
from semantic_search.lambdas.lambda_utils import (
    check_visibility_window,
    init_logging,
    remaining_time_getter,
    request_id,
)
from semantic_search.observability.correlation import correlation_scope
from semantic_search.observability.tracing import trace_span

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Process one delivered SQS batch.

    Args:
        event: SQS event with Records array
        context: Lambda context object

    Returns:
        dict: {"batchItemFailures": [{"itemIdentifier": <messageId>}, ...]}
    """
    cache = get_service_cache()
    init_logging(cache.settings)

    with correlation_scope(request_id=request_id(context)):
        logger.debug("handler - Received SQS event", extra={"event": event})
        with trace_span("embed.handler") as span:
            validate_environment(cache.settings)
            check_visibility_window(context, cache.settings.queue.visibility_timeout_seconds)
            sqs_event = SQSEvent.model_validate(event)
            span.annotate(record_count=len(sqs_event.Records))

            report = cache.batch_consumer.handle_batch(
                sqs_event.Records,
                remaining_time_getter(context),
            )

    return report.to_sqs_response()
