"""
Batch consumer for queued change events.

Each delivered record carries one change event. For every record the consumer
embeds the document text, writes the full document back with the embedding
attached, and records a per-record outcome. Records are processed in
delivery order and independently: a failing record never prevents the others
in the batch from being attempted and acknowledged. The failed message IDs
are reported back to SQS, which redelivers only those until the queue's
maximum receive count moves them to the dead-letter queue.

Dependencies: semantic_search.boundary (embedding client, document store)
System role: Batch Consumer (at-least-once, idempotent write)
"""

import logging
import math
from typing import Any, Callable, Iterable, Protocol

from semantic_search.core.exceptions import (
    DataIntegrityError,
    DocumentStoreError,
    EmbeddingError,
    SemanticSearchException,
    TimeBudgetExceeded,
)
from semantic_search.core.models import BatchReport, ChangeEvent, RecordOutcome, SQSRecord
from semantic_search.observability.correlation import bind_correlation, correlation_scope
from semantic_search.observability.log_utils import log_exception_with_context
from semantic_search.observability.tracing import Span, trace_span

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    def embed(self, text: str) -> list[float]: ...


class DocumentWriter(Protocol):
    def replace_document(self, key: Any, full_document: dict[str, Any]) -> int: ...


class BatchConsumer:
    """Process SQS batches of change events into stored embeddings."""

    def __init__(
        self,
        embedder: Embedder,
        store: DocumentWriter,
        time_safety_threshold_ms: int = 1000,
        max_receive_count: int = 3,
        text_field: str = "plot",
        vector_field: str = "plot_embedding",
    ) -> None:
        """
        Args:
            embedder: Embedding client
            store: Document store gateway
            time_safety_threshold_ms: Remaining time below which records are not started
            max_receive_count: Queue redrive limit, used to flag final attempts
            text_field: Field holding the text to embed
            vector_field: Field the embedding is written to
        """
        self._embedder = embedder
        self._store = store
        self._threshold_ms = time_safety_threshold_ms
        self._max_receive_count = max_receive_count
        self._text_field = text_field
        self._vector_field = vector_field

    def handle_record(self, record: SQSRecord, remaining_time_ms: float) -> RecordOutcome:
        """
        Process one record.

        Args:
            record: Delivered SQS record
            remaining_time_ms: Invocation time left before the runtime stops us

        Returns:
            RecordOutcome: Success, or failure with cause and retriable flag
        """
        message_id = record.messageId
        with correlation_scope(message_id=message_id):
            with trace_span("record_handler", message_id=message_id) as span:
                try:
                    self._process(record, remaining_time_ms, span)
                except Exception as e:  # pylint: disable=broad-except
                    span.record_error(e)
                    return self._failure(record, e, span.annotations.get("document_id"))

            return RecordOutcome.success(message_id, document_id=span.annotations.get("document_id"))

    def handle_batch(
        self,
        records: Iterable[SQSRecord],
        remaining_time_ms: Callable[[], float] | None = None,
    ) -> BatchReport:
        """
        Process every record of a delivered batch in order.

        Args:
            records: Delivered records
            remaining_time_ms: Returns the invocation time left; checked before each record

        Returns:
            BatchReport: One outcome per record
        """
        report = BatchReport()
        with trace_span("handle_batch") as span:
            for record in records:
                remaining = remaining_time_ms() if remaining_time_ms else math.inf
                report.add(self.handle_record(record, remaining))
            span.annotate(
                succeeded=len(report.succeeded_ids),
                failed=len(report.failed_ids),
            )

        logger.info(
            "handle_batch - Processing complete",
            extra={
                "success_count": len(report.succeeded_ids),
                "failed_count": len(report.failed_ids),
            },
        )
        return report

    def _process(self, record: SQSRecord, remaining_time_ms: float, span: Span) -> None:
        if remaining_time_ms < self._threshold_ms:
            logger.info("Time is about to expire, stopping processing")
            raise TimeBudgetExceeded(int(remaining_time_ms), self._threshold_ms)

        event = ChangeEvent.from_message_body(record.body)

        document_id = event.document_id
        bind_correlation(document_id=document_id)
        span.annotate(document_id=str(document_id))

        document = event.document_without_key()
        try:
            document[self._vector_field] = self._embedder.embed(document.get(self._text_field))
        except Exception as e:
            raise EmbeddingError("Unable to create embedding") from e

        try:
            modified_count = self._store.replace_document(document_id, document)
        except Exception as e:
            raise DocumentStoreError("Unable to write embedding", operation="replace") from e

        if modified_count != 1:
            raise DataIntegrityError(
                "Unable to update document",
                document_id=str(document_id),
                details={"modified_count": modified_count},
            )

        logger.info("Embedding written")

    def _failure(
        self, record: SQSRecord, exc: Exception, document_id: str | None
    ) -> RecordOutcome:
        retriable = exc.retriable if isinstance(exc, SemanticSearchException) else True
        log_exception_with_context(
            logger,
            str(exc),
            exc,
            receive_count=record.receive_count,
            retriable=retriable,
        )
        if record.receive_count >= self._max_receive_count:
            logger.warning(
                "Record failed on its final delivery and will be moved to the dead-letter queue",
                extra={
                    "receive_count": record.receive_count,
                    "max_receive_count": self._max_receive_count,
                },
            )
        return RecordOutcome.failure(record.messageId, exc, retriable=retriable, document_id=document_id)
