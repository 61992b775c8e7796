"""
Backfill dispatcher.

Reads candidate documents (text present, embedding absent) and enqueues one
change event per document, in send batches of a fixed size. The events have
the same shape the database trigger produces, so the batch consumer handles
backfilled and live changes identically.

Only full batches are sent unless flush_partial_batch is enabled: with 25
candidates and a batch size of 10, 20 messages are sent and 5 are left for a
later run.

Dependencies: semantic_search.boundary (store and queue gateways)
System role: Fan-out of unprocessed documents into the events queue
"""

import logging
from typing import Any, Iterable, Protocol

from semantic_search.core.exceptions import ClientInputError
from semantic_search.core.models import BackfillResult, ChangeEvent, QueueMessage
from semantic_search.observability.tracing import trace_span

logger = logging.getLogger(__name__)

DEFAULT_TRIGGER_NAME = "MongoDB Database Trigger for sample_mflix.movies"

# SQS SendMessageBatch entry limit
MAX_BATCH_SIZE = 10


class CandidateSource(Protocol):
    def find_candidates(self, limit: int) -> list[dict[str, Any]]: ...


class BatchSender(Protocol):
    def send_batch(self, entries: list[QueueMessage]) -> int: ...


def parse_limit(value: Any, default: int) -> int:
    """
    Validate a caller-supplied read limit.

    Args:
        value: Raw value (int, numeric string or None)
        default: Limit used when value is None or an empty string

    Returns:
        int: Positive limit

    Raises:
        ClientInputError: Non-numeric or non-positive value
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ClientInputError("count must be a positive integer", field="count")
    if isinstance(value, int):
        limit = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        limit = int(value.strip())
    else:
        raise ClientInputError("count must be a positive integer", field="count")
    if limit <= 0:
        raise ClientInputError("count must be a positive integer", field="count")
    return limit


class BackfillDispatcher:
    """Select candidate documents and fan them out to the queue."""

    def __init__(
        self,
        store: CandidateSource,
        queue: BatchSender,
        batch_size: int = 10,
        read_limit: int = 50,
        trigger_name: str = DEFAULT_TRIGGER_NAME,
        flush_partial_batch: bool = False,
    ) -> None:
        """
        Args:
            store: Document store gateway
            queue: Queue gateway
            batch_size: Messages per send batch
            read_limit: Default number of candidates to read
            trigger_name: detail-type stamped on each event
            flush_partial_batch: Also send a trailing batch smaller than batch_size
        """
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")
        self._store = store
        self._queue = queue
        self._batch_size = batch_size
        self._read_limit = read_limit
        self._trigger_name = trigger_name
        self._flush_partial_batch = flush_partial_batch

    def select_candidates(self, limit: int | None = None) -> list[dict[str, Any]]:
        """
        Read documents with text but no embedding.

        Args:
            limit: Maximum documents to read (configured default if None)

        Raises:
            ClientInputError: limit is not a positive integer
        """
        limit = parse_limit(limit, self._read_limit)
        with trace_span("backfill.select_candidates", limit=limit):
            return self._store.find_candidates(limit)

    def dispatch(self, documents: Iterable[dict[str, Any]], batch_size: int | None = None) -> int:
        """
        Enqueue one change event per document in fixed-size batches.

        Batches already sent are not rolled back when a later batch fails;
        a duplicate delivery leaves the stored document unchanged.

        Args:
            documents: Candidate documents
            batch_size: Override of the configured batch size

        Returns:
            int: Number of documents enqueued

        Raises:
            ValueError: batch_size outside 1..MAX_BATCH_SIZE
            QueueSendError: A batch could not be sent
        """
        size = self._batch_size if batch_size is None else batch_size
        if not 1 <= size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")

        sent = 0
        batch: list[QueueMessage] = []
        with trace_span("backfill.dispatch", batch_size=size) as span:
            for document in documents:
                event = ChangeEvent.for_document(document, self._trigger_name)
                batch.append(QueueMessage.from_event(event))
                if len(batch) == size:
                    sent += self._queue.send_batch(batch)
                    batch = []

            if batch:
                if self._flush_partial_batch:
                    sent += self._queue.send_batch(batch)
                else:
                    logger.info(
                        "dispatch - Trailing partial batch not sent",
                        extra={"unsent": len(batch), "batch_size": size},
                    )
            span.annotate(sent=sent)

        return sent

    def run(self, count: Any = None) -> BackfillResult:
        """
        Read candidates and enqueue them.

        Args:
            count: Raw read limit from the caller

        Returns:
            BackfillResult: Documents read and messages sent
        """
        documents = self.select_candidates(count)
        sent = self.dispatch(documents)
        logger.info("run - Backfill dispatched", extra={"read": len(documents), "sent": sent})
        return BackfillResult(read=len(documents), sent=sent)
