"""
Tests for the batch consumer.

Covers per-record isolation, the time guard, idempotent replay, payload
parsing failures, zero-modified writes and correlation scoping.
"""

import logging

import pytest
from bson import ObjectId

from semantic_search.core.embedding import BatchConsumer
from semantic_search.core.models import OutcomeStatus
from semantic_search.observability.correlation import get_correlation


@pytest.fixture
def consumer(embedder, store):
    return BatchConsumer(embedder, store)


def candidate(store, title):
    return next(doc for doc in store.documents.values() if doc["title"] == title)


class TestHandleRecord:
    """Test single record processing."""

    def test_writes_embedding_and_keeps_fields(self, consumer, embedder, store, record_factory, event_body):
        """Should store the embedding alongside the original fields."""
        movie = candidate(store, "Goal Line")
        record = record_factory(event_body(movie), message_id="m-1")

        outcome = consumer.handle_record(record, remaining_time_ms=60_000)

        assert outcome.succeeded
        assert outcome.message_id == "m-1"
        assert outcome.document_id == str(movie["_id"])
        stored = store.documents[movie["_id"]]
        assert stored["plot_embedding"] == embedder.embed(movie["plot"])
        assert stored["title"] == "Goal Line"
        assert stored["year"] == 1999

    def test_replay_is_idempotent(self, consumer, store, record_factory, event_body):
        """A duplicate delivery should leave the document unchanged and fail as retriable."""
        movie = candidate(store, "Starfall")
        body = event_body(movie)

        first = consumer.handle_record(record_factory(body), remaining_time_ms=60_000)
        after_first = dict(store.documents[movie["_id"]])
        second = consumer.handle_record(record_factory(body), remaining_time_ms=60_000)

        assert first.succeeded
        assert store.documents[movie["_id"]] == after_first
        assert second.error_type == "DataIntegrityError"
        assert second.retriable is True

    def test_accepts_trigger_event_with_plain_ids(self, consumer, store, record_factory, trigger_body):
        """Should handle trigger events whose ids are plain hex strings."""
        movie = candidate(store, "Night Case")

        outcome = consumer.handle_record(record_factory(trigger_body(movie)), remaining_time_ms=60_000)

        assert outcome.succeeded
        key, written = store.replace_calls[0]
        assert key == movie["_id"]
        assert isinstance(key, ObjectId)
        assert "_id" not in written
        assert "plot_embedding" in store.documents[movie["_id"]]

    def test_time_guard_skips_all_work(self, consumer, embedder, store, record_factory, event_body):
        """Below the threshold no embedding or write should be attempted."""
        record = record_factory(event_body(candidate(store, "Goal Line")))

        outcome = consumer.handle_record(record, remaining_time_ms=500)

        assert outcome.status is OutcomeStatus.FAILURE
        assert outcome.error_type == "TimeBudgetExceeded"
        assert outcome.retriable is True
        assert embedder.calls == []
        assert store.replace_calls == []

    @pytest.mark.parametrize("body", ["", "not json", "[]", '{"version": "0"}'])
    def test_unparseable_payload_fails_record(self, consumer, embedder, record_factory, body):
        """Malformed bodies should fail the record without calling the model."""
        outcome = consumer.handle_record(record_factory(body), remaining_time_ms=60_000)

        assert not outcome.succeeded
        assert outcome.error_type == "MessageParseError"
        assert outcome.retriable is True
        assert embedder.calls == []

    def test_embedding_failure(self, embedder_factory, store, record_factory, event_body):
        """Model errors should fail the record before any write."""
        movie = candidate(store, "Goal Line")
        consumer = BatchConsumer(embedder_factory(fail_on={movie["plot"]}), store)

        outcome = consumer.handle_record(record_factory(event_body(movie)), remaining_time_ms=60_000)

        assert outcome.error_type == "EmbeddingError"
        assert outcome.document_id == str(movie["_id"])
        assert store.replace_calls == []

    def test_zero_modified_is_failure(self, consumer, record_factory, event_body, movie_factory):
        """A write that modifies nothing should fail the record."""
        missing = movie_factory("Gone", "A detective vanishes.")

        outcome = consumer.handle_record(record_factory(event_body(missing)), remaining_time_ms=60_000)

        assert outcome.error_type == "DataIntegrityError"
        assert outcome.retriable is True

    def test_store_error_is_failure(self, embedder, record_factory, event_body, movie_factory):
        """Exceptions from the store should fail the record."""

        class BrokenStore:
            def replace_document(self, key, full_document):
                raise ConnectionError("connection reset")

        consumer = BatchConsumer(embedder, BrokenStore())
        record = record_factory(event_body(movie_factory("Goal Line", "A football team.")))

        outcome = consumer.handle_record(record, remaining_time_ms=60_000)

        assert outcome.error_type == "DocumentStoreError"

    def test_correlation_bound_during_processing(self, consumer, embedder, store, record_factory, event_body):
        """Message and document ids should be bound while the record runs."""
        movie = candidate(store, "Goal Line")

        consumer.handle_record(record_factory(event_body(movie), message_id="m-7"), 60_000)

        assert embedder.correlations[0] == {"message_id": "m-7", "document_id": str(movie["_id"])}
        assert get_correlation() == {}

    def test_final_attempt_logs_dead_letter_warning(self, consumer, record_factory, caplog):
        """Should warn when a failing record has reached the receive limit."""
        with caplog.at_level(logging.WARNING, logger="semantic_search.core.embedding.consumer"):
            consumer.handle_record(record_factory("not json", receive_count=3), 60_000)

        assert any("dead-letter queue" in r.getMessage() for r in caplog.records)


class TestHandleBatch:
    """Test batch processing with partial failures."""

    def test_failure_is_isolated_to_its_record(self, embedder_factory, store, record_factory, event_body):
        """Only the failing record should be reported for redelivery."""
        first, second, third = (
            candidate(store, title) for title in ("Goal Line", "Starfall", "Night Case")
        )
        embedder = embedder_factory(fail_on={second["plot"]})
        consumer = BatchConsumer(embedder, store)
        records = [
            record_factory(event_body(first), message_id="m-1"),
            record_factory(event_body(second), message_id="m-2"),
            record_factory(event_body(third), message_id="m-3"),
        ]

        report = consumer.handle_batch(records)

        assert report.succeeded_ids == ["m-1", "m-3"]
        assert report.failed_ids == ["m-2"]
        assert report.to_sqs_response() == {"batchItemFailures": [{"itemIdentifier": "m-2"}]}
        assert "plot_embedding" in store.documents[first["_id"]]
        assert "plot_embedding" not in store.documents[second["_id"]]
        assert "plot_embedding" in store.documents[third["_id"]]

    def test_processes_in_delivery_order(self, consumer, embedder, store, record_factory, event_body):
        """Records should be embedded in the order they were delivered."""
        titles = ["Night Case", "Goal Line", "Starfall"]
        records = [record_factory(event_body(candidate(store, t))) for t in titles]

        consumer.handle_batch(records)

        assert embedder.calls == [candidate(store, t)["plot"] for t in titles]

    def test_time_checked_before_each_record(self, consumer, store, record_factory, event_body):
        """Records started after time runs short should fail as retriable."""
        remaining = iter([5_000, 900, 800])
        records = [
            record_factory(event_body(candidate(store, t)), message_id=f"m-{i}")
            for i, t in enumerate(["Goal Line", "Starfall", "Night Case"], start=1)
        ]

        report = consumer.handle_batch(records, remaining_time_ms=lambda: next(remaining))

        assert report.succeeded_ids == ["m-1"]
        assert report.failed_ids == ["m-2", "m-3"]
        assert all(o.retriable for o in report.outcomes[1:])

    def test_all_succeed(self, consumer, store, record_factory, event_body):
        """A clean batch should report no failures."""
        records = [record_factory(event_body(doc)) for doc in store.find_candidates(10)]

        report = consumer.handle_batch(records)

        assert report.to_sqs_response() == {"batchItemFailures": []}
        assert store.find_candidates(10) == []

    def test_correlation_does_not_leak_between_records(self, consumer, embedder, store, record_factory, event_body):
        """Each record should see only its own correlation keys."""
        docs = [candidate(store, "Goal Line"), candidate(store, "Starfall")]
        records = [
            record_factory(event_body(doc), message_id=f"m-{i}") for i, doc in enumerate(docs)
        ]

        consumer.handle_batch(records)

        assert embedder.correlations == [
            {"message_id": "m-0", "document_id": str(docs[0]["_id"])},
            {"message_id": "m-1", "document_id": str(docs[1]["_id"])},
        ]
        assert get_correlation() == {}
