"""
Shared test fixtures and fakes for the test suite.

Provides: deterministic embedder, in-memory document store with cosine
search, recording queue, SQS record factory, sample movie documents.
Dependencies: pytest, bson
System role: Test infrastructure and fixture management
"""

import json
import math
import uuid
from typing import Any

import pytest
from bson import ObjectId

from semantic_search.boundary.mongo.document_store import normalize_key
from semantic_search.core.exceptions import EmbeddingError, QueueSendError
from semantic_search.core.models import ChangeEvent, SQSRecord
from semantic_search.observability.correlation import get_correlation

VOCABULARY = [
    "sports",
    "football",
    "team",
    "space",
    "alien",
    "love",
    "romance",
    "crime",
    "detective",
]


class FakeEmbedder:
    """Deterministic bag-of-words embedder over a small vocabulary."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[str] = []
        self.correlations: list[dict[str, str]] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        self.correlations.append(get_correlation())
        if text in self.fail_on:
            raise EmbeddingError("model unavailable")
        words = [w.strip(".,!?").lower() for w in text.split()]
        vector = [float(words.count(term)) for term in VOCABULARY]
        vector.append(0.1)
        return vector


def cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class InMemoryDocumentStore:
    """Document store fake with the same contract as MongoDocumentStore."""

    def __init__(
        self,
        documents: list[dict[str, Any]] | None = None,
        text_field: str = "plot",
        vector_field: str = "plot_embedding",
        title_field: str = "title",
    ) -> None:
        self.documents: dict[Any, dict[str, Any]] = {
            doc["_id"]: dict(doc) for doc in documents or []
        }
        self.text_field = text_field
        self.vector_field = vector_field
        self.title_field = title_field
        self.find_calls: list[int] = []
        self.replace_calls: list[tuple[Any, dict[str, Any]]] = []

    def find_candidates(self, limit: int) -> list[dict[str, Any]]:
        self.find_calls.append(limit)
        candidates = [
            dict(doc)
            for doc in self.documents.values()
            if self.text_field in doc and self.vector_field not in doc
        ]
        return candidates[:limit]

    def replace_document(self, key: Any, full_document: dict[str, Any]) -> int:
        key = normalize_key(key)
        self.replace_calls.append((key, dict(full_document)))
        if key not in self.documents:
            return 0
        replacement = {"_id": key, **full_document}
        if self.documents[key] == replacement:
            # MongoDB counts an identical replace as matched but not modified
            return 0
        self.documents[key] = replacement
        return 1

    def vector_search(
        self,
        vector: list[float],
        field: str | None = None,
        k: int = 3,
        projection: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        field = field or self.vector_field
        scored = [
            {
                "_id": doc["_id"],
                self.title_field: doc.get(self.title_field),
                self.text_field: doc.get(self.text_field),
                "score": cosine(vector, doc[field]),
            }
            for doc in self.documents.values()
            if field in doc
        ]
        scored.sort(key=lambda item: item["score"], reverse=True)
        return scored[:k]


class RecordingQueue:
    """Queue fake recording every sent batch."""

    def __init__(self, fail_on_batch: int | None = None) -> None:
        self.fail_on_batch = fail_on_batch
        self.batches: list[list[Any]] = []
        self.attempts = 0

    def send_batch(self, entries: list[Any]) -> int:
        self.attempts += 1
        if self.attempts == self.fail_on_batch:
            raise QueueSendError("queue unavailable")
        self.batches.append(list(entries))
        return len(entries)

    @property
    def sent_messages(self) -> list[Any]:
        return [entry for batch in self.batches for entry in batch]


def make_movie(title: str, plot: str | None = None, embedding: list[float] | None = None) -> dict:
    movie: dict[str, Any] = {"_id": ObjectId(), "title": title, "year": 1999}
    if plot is not None:
        movie["plot"] = plot
    if embedding is not None:
        movie["plot_embedding"] = embedding
    return movie


def make_sqs_record(
    body: str,
    message_id: str | None = None,
    receive_count: int = 1,
) -> SQSRecord:
    return SQSRecord(
        messageId=message_id or str(uuid.uuid4()),
        receiptHandle="receipt-handle",
        body=body,
        attributes={"ApproximateReceiveCount": str(receive_count)},
        md5OfBody="hash",
    )


def event_body_for(document: dict[str, Any]) -> str:
    return ChangeEvent.for_document(
        document, "MongoDB Database Trigger for sample_mflix.movies"
    ).to_message_body()


def external_trigger_body(document: dict[str, Any]) -> str:
    """Body shaped like a database trigger delivered through EventBridge (plain JSON ids)."""
    full_document = {**document, "_id": str(document["_id"])}
    return json.dumps(
        {
            "version": "0",
            "id": str(uuid.uuid4()),
            "detail-type": "MongoDB Database Trigger for sample_mflix.movies",
            "source": "aws.partner/mongodb.com/stitch.trigger/abc",
            "account": "123456789012",
            "region": "us-east-1",
            "detail": {
                "operationType": "update",
                "fullDocument": full_document,
                "documentKey": {"_id": str(document["_id"])},
            },
        }
    )


@pytest.fixture(autouse=True)
def skip_lambda_logging_setup(monkeypatch):
    """Keep Lambda handlers from replacing the test run's log handlers."""
    monkeypatch.setattr("semantic_search.lambdas.lambda_utils._logging_configured", True)


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def movies() -> list[dict[str, Any]]:
    """Three candidates, one processed movie and one without a plot."""
    return [
        make_movie("Goal Line", "A football team fights for the sports title."),
        make_movie("Starfall", "An alien crash lands far out in space."),
        make_movie("Night Case", "A detective untangles a crime ring."),
        make_movie("Old News", "A love story.", embedding=[0.0] * 9 + [0.1]),
        make_movie("Untitled Short"),
    ]


@pytest.fixture
def store(movies) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(movies)


@pytest.fixture
def queue() -> RecordingQueue:
    return RecordingQueue()


@pytest.fixture
def store_factory():
    return InMemoryDocumentStore


@pytest.fixture
def queue_factory():
    return RecordingQueue


@pytest.fixture
def embedder_factory():
    return FakeEmbedder


@pytest.fixture
def movie_factory():
    return make_movie


@pytest.fixture
def record_factory():
    return make_sqs_record


@pytest.fixture
def event_body():
    return event_body_for


@pytest.fixture
def trigger_body():
    return external_trigger_body


@pytest.fixture
def indexed_store(embedder, movie_factory) -> InMemoryDocumentStore:
    """Store whose movies all carry embeddings from the fake embedder."""
    plots = {
        "Goal Line": "A football team fights for the sports title.",
        "Starfall": "An alien crash lands far out in space.",
        "Night Case": "A detective untangles a crime ring.",
        "Heartstrings": "A love story and a slow romance.",
    }
    documents = [
        movie_factory(title, plot, embedding=embedder.embed(plot)) for title, plot in plots.items()
    ]
    embedder.calls.clear()
    embedder.correlations.clear()
    return InMemoryDocumentStore(documents)
