"""
Dependency injection container.

Builds each component once per worker process and hands the same instance to
every invocation the process serves. Lambda handlers and the FastAPI app both
resolve their components here; clear() is the shutdown hook that releases the
MongoDB connection.

Dependencies: semantic_search.configs, semantic_search.boundary, semantic_search.core
System role: DI container for service injection
"""

import logging

from semantic_search.boundary.aws.bedrock_client import BedrockEmbeddingClient
from semantic_search.boundary.aws.sqs_client import SQSQueueClient
from semantic_search.boundary.mongo.connection import MongoConnection
from semantic_search.boundary.mongo.document_store import MongoDocumentStore
from semantic_search.configs import Settings, get_settings
from semantic_search.core.backfill import BackfillDispatcher
from semantic_search.core.embedding import BatchConsumer
from semantic_search.core.exceptions import ConfigurationError
from semantic_search.core.search import VectorQueryService

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached component instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._connection: MongoConnection | None = None
        self._document_store: MongoDocumentStore | None = None
        self._embedding_client: BedrockEmbeddingClient | None = None
        self._queue_client: SQSQueueClient | None = None
        self._backfill_dispatcher: BackfillDispatcher | None = None
        self._batch_consumer: BatchConsumer | None = None
        self._query_service: VectorQueryService | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def connection(self) -> MongoConnection:
        """Get cached MongoDB connection (the client itself connects on first use)."""
        if self._connection is None:
            self._connection = MongoConnection(self.settings.mongodb)
            self._connection.install_signal_handlers()
        return self._connection

    @property
    def document_store(self) -> MongoDocumentStore:
        if self._document_store is None:
            mongo = self.settings.mongodb
            self._document_store = MongoDocumentStore(
                self.connection,
                text_field=mongo.text_field,
                vector_field=mongo.vector_field,
                title_field=mongo.title_field,
                search_index=mongo.search_index,
                num_candidates=self.settings.pipeline.search_num_candidates,
            )
        return self._document_store

    @property
    def embedding_client(self) -> BedrockEmbeddingClient:
        if self._embedding_client is None:
            embedding = self.settings.embedding
            self._embedding_client = BedrockEmbeddingClient(
                model_id=embedding.model_id,
                region=embedding.region,
                dimensions=embedding.dimensions,
            )
        return self._embedding_client

    @property
    def queue_client(self) -> SQSQueueClient:
        if self._queue_client is None:
            queue = self.settings.queue
            if not queue.url:
                raise ConfigurationError("EVENTS_QUEUE_URL is not set")
            self._queue_client = SQSQueueClient(
                queue_url=queue.url,
                region=queue.region,
                max_batch_entries=queue.max_batch_entries,
            )
        return self._queue_client

    @property
    def backfill_dispatcher(self) -> BackfillDispatcher:
        if self._backfill_dispatcher is None:
            pipeline = self.settings.pipeline
            self._backfill_dispatcher = BackfillDispatcher(
                store=self.document_store,
                queue=self.queue_client,
                batch_size=pipeline.batch_size,
                read_limit=pipeline.read_limit,
                trigger_name=pipeline.trigger_name,
                flush_partial_batch=pipeline.flush_partial_batch,
            )
        return self._backfill_dispatcher

    @property
    def batch_consumer(self) -> BatchConsumer:
        if self._batch_consumer is None:
            self._batch_consumer = BatchConsumer(
                embedder=self.embedding_client,
                store=self.document_store,
                time_safety_threshold_ms=self.settings.pipeline.time_safety_threshold_ms,
                max_receive_count=self.settings.queue.max_receive_count,
                text_field=self.settings.mongodb.text_field,
                vector_field=self.settings.mongodb.vector_field,
            )
        return self._batch_consumer

    @property
    def query_service(self) -> VectorQueryService:
        if self._query_service is None:
            mongo = self.settings.mongodb
            self._query_service = VectorQueryService(
                embedder=self.embedding_client,
                store=self.document_store,
                k=self.settings.pipeline.search_k,
                text_field=mongo.text_field,
                title_field=mongo.title_field,
                vector_field=mongo.vector_field,
            )
        return self._query_service

    def clear(self) -> None:
        """Close the MongoDB connection and drop all cached instances."""
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._document_store = None
        self._embedding_client = None
        self._queue_client = None
        self._backfill_dispatcher = None
        self._batch_consumer = None
        self._query_service = None


# Global service cache, one per worker process
_service_cache: ServiceCache | None = None


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    global _service_cache
    if _service_cache is None:
        _service_cache = ServiceCache()
    return _service_cache


def set_service_cache(cache: ServiceCache | None) -> None:
    """Replace the process-wide service cache (None resets it)."""
    global _service_cache
    _service_cache = cache
