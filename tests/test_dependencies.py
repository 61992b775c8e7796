"""
Test suite for the service cache.

Verifies components are built once from settings, shared between consumers,
and released on clear().

System role: Verification of DI container
"""

from unittest.mock import MagicMock, patch

import pytest

from semantic_search.configs import Settings
from semantic_search.configs.mongodb import MongoSettings
from semantic_search.configs.pipeline import PipelineSettings
from semantic_search.configs.queue import QueueSettings
from semantic_search.core.backfill import BackfillDispatcher
from semantic_search.core.embedding import BatchConsumer
from semantic_search.core.exceptions import ConfigurationError
from semantic_search.core.search import VectorQueryService
from semantic_search.dependencies import ServiceCache, get_service_cache, set_service_cache


@pytest.fixture
def settings() -> Settings:
    """Settings with every required value present."""
    return Settings(
        mongodb=MongoSettings(uri="mongodb://localhost:27017"),
        queue=QueueSettings(url="https://sqs.local/events", region="us-east-1"),
        pipeline=PipelineSettings(batch_size=5, flush_partial_batch=True),
    )


@pytest.fixture
def patched_clients():
    """Patch the SDK-backed clients so no AWS or MongoDB call is made."""
    with patch("semantic_search.dependencies.BedrockEmbeddingClient") as bedrock, patch(
        "semantic_search.dependencies.SQSQueueClient"
    ) as sqs, patch("semantic_search.dependencies.MongoConnection") as connection:
        yield {"bedrock": bedrock, "sqs": sqs, "connection": connection}


class TestServiceCache:
    """Test lazy construction and sharing."""

    def test_components_built_once(self, settings, patched_clients):
        """Repeated access should return the same instances."""
        cache = ServiceCache(settings)

        assert cache.query_service is cache.query_service
        assert cache.batch_consumer is cache.batch_consumer
        patched_clients["bedrock"].assert_called_once()
        patched_clients["connection"].assert_called_once_with(settings.mongodb)

    def test_write_and_read_paths_share_embedder(self, settings, patched_clients):
        """The consumer and the query service should use one embedding client."""
        cache = ServiceCache(settings)

        assert isinstance(cache.batch_consumer, BatchConsumer)
        assert isinstance(cache.query_service, VectorQueryService)
        assert cache.batch_consumer._embedder is cache.query_service._embedder

    def test_dispatcher_uses_pipeline_settings(self, settings, patched_clients):
        cache = ServiceCache(settings)

        dispatcher = cache.backfill_dispatcher

        assert isinstance(dispatcher, BackfillDispatcher)
        assert dispatcher._batch_size == 5
        assert dispatcher._flush_partial_batch is True
        patched_clients["sqs"].assert_called_once_with(
            queue_url="https://sqs.local/events",
            region="us-east-1",
            max_batch_entries=10,
        )

    def test_connection_installs_signal_handlers(self, settings, patched_clients):
        cache = ServiceCache(settings)

        connection = cache.connection

        connection.install_signal_handlers.assert_called_once()

    def test_queue_client_requires_url(self, patched_clients):
        cache = ServiceCache(
            Settings(mongodb=MongoSettings(uri="mongodb://localhost"), queue=QueueSettings(url=None))
        )

        with pytest.raises(ConfigurationError):
            _ = cache.queue_client

    def test_clear_closes_connection(self, settings, patched_clients):
        """clear() should close the connection and drop cached components."""
        cache = ServiceCache(settings)
        connection = cache.connection
        first_service = cache.query_service

        cache.clear()

        connection.close.assert_called_once()
        assert cache.query_service is not first_service


class TestServiceCacheSingleton:
    """Test the process-wide cache accessor."""

    def test_get_returns_same_cache(self):
        set_service_cache(None)
        try:
            assert get_service_cache() is get_service_cache()
        finally:
            set_service_cache(None)

    def test_set_replaces_cache(self):
        replacement = MagicMock()
        set_service_cache(replacement)
        try:
            assert get_service_cache() is replacement
        finally:
            set_service_cache(None)
