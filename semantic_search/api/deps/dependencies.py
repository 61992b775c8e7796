"""
FastAPI dependency providers.

Resolve components from the process-wide service cache so tests can swap
them through app.dependency_overrides.

Dependencies: semantic_search.dependencies
System role: DI bridge between FastAPI and the service cache
"""

from semantic_search.boundary.mongo.connection import MongoConnection
from semantic_search.core.backfill import BackfillDispatcher
from semantic_search.core.search import VectorQueryService
from semantic_search.dependencies import get_service_cache


def get_query_service() -> VectorQueryService:
    """Get the cached vector query service."""
    return get_service_cache().query_service


def get_backfill_dispatcher() -> BackfillDispatcher:
    """Get the cached backfill dispatcher."""
    return get_service_cache().backfill_dispatcher


def get_connection() -> MongoConnection:
    """Get the cached MongoDB connection."""
    return get_service_cache().connection
