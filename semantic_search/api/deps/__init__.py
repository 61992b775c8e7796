"""API-specific dependencies."""

from .dependencies import get_backfill_dispatcher, get_connection, get_query_service

__all__ = ["get_backfill_dispatcher", "get_connection", "get_query_service"]
