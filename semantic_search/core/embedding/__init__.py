"""Embedding computation for change events delivered from the queue."""

from semantic_search.core.embedding.consumer import BatchConsumer

__all__ = ["BatchConsumer"]
