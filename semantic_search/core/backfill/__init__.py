"""Backfill of embeddings for documents that do not have one yet."""

from semantic_search.core.backfill.dispatcher import BackfillDispatcher, parse_limit

__all__ = ["BackfillDispatcher", "parse_limit"]
