"""
Document store gateway over a MongoDB Atlas collection.

Candidate selection, full-document replace by key, and Atlas Vector Search.

Dependencies: pymongo, bson
System role: Document Store Gateway
"""

import logging
from typing import Any

from bson import ObjectId
from pymongo.errors import PyMongoError

from semantic_search.boundary.mongo.connection import MongoConnection
from semantic_search.core.exceptions import DocumentStoreError
from semantic_search.observability.tracing import trace_span

logger = logging.getLogger(__name__)


def normalize_key(key: Any) -> Any:
    """
    Convert a document key from a change event to its stored form.

    Accepts ObjectId instances, Extended JSON {"$oid": ...} mappings and
    24-character hex strings; any other key is used as-is.
    """
    if isinstance(key, ObjectId):
        return key
    if isinstance(key, dict) and "$oid" in key:
        return ObjectId(key["$oid"])
    if isinstance(key, str) and ObjectId.is_valid(key):
        return ObjectId(key)
    return key


class MongoDocumentStore:
    """Typed read, replace and vector search operations on one collection."""

    def __init__(
        self,
        connection: MongoConnection,
        text_field: str = "plot",
        vector_field: str = "plot_embedding",
        title_field: str = "title",
        search_index: str = "vector_index",
        num_candidates: int = 100,
    ) -> None:
        self._connection = connection
        self.text_field = text_field
        self.vector_field = vector_field
        self.title_field = title_field
        self._search_index = search_index
        self._num_candidates = num_candidates

    def candidate_filter(self) -> dict[str, Any]:
        """Documents with source text and no embedding yet."""
        return {
            self.text_field: {"$exists": True},
            self.vector_field: {"$exists": False},
        }

    def find_candidates(self, limit: int) -> list[dict[str, Any]]:
        """
        Read documents that still need an embedding.

        Args:
            limit: Maximum number of documents to return

        Returns:
            list[dict]: Documents in store iteration order

        Raises:
            DocumentStoreError: The query failed
        """
        with trace_span("mongodb.find_candidates", limit=limit) as span:
            try:
                collection = self._connection.get_collection()
                documents = list(collection.find(self.candidate_filter()).limit(limit))
            except PyMongoError as e:
                raise DocumentStoreError(
                    f"Unable to read candidate documents: {e}", operation="find"
                ) from e
            span.annotate(read=len(documents))

        logger.info("Documents read", extra={"length": len(documents)})
        return documents

    def replace_document(self, key: Any, full_document: dict[str, Any]) -> int:
        """
        Replace the stored document matching key with full_document.

        Args:
            key: Document _id (ObjectId, {"$oid": ...} or hex string)
            full_document: New document body without _id

        Returns:
            int: Number of documents modified

        Raises:
            DocumentStoreError: The write failed
        """
        body = {k: v for k, v in full_document.items() if k != "_id"}
        with trace_span("mongodb.replace_document", document_id=str(key)):
            try:
                collection = self._connection.get_collection()
                result = collection.replace_one({"_id": normalize_key(key)}, body)
            except PyMongoError as e:
                raise DocumentStoreError(
                    f"Unable to replace document: {e}",
                    operation="replace",
                    details={"document_id": str(key)},
                ) from e

        logger.debug(
            "MongoDB response",
            extra={"matched_count": result.matched_count, "modified_count": result.modified_count},
        )
        return result.modified_count

    def vector_search(
        self,
        vector: list[float],
        field: str | None = None,
        k: int = 3,
        projection: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Nearest-neighbour search over a vector field.

        Args:
            vector: Query embedding
            field: Vector field path (defaults to the configured vector field)
            k: Number of neighbours
            projection: Fields to return in addition to _id and score

        Returns:
            list[dict]: Documents with a "score" key, most similar first

        Raises:
            DocumentStoreError: The aggregation failed
        """
        if projection is None:
            projection = {self.title_field: 1, self.text_field: 1}
        pipeline = [
            {
                "$vectorSearch": {
                    "index": self._search_index,
                    "path": field or self.vector_field,
                    "queryVector": vector,
                    "numCandidates": max(self._num_candidates, k),
                    "limit": k,
                }
            },
            {"$project": {**projection, "score": {"$meta": "vectorSearchScore"}}},
        ]
        with trace_span("mongodb.vector_search", k=k) as span:
            try:
                collection = self._connection.get_collection()
                results = list(collection.aggregate(pipeline))
            except PyMongoError as e:
                raise DocumentStoreError(
                    f"Unable to query search index: {e}", operation="vector_search"
                ) from e
            span.annotate(results=len(results))

        logger.info("Results found", extra={"length": len(results)})
        return results
