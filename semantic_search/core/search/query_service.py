"""
Vector query service.

Turns a free-text query into an embedding with the same model used on the
write path, then asks the document store for the nearest neighbours.

Errors are split at the service boundary: a missing query is a client error
(400), anything else is reported with one generic, caller-safe message (500)
while the full cause chain goes to the operator log.

Dependencies: semantic_search.boundary (embedding client, document store)
System role: Vector Query Service (synchronous read path)
"""

import logging
from typing import Any, Protocol

from semantic_search.core.exceptions import ClientInputError, DocumentStoreError, EmbeddingError
from semantic_search.core.models import SearchResult
from semantic_search.observability.log_utils import log_exception_with_context
from semantic_search.observability.tracing import trace_span

logger = logging.getLogger(__name__)

SEARCH_ERROR_MESSAGE = "An error occurred while searching the movies, please try again later."


class Embedder(Protocol):
    def embed(self, text: str) -> list[float]: ...


class VectorSearcher(Protocol):
    def vector_search(
        self,
        vector: list[float],
        field: str | None = None,
        k: int = 3,
        projection: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]: ...


class VectorQueryService:
    """Embed a query and return the most similar documents."""

    def __init__(
        self,
        embedder: Embedder,
        store: VectorSearcher,
        k: int = 3,
        text_field: str = "plot",
        title_field: str = "title",
        vector_field: str = "plot_embedding",
    ) -> None:
        self._embedder = embedder
        self._store = store
        self._k = k
        self._text_field = text_field
        self._title_field = title_field
        self._vector_field = vector_field

    def search(self, query_text: Any) -> list[SearchResult]:
        """
        Search for the documents closest to the query.

        Args:
            query_text: Free-text query

        Returns:
            list[SearchResult]: At most k results, highest score first

        Raises:
            ClientInputError: Missing or blank query
            EmbeddingError: The query could not be embedded
            DocumentStoreError: The vector search failed
        """
        if not isinstance(query_text, str) or not query_text.strip():
            raise ClientInputError("query is required", field="query")

        logger.debug("query", extra={"query": query_text})
        with trace_span("search", k=self._k) as span:
            try:
                embedding = self._embedder.embed(query_text)
            except Exception as e:
                raise EmbeddingError("Unable to get embedding") from e

            try:
                items = self._store.vector_search(
                    embedding,
                    field=self._vector_field,
                    k=self._k,
                    projection={self._title_field: 1, self._text_field: 1},
                )
            except Exception as e:
                raise DocumentStoreError(
                    "Unable to get embedding or search index", operation="vector_search"
                ) from e

            results = [self._to_result(item) for item in items]
            results.sort(key=lambda r: r.score, reverse=True)
            span.annotate(results=len(results))

        return results[: self._k]

    def search_response(self, query_text: Any) -> tuple[int, Any]:
        """
        Run a search and map the outcome to a status code and JSON body.

        Returns:
            tuple[int, Any]: (200, results) | (400, {"message"}) | (500, {"message"})
        """
        try:
            results = self.search(query_text)
        except ClientInputError as e:
            logger.warning("search_response - ClientInputError: %s", e.message)
            return 400, {"message": e.message}
        except Exception as e:  # pylint: disable=broad-except
            log_exception_with_context(logger, "Unable to get embedding or search index", e)
            return 500, {"message": SEARCH_ERROR_MESSAGE}

        return 200, [result.model_dump(by_alias=True) for result in results]

    def _to_result(self, item: dict[str, Any]) -> SearchResult:
        return SearchResult(
            _id=str(item.get("_id")),
            title=item.get(self._title_field),
            plot=item.get(self._text_field),
            score=float(item.get("score", 0.0)),
        )
