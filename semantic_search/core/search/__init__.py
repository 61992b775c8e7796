"""Vector similarity search over stored embeddings."""

from semantic_search.core.search.query_service import SEARCH_ERROR_MESSAGE, VectorQueryService

__all__ = ["SEARCH_ERROR_MESSAGE", "VectorQueryService"]
