"""
Text embedding client using Amazon Bedrock.

Converts text to a fixed-length vector with the configured Titan model.
The same client serves the write path (batch consumer) and the read path
(vector query service).

Dependencies: langchain_aws
System role: Embedding Client
"""

import logging
from typing import Any

from langchain_aws import BedrockEmbeddings

from semantic_search.core.exceptions import EmbeddingError
from semantic_search.observability.tracing import trace_span

logger = logging.getLogger(__name__)


class BedrockEmbeddingClient:
    """Generate embeddings with an Amazon Bedrock embedding model."""

    def __init__(
        self,
        model_id: str = "amazon.titan-embed-text-v1",
        region: str = "us-east-1",
        dimensions: int = 0,
        embeddings: Any | None = None,
    ) -> None:
        """
        Initialize embedding client with Bedrock credentials.

        Args:
            model_id: Bedrock model ID (Titan v1 = 1536 dimensions)
            region: AWS region for Bedrock Runtime
            dimensions: Expected vector length, 0 to accept any non-empty vector
            embeddings: Pre-built LangChain embeddings object (mainly for tests)

        Raises:
            ValueError: When model_id is empty
        """
        if not model_id:
            raise ValueError("model_id cannot be empty")

        self._model_id = model_id
        self._dimensions = dimensions
        self._embeddings = embeddings or BedrockEmbeddings(
            model_id=model_id,
            region_name=region,
        )

    def embed(self, text: str) -> list[float]:
        """
        Create an embedding for the given text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: Empty input, model invocation failure, empty vector
                or unexpected dimensionality
        """
        if not isinstance(text, str) or not text.strip():
            raise EmbeddingError("Cannot embed empty text")

        with trace_span("bedrock.embed", model_id=self._model_id) as span:
            try:
                vector = self._embeddings.embed_query(text)
            except Exception as e:
                logger.error(
                    "embed - Unable to invoke model: %s: %s",
                    type(e).__name__,
                    e,
                    extra={"model_id": self._model_id},
                )
                raise EmbeddingError(
                    f"Error in model response: {e}",
                    details={"model_id": self._model_id},
                ) from e

            if not vector:
                raise EmbeddingError(
                    "Empty embedding returned by the API",
                    details={"model_id": self._model_id},
                )
            if self._dimensions and len(vector) != self._dimensions:
                raise EmbeddingError(
                    "Embedding has unexpected dimensionality",
                    details={"expected": self._dimensions, "actual": len(vector)},
                )
            span.annotate(dimensions=len(vector))

        return [float(v) for v in vector]
