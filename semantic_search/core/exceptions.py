"""
Exception hierarchy for the semantic search pipeline.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, and declare
whether the failed unit of work should be retried by redelivery.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SemanticSearchException(Exception):
    """Base exception for all semantic search errors."""

    retriable: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(SemanticSearchException):
    """Raised when required configuration is missing or invalid."""


class ClientInputError(SemanticSearchException):
    """Raised when a caller supplies a malformed request."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize client input error.

        Args:
            message: Error message, safe to return to the caller
            field: Request field that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class TransientDependencyError(SemanticSearchException):
    """Raised when a store, queue or embedding call fails or times out."""

    retriable = True

    def __init__(
        self,
        message: str,
        dependency: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize transient dependency error.

        Args:
            message: Error message
            dependency: Name of the failing dependency (mongodb, sqs, bedrock)
            details: Additional context
        """
        details = details or {}
        if dependency:
            details["dependency"] = dependency
        super().__init__(message, details)


class EmbeddingError(TransientDependencyError):
    """Raised when the embedding model call fails or returns no vector."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, dependency="bedrock", details=details)


class DocumentStoreError(TransientDependencyError):
    """Raised when a document store read, write or search fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, dependency="mongodb", details=details)


class QueueSendError(TransientDependencyError):
    """Raised when a batch of messages cannot be enqueued."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, dependency="sqs", details=details)


class MessageParseError(TransientDependencyError):
    """Raised when a queued payload cannot be parsed as a change event."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, dependency="payload", details=details)


class TimeBudgetExceeded(TransientDependencyError):
    """Raised when too little invocation time remains to start a record."""

    def __init__(
        self,
        remaining_ms: int,
        threshold_ms: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details.update({"remaining_ms": remaining_ms, "threshold_ms": threshold_ms})
        self.remaining_ms = remaining_ms
        self.threshold_ms = threshold_ms
        super().__init__(
            "Time is about to expire, stopping processing",
            dependency="runtime",
            details=details,
        )


class DataIntegrityError(SemanticSearchException):
    """Raised when a write reports that no document was modified."""

    retriable = True

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)
