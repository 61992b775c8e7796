"""
Request and response models for the HTTP surface.

Dependencies: pydantic
System role: API contracts for search and backfill
"""

from pydantic import BaseModel, ConfigDict, Field


class SearchRequest(BaseModel):
    """Body of a search request."""

    query: str | None = Field(default=None, description="Free-text query")


class SearchResult(BaseModel):
    """One ranked search hit."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Document key")
    title: str | None = Field(default=None, description="Display title")
    plot: str | None = Field(default=None, description="Text excerpt")
    score: float = Field(..., description="Similarity score, higher is closer")


class BackfillResult(BaseModel):
    """Counts reported by the backfill trigger."""

    read: int = Field(..., ge=0, description="Candidate documents read")
    sent: int = Field(..., ge=0, description="Messages enqueued")


class ErrorResponse(BaseModel):
    """Caller-safe error body."""

    message: str
