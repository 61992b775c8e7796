"""
Backfill API endpoint.

Routes: POST /create-initial-embeddings?count=<n>

Dependencies: semantic_search.core.backfill
System role: Backfill trigger HTTP API
"""

from fastapi import APIRouter, Depends, Query

from semantic_search.api.deps import get_backfill_dispatcher
from semantic_search.core.backfill import BackfillDispatcher
from semantic_search.core.models import BackfillResult

router = APIRouter(tags=["backfill"])


@router.post("/create-initial-embeddings", response_model=BackfillResult)
def create_initial_embeddings(
    count: str | None = Query(default=None, description="Documents to read (default 50)"),
    dispatcher: BackfillDispatcher = Depends(get_backfill_dispatcher),
) -> BackfillResult:
    """Enqueue candidate documents for embedding."""
    return dispatcher.run(count)
