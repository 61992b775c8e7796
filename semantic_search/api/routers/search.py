"""
Search API endpoint.

Routes: POST /search

Dependencies: semantic_search.core.search
System role: Vector search HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from semantic_search.api.deps import get_query_service
from semantic_search.core.models import SearchRequest
from semantic_search.core.search import VectorQueryService

router = APIRouter(tags=["search"])


@router.post("/search")
def search(
    request: SearchRequest,
    service: VectorQueryService = Depends(get_query_service),
) -> JSONResponse:
    """Return up to three documents most similar to the query."""
    status_code, body = service.search_response(request.query)
    return JSONResponse(status_code=status_code, content=body)
