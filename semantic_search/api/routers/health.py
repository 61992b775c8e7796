"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: semantic_search.boundary.mongo
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from semantic_search.api.deps import get_connection
from semantic_search.boundary.mongo.connection import MongoConnection

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
def health_check_db(connection: MongoConnection = Depends(get_connection)):
    """MongoDB health check."""
    try:
        connection.ping()
    except Exception as e:  # pylint: disable=broad-except
        logger.error("health_check_db - %s: %s", type(e).__name__, e)
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="unhealthy", message="Database unreachable").model_dump(),
        )
    return HealthResponse(status="healthy", message="Database connection OK")
