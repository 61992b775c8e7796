"""
FastAPI application with assembled routers.

Initializes the FastAPI app with search, backfill and health routers and
configures the uvicorn server.

Dependencies: fastapi, uvicorn, semantic_search.api.routers
System role: HTTP entry point outside of Lambda
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from semantic_search.core.exceptions import ClientInputError
from semantic_search.core.models import ErrorResponse
from semantic_search.dependencies import get_service_cache
from semantic_search.observability.log_utils import log_exception_with_context
from semantic_search.observability.logger import configure_logging
from semantic_search.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import backfill_router, health_router, search_router

load_dotenv()

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred, please try again later."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and releases the MongoDB connection on shutdown.
    """
    cache = get_service_cache()
    settings = cache.settings
    configure_logging(
        level=settings.effective_log_level,
        environment=settings.environment,
        aws_account_id=settings.aws_account_id,
    )

    yield

    cache.clear()
    logger.info("Service cache cleared")


async def client_input_error_handler(request: Request, exc: ClientInputError) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(message=exc.message).model_dump())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(message="Invalid request body").model_dump())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log_exception_with_context(logger, "Unhandled error", exc, path=request.url.path)
    return JSONResponse(status_code=500, content=ErrorResponse(message=GENERIC_ERROR_MESSAGE).model_dump())


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="MongoDB Bedrock Semantic Search API",
        description="Vector search and embedding backfill over MongoDB Atlas",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(ClientInputError, client_input_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health_router)
    app.include_router(search_router)
    app.include_router(backfill_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "semantic_search.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
