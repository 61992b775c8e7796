"""API routers."""

from .backfill import router as backfill_router
from .health import router as health_router
from .search import router as search_router

__all__ = ["backfill_router", "health_router", "search_router"]
