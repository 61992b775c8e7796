"""HTTP API (FastAPI) exposing search and backfill outside of Lambda."""
