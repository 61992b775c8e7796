"""
Core pipeline components.

Backfill dispatch, batch consumption of change events and vector search.
"""
