"""
Embedding pipeline configuration.

Batch sizing, read limits and the per-record time budget.

Dependencies: pydantic, pydantic_settings
System role: Backfill, consumer and search tuning
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from semantic_search.configs.base import BaseSettings


class PipelineSettings(BaseSettings):
    """Settings for backfill dispatch, batch consumption and search."""

    model_config = SettingsConfigDict(
        env_prefix="PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    batch_size: int = Field(default=10, ge=1, le=10, description="Messages per send batch")
    read_limit: int = Field(default=50, ge=1, description="Default candidate read limit")
    time_safety_threshold_ms: int = Field(
        default=1000,
        ge=0,
        description="Minimum remaining invocation time required to start a record",
    )
    flush_partial_batch: bool = Field(
        default=False,
        description="Send the trailing batch even when smaller than batch_size",
    )
    search_k: int = Field(default=3, ge=1, description="Nearest neighbours returned by search")
    search_num_candidates: int = Field(
        default=100,
        ge=1,
        description="ANN candidates considered by Atlas Vector Search",
    )
    trigger_name: str = Field(
        default="MongoDB Database Trigger for sample_mflix.movies",
        description="detail-type stamped on backfilled change events",
    )
