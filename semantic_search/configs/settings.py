"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides the cached factory used by Lambda handlers and FastAPI dependencies.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

import logging
from functools import lru_cache

from pydantic import Field

from semantic_search.configs.base import BaseSettings
from semantic_search.configs.embedding import EmbeddingSettings
from semantic_search.configs.mongodb import MongoSettings
from semantic_search.configs.pipeline import PipelineSettings
from semantic_search.configs.queue import QueueSettings
from semantic_search.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    mongodb: MongoSettings = Field(default_factory=MongoSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    queue: QueueSettings = Field(default_factory=QueueSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once per process.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


def validate_environment(settings: Settings, require_queue: bool = False) -> None:
    """
    Validate the settings a function needs before touching any dependency.

    Args:
        settings: Loaded settings
        require_queue: Whether the destination queue URL is needed

    Raises:
        ConfigurationError: A required value is missing
    """
    missing = []
    if not settings.mongodb.has_connection_source:
        missing.append("MONGODB_URI or MONGODB_CONNECTION_STRING_SECRET_NAME")
    if require_queue and not settings.queue.url:
        missing.append("EVENTS_QUEUE_URL")

    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}",
            details={"missing": missing},
        )

    logger.debug("validate_environment - Environment validated")
