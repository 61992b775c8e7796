"""
SQS queue configuration settings.

Dependencies: pydantic_settings
System role: Message queue configuration for the embedding pipeline
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from semantic_search.configs.base import BaseSettings


class QueueSettings(BaseSettings):
    """Destination queue and redelivery policy."""

    model_config = SettingsConfigDict(
        env_prefix="EVENTS_QUEUE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Destination SQS queue URL")
    region: str | None = Field(default=None, description="AWS region (client default if unset)")
    visibility_timeout_seconds: int = Field(
        default=30,
        description="Visibility window before an unacknowledged message is redelivered",
    )
    max_receive_count: int = Field(
        default=3,
        ge=1,
        description="Deliveries before a message moves to the dead-letter queue",
    )
    max_batch_entries: int = Field(
        default=10,
        ge=1,
        le=10,
        description="SQS SendMessageBatch entry limit",
    )
