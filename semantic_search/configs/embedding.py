"""
Bedrock embedding model configuration.

Dependencies: pydantic_settings
System role: Embedding client configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from semantic_search.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Settings for the Bedrock text embedding model."""

    model_config = SettingsConfigDict(
        env_prefix="BEDROCK_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(
        default="amazon.titan-embed-text-v1",
        description="Bedrock embedding model ID",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for Bedrock Runtime",
    )
    dimensions: int = Field(
        default=1536,
        ge=0,
        description="Expected vector length (0 disables the check)",
    )
