"""
MongoDB Atlas configuration settings.

Connection string location, target collection, field names and the
Atlas Vector Search index used for similarity queries.

Dependencies: pydantic, pydantic_settings
System role: Document store configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from semantic_search.configs.base import BaseSettings


class MongoSettings(BaseSettings):
    """MongoDB Atlas configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MONGODB_",
        case_sensitive=False,
        extra="ignore",
    )

    uri: str | None = Field(
        default=None,
        description="Direct connection string (takes precedence over the secret)",
    )
    connection_string_secret_name: str | None = Field(
        default=None,
        description="Secrets Manager secret holding {\"url\": <connection string>}",
    )
    database: str = Field(default="sample_mflix", description="Database name")
    collection: str = Field(default="movies", description="Collection name")
    search_index: str = Field(
        default="vector_index",
        description="Atlas Vector Search index over the vector field",
    )
    connect_timeout_ms: int = Field(default=5000, description="Connect timeout in ms")

    text_field: str = Field(default="plot", description="Source text field")
    vector_field: str = Field(default="plot_embedding", description="Embedding field")
    title_field: str = Field(default="title", description="Display title field")

    @property
    def has_connection_source(self) -> bool:
        """Whether a URI or a secret reference is configured."""
        return bool(self.uri or self.connection_string_secret_name)
