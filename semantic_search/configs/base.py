"""
Base configuration settings.

Provides common configuration inherited by all specific config modules.
Handles environment detection and shared defaults.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Application environment (development, staging, PROD)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: str | None = Field(
        default=None,
        description="Logging level override (defaults to INFO in PROD, DEBUG elsewhere)",
    )
    aws_account_id: str = Field(
        default="N/A",
        description="AWS account ID attached to every log line",
    )

    @property
    def effective_log_level(self) -> str:
        """Resolve the log level from the override or the environment."""
        if self.log_level:
            return self.log_level.upper()
        return "INFO" if self.environment.upper() == "PROD" else "DEBUG"
