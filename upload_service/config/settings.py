"""
Application configuration using Pydantic settings.

Every setting comes from an environment variable with a hardcoded default.
An unset or empty variable falls back to the default; there is no other
validation. Settings are resolved once and never mutated afterwards.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service settings loaded from environment variables.

    Field names map onto environment variables case-insensitively,
    e.g. ``s3_key_path`` is read from ``S3_KEY_PATH``.
    """

    # Object storage
    aws_region: str = Field(
        default="us-east-1",
        description="Region used to build the S3 client"
    )
    s3_bucket: str = Field(
        default="my-bucket",
        description="Bucket that uploads are written to and listed from"
    )
    s3_key_path: str = Field(
        default="uploads/",
        description="Key prefix prepended to every uploaded filename"
    )
    s3_endpoint_url: Optional[str] = Field(
        default=None,
        description="Endpoint override for S3-compatible stores (MinIO, R2, LocalStack)"
    )
    storage_mock_mode: bool = Field(
        default=False,
        description="Use an in-memory object store instead of S3. Local development only."
    )

    # Server
    port: str = Field(
        default="8080",
        description="Port the HTTP server listens on (all interfaces)"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        frozen=True,
    )

    @property
    def port_number(self) -> int:
        """Listen port as an integer for the server."""
        return int(self.port)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once per process. Tests should build their own
    ``Settings`` and pass it to ``create_app`` rather than touching this cache.
    """
    return Settings()
