"""Configuration management for thumbcache.

Loads table, bucket and rendering API settings from environment variables
using Pydantic. AWS credentials are never read here; boto3 resolves them
through its own credential chain.

Usage:
    from thumbcache.config import settings

    print(settings.thumb_table)
    print(settings.thumbnail_api_url)
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """thumbcache configuration from environment variables.

    Loads from .env file automatically. Validates on instantiation.

    Attributes:
        thumb_table: DynamoDB table holding cache records
        thumb_bucket: S3 bucket that receives newly created thumbnails
        thumbnail_api_url: Full URL of the thumbnail rendering endpoint
        aws_region: Region for the DynamoDB and S3 clients
        request_timeout: Rendering API timeout in seconds
        single_flight: Serialize same-key lookups within one process
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars
    )

    thumb_table: str = Field(default="thumbnails", min_length=1, description="DynamoDB table name")
    thumb_bucket: str = Field(default="thumbnails", min_length=1, description="Thumbnail bucket")
    thumbnail_api_url: str = Field(
        default="http://localhost:8080/thumbnail",
        description="Thumbnail rendering API endpoint",
    )
    aws_region: str = Field(default="us-east-1", description="AWS region")
    request_timeout: float = Field(default=30.0, gt=0, description="Rendering API timeout (s)")
    single_flight: bool = Field(
        default=True,
        description="Hold a per-key lock so one process never renders the same key twice at once",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("thumbnail_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Ensure the rendering API URL is absolute http(s)."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"thumbnail_api_url must start with http:// or https://, got '{v}'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid:
            raise ValueError(f"log_level must be one of {valid}, got {v}")
        return v_upper


# Global settings instance, loaded once at import
settings = Settings()
