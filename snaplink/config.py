"""Configuration management for URL shortener."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Database settings
    database_path: str = Field(
        default="urls.db",
        description="SQLite database file (':memory:' for a throwaway store)"
    )

    database_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Seconds SQLite waits for a locked database file"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port to listen on"
    )

    # URL shortener settings
    base_url: Optional[str] = Field(
        default=None,
        description="Externally visible base URL for short links; derived from the request when unset"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=8,
        ge=4,
        le=32,
        description="Length of generated short codes"
    )

    max_collision_retries: int = Field(
        default=5,
        ge=0,
        description="Extra insert attempts when a generated short code already exists"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def load_config(**overrides) -> Config:
    """Load configuration from environment, with optional explicit overrides."""
    return Config(**overrides)
