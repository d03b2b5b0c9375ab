"""
Configuration module for the retail admin service.

Centralized settings using Pydantic settings. Every value can be overridden
through environment variables or a .env file.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings for the retail admin service.

    Attributes:
        APP_NAME: Display name for the application
        SERVICE_NAME: Identifier used in logs and metrics
        DEBUG: Enable debug mode (API docs, verbose errors)
        HOST: Server bind address
        PORT: Server port number
        LOG_LEVEL: Logging level
        LOG_JSON: Emit JSON structured logs instead of human-readable lines
        FUNCTIONS_BASE_URL: Base URL of the remote Functions API
        REQUEST_TIMEOUT: Overall deadline for a single remote call in seconds
        CONNECT_TIMEOUT: Deadline for establishing a connection in seconds
        STORAGE_BACKEND: Storage used for fallback operations and notifications
        REDIS_URL: Redis connection URL for the redis storage backend
        REDIS_KEY_PREFIX: Prefix prepended to all Redis keys
    """

    APP_NAME: str = Field(
        default="ABC Retailers Admin",
        description="Display name for the application",
    )
    SERVICE_NAME: str = Field(
        default="retail-admin-service",
        description="Service identifier for logs and metrics",
    )
    DEBUG: bool = Field(default=False, description="Enable debug mode")

    HOST: str = Field(default="0.0.0.0", description="Server bind address")
    PORT: int = Field(default=8080, ge=1, le=65535, description="Server port")

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Use JSON structured logging",
    )

    # Remote Functions API
    FUNCTIONS_BASE_URL: str = Field(
        default="http://localhost:7071/api",
        description="Base URL for the Functions API",
    )
    REQUEST_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        le=60.0,
        description="Deadline for a single remote call in seconds",
    )
    CONNECT_TIMEOUT: float = Field(
        default=3.0,
        gt=0,
        le=30.0,
        description="Deadline for establishing a connection in seconds",
    )

    # Storage
    STORAGE_BACKEND: Literal["redis", "memory"] = Field(
        default="redis",
        description="Storage backend used for fallback and notifications",
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    REDIS_KEY_PREFIX: Optional[str] = Field(
        default="abc",
        description="Prefix for Redis keys",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("FUNCTIONS_BASE_URL")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """
        Validate the Functions API base URL.

        Args:
            value: The URL to validate

        Returns:
            The validated URL without trailing slash

        Raises:
            ValueError: If URL is empty or not http(s)
        """
        if not value:
            raise ValueError("Service URL cannot be empty")

        value = value.rstrip("/")

        if not (value.startswith("http://") or value.startswith("https://")):
            raise ValueError(
                f"Service URL must start with http:// or https://, got: {value}"
            )

        return value


settings = Settings()
