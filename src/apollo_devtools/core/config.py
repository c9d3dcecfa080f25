"""
Configuration management for Apollo Devtools.

Uses Pydantic Settings for environment variable validation and type safety.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class RecorderConfig(BaseSettings):
    """Recent activity recorder configuration."""

    poll_interval_seconds: float = Field(
        default=1.0,
        gt=0.0,
        description="How often the watched collection is sampled (seconds)"
    )
    max_events: int = Field(
        default=500,
        ge=1,
        description="Maximum number of recorded events kept per session"
    )
    source_url: str = Field(
        default="http://localhost:4000/__apollo/cache",
        description="URL returning the client cache extract as JSON"
    )
    timeout: float = Field(
        default=5.0,
        gt=0.0,
        description="HTTP timeout when sampling the cache (seconds)"
    )

    class Config:
        env_prefix = "RECORDER_"


class ApiConfig(BaseSettings):
    """HTTP API configuration."""

    host: str = Field(
        default="0.0.0.0",
        description="Interface the API server binds to"
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port the API server listens on"
    )
    reload: bool = Field(
        default=False,
        description="Enable uvicorn auto-reload (development only)"
    )

    class Config:
        env_prefix = "API_"


class AppConfig(BaseSettings):
    """Main application configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # Nested configurations
    recorder: RecorderConfig = Field(default_factory=RecorderConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Lazily loads configuration on first access.

    Returns:
        AppConfig: The global configuration instance
    """
    global _config
    if _config is None:
        _config = AppConfig(
            recorder=RecorderConfig(),
            api=ApiConfig(),
        )
    return _config


def reload_config() -> AppConfig:
    """
    Reload configuration from environment variables.

    Useful for testing or when environment changes.

    Returns:
        AppConfig: The reloaded configuration instance
    """
    global _config
    _config = None
    return get_config()
