"""Configuration management for shortlink."""

from datetime import timedelta
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8080,
        description="Port to listen on"
    )

    timeout_keep_alive: int = Field(
        default=5,
        ge=1,
        description="Seconds an idle keep-alive connection is held open"
    )

    timeout_graceful_shutdown: int = Field(
        default=10,
        ge=1,
        description="Seconds in-flight requests get to finish on shutdown"
    )

    # Short link settings
    base_url: str = Field(
        default="http://localhost:8080",
        description="Public domain prefix used to build short URLs"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )

    default_validity_minutes: int = Field(
        default=30,
        ge=1,
        description="Link lifetime when a request does not specify one"
    )

    sweep_interval_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Seconds between expiry sweeps"
    )

    enable_custom_codes: bool = Field(
        default=True,
        description="Allow users to provide custom short codes"
    )

    max_collision_retries: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum random draws per generated code (unbounded if not set)"
    )

    max_url_length: Optional[int] = Field(
        default=None,
        ge=1,
        description="Reject long URLs longer than this (unlimited if not set)"
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

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def default_validity(self) -> timedelta:
        return timedelta(minutes=self.default_validity_minutes)


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
