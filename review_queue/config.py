"""
Configuration Management Module

This module handles all application configuration using Pydantic Settings.
Configuration is loaded from environment variables (and an optional .env
file) once at startup and is immutable afterwards.

Design Decisions:
- Use Pydantic Settings for automatic environment variable loading
- Frozen settings object, passed explicitly to the GitHub client
- Provide sensible defaults so the service starts with a bare environment
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The GitHub token is loaded from the environment only,
    never hardcoded or logged.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # =========================================================================
    # GitHub Configuration
    # =========================================================================
    github_token: str = Field(
        default="",
        description="Static bearer token used for every GitHub API call"
    )

    github_org: str = Field(
        default="",
        description="Organization scoping all team and PR queries"
    )

    github_api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API"
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server"
    )

    port: int = Field(
        default=9999,
        ge=1,
        le=65535,
        description="Port to bind the server"
    )

    cors_allow_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    log_json_format: bool = Field(
        default=False,
        description="Enable JSON logging format"
    )

    log_requests: bool = Field(
        default=False,
        description="Enable uvicorn access logging"
    )

    # =========================================================================
    # Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("github_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # =========================================================================
    # Computed Properties
    # =========================================================================
    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of allowed CORS origins."""
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are read once per process; every later call returns
    the same immutable instance.

    Returns:
        Settings instance
    """
    return Settings()
