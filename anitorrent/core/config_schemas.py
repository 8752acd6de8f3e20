"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the data structures and validation rules for
application settings using Pydantic models.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class NetworkSettings(BaseModel):
    """Network-related configuration settings."""

    timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Network timeout in seconds"
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum number of retry attempts"
    )
    retry_delay: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Base delay between retries in seconds"
    )
    user_agent: str = Field(
        default="AniTorrent/0.1.0",
        min_length=1,
        description="User agent string for requests"
    )


class SearchSettings(BaseModel):
    """Search-related configuration settings."""

    default_resolution: str = Field(
        default="",
        description="Resolution applied to smart searches when none is given ('' for any)"
    )
    max_display_results: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum number of rows rendered in result tables"
    )

    @field_validator('default_resolution')
    @classmethod
    def validate_default_resolution(cls, v: str) -> str:
        """Resolutions are written like '1080p'."""
        v = v.strip()
        if v and not v.rstrip('pP').isdigit():
            raise ValueError("Resolution must look like '1080p'")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )


class UISettings(BaseModel):
    """User interface configuration settings."""

    table_style: Literal["rounded", "simple", "minimal"] = Field(
        default="rounded",
        description="Style for data tables"
    )
    show_magnets: bool = Field(
        default=False,
        description="Show magnet links in result tables"
    )


class AppSettings(BaseModel):
    """Main application settings container."""

    network: NetworkSettings = Field(default_factory=NetworkSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    ui: UISettings = Field(default_factory=UISettings)


# Export all configuration models
__all__ = [
    "NetworkSettings",
    "SearchSettings",
    "LoggingSettings",
    "UISettings",
    "AppSettings",
]
