"""
SubsPlease Plugin Configuration

This module handles configuration validation and defaults for the SubsPlease plugin.
"""

import logging
from datetime import timezone as dt_timezone, tzinfo
from typing import Dict, Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


RELEASE_GROUP = "SubsPlease"


def resolve_timezone(name: str) -> tzinfo:
    """
    Map a zone name such as 'UTC' or 'Asia/Tokyo' to a tzinfo.

    Raises:
        ValueError: If the name is not a known IANA zone
    """
    if name.strip().upper() in ("UTC", "Z"):
        return dt_timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


class SubsPleaseConfig(BaseModel):
    """Configuration model for SubsPlease plugin."""

    enabled: bool = Field(default=True, description="Enable/disable the plugin")
    timeout: int = Field(default=30, description="Request timeout in seconds")
    max_retries: int = Field(default=3, description="Maximum number of request retries")
    retry_delay: float = Field(default=1.0, description="Base delay between retries in seconds")

    api_base_url: str = Field(default="https://subsplease.org/api/", description="API endpoint")
    site_base_url: str = Field(default="https://subsplease.org", description="Website base URL")
    timezone: str = Field(default="UTC", description="Timezone the API reports release dates in")
    release_group: str = Field(default=RELEASE_GROUP, description="Release group label")

    user_agent: str = Field(
        default="AniTorrent/0.1.0",
        description="User agent string for requests"
    )

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 5:
            raise ValueError("Timeout must be at least 5 seconds")
        return v

    @field_validator('max_retries')
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Retries cannot be negative")
        return v

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        resolve_timezone(v)
        return v

    @field_validator('api_base_url', 'site_base_url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Not an http(s) URL: {v}")
        return v

    @property
    def shows_url(self) -> str:
        return f"{self.site_base_url.rstrip('/')}/shows/"


def get_default_config() -> Dict[str, Any]:
    """Get default configuration for SubsPlease plugin."""
    return SubsPleaseConfig().model_dump()


def validate_config(config: Dict[str, Any]) -> SubsPleaseConfig:
    """
    Validate and create SubsPleaseConfig from dictionary.

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return SubsPleaseConfig(**config)
    except Exception as e:
        logger.error(f"Invalid SubsPlease configuration: {e}")
        raise ValueError(f"Invalid SubsPlease configuration: {e}")


def merge_with_defaults(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge provided config with defaults.

    Args:
        config: User configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    merged = get_default_config()
    if config:
        merged.update(config)
    return merged


__all__ = [
    "RELEASE_GROUP",
    "resolve_timezone",
    "SubsPleaseConfig",
    "get_default_config",
    "validate_config",
    "merge_with_defaults",
]
