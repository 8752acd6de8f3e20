"""
Core Layer - Data models, configuration and shared services.

This module contains the data models, configuration handling, transport and
exception types shared by every provider plugin.
"""

from anitorrent.core.config_manager import ConfigManager
from anitorrent.core.config_schemas import AppSettings
from anitorrent.core.exceptions import (
    AniTorrentError,
    ConfigurationError,
    FetchFailure,
    NetworkError,
    PluginError,
    SearchError,
)
from anitorrent.core.models import (
    AnimeMedia,
    AnimeTorrent,
    ProviderSettings,
    SearchOptions,
    SmartSearchFilter,
    SmartSearchOptions,
)
from anitorrent.core.transport import AiohttpTransport, FetchResponse, Transport

__all__ = [
    # Data Models
    "AnimeMedia",
    "AnimeTorrent",
    "ProviderSettings",
    "SearchOptions",
    "SmartSearchFilter",
    "SmartSearchOptions",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    # Transport
    "AiohttpTransport",
    "FetchResponse",
    "Transport",
    # Exceptions
    "AniTorrentError",
    "ConfigurationError",
    "FetchFailure",
    "NetworkError",
    "PluginError",
    "SearchError",
]
