"""
Base Plugin Interface - Abstract base class for torrent provider plugins.

This module defines the interface that all torrent provider plugins must
implement, providing a consistent API for latest releases, free-text and
smart searches, magnet resolution and the capability descriptor the host
queries once at registration.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from anitorrent.core.models import (
    AnimeTorrent,
    ProviderSettings,
    SearchOptions,
    SmartSearchOptions,
)
from anitorrent.core.transport import AiohttpTransport, Transport


logger = logging.getLogger(__name__)


class PluginMetadata(BaseModel):
    """Metadata information for a plugin."""

    name: str = Field(..., description="Plugin display name")
    version: str = Field(default="1.0.0", description="Plugin version")
    author: str = Field(default="Unknown", description="Plugin author")
    description: str = Field(default="", description="Plugin description")
    website: Optional[str] = Field(None, description="Source website URL")


class BasePlugin(ABC):
    """
    Abstract base class for torrent provider plugins.

    Subclasses implement the fetch operations; the transport is injected
    or, when omitted, an ``AiohttpTransport`` is created from the plugin
    configuration and closed again by ``cleanup()``.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, transport: Optional[Transport] = None):
        """
        Initialize the plugin with configuration.

        Args:
            config: Plugin-specific configuration dictionary
            transport: Fetch capability; defaults to an aiohttp transport
        """
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._initialize_config()

        self._owns_transport = transport is None
        self._transport: Transport = transport or AiohttpTransport(
            timeout=self.timeout,
            max_retries=self.max_retries,
            retry_delay=self.retry_delay,
            user_agent=self.user_agent,
        )

    def _initialize_config(self) -> None:
        """Initialize plugin configuration with defaults."""
        self.timeout = self.config.get('timeout', 30)
        self.user_agent = self.config.get('user_agent', 'AniTorrent/0.1.0')
        self.max_retries = self.config.get('max_retries', 3)
        self.retry_delay = self.config.get('retry_delay', 1.0)

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata information."""
        pass

    @property
    @abstractmethod
    def settings(self) -> ProviderSettings:
        """Get the capability descriptor declared to the host."""
        pass

    def get_settings(self) -> ProviderSettings:
        """Host-facing accessor for ``settings``."""
        return self.settings

    @abstractmethod
    async def get_latest(self) -> List[AnimeTorrent]:
        """
        Get the most recent releases.

        Returns:
            List of normalized torrents

        Raises:
            NetworkError: If the provider cannot be reached
        """
        pass

    @abstractmethod
    async def search(self, options: Union[SearchOptions, str]) -> List[AnimeTorrent]:
        """
        Search releases by free text.

        Args:
            options: Search options or a plain query string

        Returns:
            List of normalized torrents
        """
        pass

    async def smart_search(self, options: SmartSearchOptions) -> List[AnimeTorrent]:
        """
        Search with structured constraints.

        Providers that declare ``can_smart_search`` override this.
        """
        return []

    async def get_magnet_link(self, torrent: AnimeTorrent) -> str:
        """Return the magnet URI stored on the torrent, or ''."""
        return torrent.magnet_link or ""

    async def cleanup(self) -> None:
        """Clean up resources used by the plugin."""
        if self._owns_transport and isinstance(self._transport, AiohttpTransport):
            await self._transport.close()

    async def __aenter__(self) -> "BasePlugin":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    def __str__(self) -> str:
        return f"{self.metadata.name} v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.metadata.name}')"


# Export base plugin class and metadata
__all__ = ["BasePlugin", "PluginMetadata"]
