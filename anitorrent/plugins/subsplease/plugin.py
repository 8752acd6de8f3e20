"""
SubsPlease Plugin - Torrent provider for subsplease.org

This module implements the SubsPlease provider: it fetches the release
feed, normalizes every quality variant into an ``AnimeTorrent`` and narrows
smart searches by episode and resolution.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from anitorrent.core.models import (
    AnimeTorrent,
    ProviderSettings,
    ProviderType,
    SearchOptions,
    SmartSearchFilter,
    SmartSearchOptions,
)
from anitorrent.core.transport import Transport
from anitorrent.plugins.base import BasePlugin, PluginMetadata

from .api import SubsPleaseAPI
from .config import SubsPleaseConfig, get_default_config, merge_with_defaults
from .filters import apply_smart_filter
from .parser import Clock, SubsPleaseParser, utc_now


logger = logging.getLogger(__name__)


plugin_metadata = PluginMetadata(
    name="SubsPlease",
    version="1.0.0",
    author="AniTorrent Team",
    description="Torrent provider for SubsPlease weekly releases",
    website="https://subsplease.org",
)

provider_settings = ProviderSettings(
    can_smart_search=True,
    smart_search_filters=[SmartSearchFilter.EPISODE_NUMBER, SmartSearchFilter.RESOLUTION],
    supports_adult=False,
    type=ProviderType.MAIN,
)


class SubsPleasePlugin(BasePlugin):
    """
    SubsPlease provider.

    Batch releases are dropped from every result set, not only from batch
    searches: the feed lists them as single entries whose downloads cannot
    be told apart per episode.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        transport: Optional[Transport] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize SubsPlease plugin.

        Args:
            config: Plugin configuration dictionary
            transport: Fetch capability; defaults to an aiohttp transport
            clock: Current-time source for releases without a usable date
        """
        merged_config = merge_with_defaults(config)

        try:
            self.plugin_config = SubsPleaseConfig(**merged_config)
        except Exception as e:
            logger.warning(f"Invalid configuration, using defaults: {e}")
            self.plugin_config = SubsPleaseConfig()
            merged_config = get_default_config()

        super().__init__(merged_config, transport=transport)

        self.api = SubsPleaseAPI(
            self.transport,
            api_base_url=self.plugin_config.api_base_url,
            timezone=self.plugin_config.timezone,
        )
        self.parser = SubsPleaseParser(
            site_base_url=self.plugin_config.site_base_url,
            release_group=self.plugin_config.release_group,
            clock=clock,
            source_tz=self.plugin_config.timezone,
        )

        logger.debug("SubsPlease plugin initialized successfully")

    @property
    def metadata(self) -> PluginMetadata:
        return plugin_metadata

    @property
    def settings(self) -> ProviderSettings:
        return provider_settings

    async def get_latest(self) -> List[AnimeTorrent]:
        """Most recent releases: a search with an empty query."""
        return await self._fetch_and_parse("")

    async def search(self, options: Union[SearchOptions, str]) -> List[AnimeTorrent]:
        """
        Search SubsPlease by free text.

        Args:
            options: Search options or a plain query string

        Returns:
            Every quality variant of every matching non-batch release

        Raises:
            FetchFailure: If the API answers with a non-success status
        """
        query = options if isinstance(options, str) else options.query
        return await self._fetch_and_parse(query)

    async def smart_search(self, options: SmartSearchOptions) -> List[AnimeTorrent]:
        """
        Search with episode and resolution constraints.

        The query falls back to the media's romaji then English title.
        Batch requests return nothing without touching the network.

        Args:
            options: Smart search options

        Returns:
            Matching torrents in feed order

        Raises:
            FetchFailure: If the API answers with a non-success status
        """
        if options.batch:
            logger.info("Batch search requested; SubsPlease does not support batch searches")
            return []

        query = options.effective_query()
        torrents = await self._fetch_and_parse(query)

        filtered = apply_smart_filter(
            torrents,
            episode_number=options.episode_number,
            absolute_offset=options.media.absolute_season_offset,
            resolution=options.resolution,
            batch=options.batch,
        )

        logger.info(
            f"Smart search '{query}' (episode={options.episode_number}, "
            f"resolution='{options.resolution}') kept {len(filtered)} of {len(torrents)} torrents"
        )
        return filtered

    async def _fetch_and_parse(self, query: str) -> List[AnimeTorrent]:
        logger.debug(f"Searching SubsPlease with query: '{query}'")

        data = await self.api.search(query)
        torrents = self.parser.parse_payload(data)

        logger.info(f"Found {len(torrents)} torrents for query: '{query}'")
        return torrents

    def __repr__(self) -> str:
        return f"SubsPleasePlugin(api='{self.plugin_config.api_base_url}', enabled={self.plugin_config.enabled})"


__all__ = ["SubsPleasePlugin", "plugin_metadata", "provider_settings"]
