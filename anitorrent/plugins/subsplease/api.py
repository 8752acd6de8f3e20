"""
SubsPlease API Client

This module handles the single request the plugin makes: a search against
the SubsPlease release API.
"""

import json
import logging
from typing import Any

from anitorrent.core.exceptions import FetchFailure, PluginError
from anitorrent.core.transport import Transport


logger = logging.getLogger(__name__)


class SubsPleaseAPI:
    """Client for the SubsPlease release API."""

    def __init__(self, transport: Transport, api_base_url: str = "https://subsplease.org/api/", timezone: str = "UTC"):
        """
        Initialize SubsPlease API client.

        Args:
            transport: Fetch capability used for requests
            api_base_url: API endpoint
            timezone: Timezone release dates are reported in
        """
        self.transport = transport
        self.base_url = api_base_url
        self.timezone = timezone

    async def search(self, query: str = "") -> Any:
        """
        Search releases.

        An empty query lists the most recent releases.

        Args:
            query: Search string, applied server-side

        Returns:
            Decoded JSON payload

        Raises:
            FetchFailure: If the API answers with a non-success status
            PluginError: If the body is not valid JSON
        """
        params = {"f": "search", "tz": self.timezone, "s": query}

        response = await self.transport.get(self.base_url, params=params)

        if not response.ok:
            raise FetchFailure(
                response.status,
                url=response.url or self.base_url,
                details=response.body[:500].decode("utf-8", errors="replace"),
            )

        try:
            data = json.loads(response.body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PluginError(f"Malformed response from SubsPlease API: {e}", plugin_name="subsplease")

        logger.debug(f"Received {len(data) if isinstance(data, (dict, list)) else 0} entries for query: '{query}'")
        return data
