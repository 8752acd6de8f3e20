"""
HTTP Transport - Injected fetch capability used by provider plugins.

Providers never talk to aiohttp directly; they receive a ``Transport`` that
returns the raw body together with the HTTP status. Error statuses are
returned rather than raised so each provider decides how to report them.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import aiohttp

from anitorrent.core.exceptions import NetworkError


logger = logging.getLogger(__name__)


DEFAULT_USER_AGENT = "AniTorrent/0.1.0"


@dataclass(frozen=True)
class FetchResponse:
    """Raw response handed back by a transport."""

    status: int
    body: bytes
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Fetch capability: a single GET returning status and body."""

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> FetchResponse:
        ...


class AiohttpTransport:
    """
    ``Transport`` backed by an aiohttp session.

    Connection failures and timeouts are retried with a linear backoff; a
    response with any status ends the retry loop and is returned as-is.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initialize the transport.

        Args:
            session: Existing session to reuse; one is created lazily otherwise
            timeout: Total request timeout in seconds
            max_retries: Retries after the first attempt
            retry_delay: Base delay between retries in seconds
            user_agent: User-Agent header for created sessions
        """
        self._session = session
        self._owns_session = session is None
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.user_agent = user_agent

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with proper configuration."""
        if self._session is None or self._session.closed:
            headers = {
                'User-Agent': self.user_agent,
                'Accept': 'application/json, text/plain, */*',
                'Accept-Encoding': 'gzip, deflate',
            }
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=headers,
            )
            self._owns_session = True
        return self._session

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> FetchResponse:
        """
        Issue a GET request.

        Args:
            url: Absolute URL
            params: Query parameters

        Returns:
            FetchResponse with status and raw body

        Raises:
            NetworkError: If no response was obtained after all retries
        """
        last_exception: Optional[BaseException] = None

        for attempt in range(self.max_retries + 1):
            try:
                logger.debug(f"Making GET request to {url} params={params} (attempt {attempt + 1})")

                async with self.session.get(url, params=params) as response:
                    body = await response.read()
                    return FetchResponse(status=response.status, body=body, url=str(response.url))

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                logger.warning(f"Request failed (attempt {attempt + 1}): {e}")

                if attempt < self.max_retries:
                    await asyncio.sleep(self.retry_delay * (attempt + 1))

        raise NetworkError(
            f"Request failed after {self.max_retries + 1} attempts: {last_exception}",
            url=url,
            details=str(last_exception)
        )

    async def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")
        self._session = None


__all__ = ["FetchResponse", "Transport", "AiohttpTransport", "DEFAULT_USER_AGENT"]
