"""
Exception hierarchy for AniTorrent.

Every error raised on purpose derives from ``AniTorrentError`` and carries a
user-facing message plus optional ``details`` for debug output. The CLI
renders them through ``anitorrent.ui.error_handler``.
"""

from typing import Any, Optional


class AniTorrentError(Exception):
    """Root of all AniTorrent errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AniTorrentError):
    """
    Settings could not be loaded, validated or saved.

    Args:
        message: What went wrong
        config_path: Settings file involved, when known
        details: Extra context for debug output
    """

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.config_path = config_path


class PluginError(AniTorrentError):
    """A provider plugin cannot complete an operation, e.g. an undecodable response."""

    def __init__(self, message: str, plugin_name: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.plugin_name = plugin_name


class NetworkError(AniTorrentError):
    """
    A request did not produce a usable response.

    Args:
        message: What went wrong
        url: Requested URL
        status_code: HTTP status, when a response was received
        details: Extra context such as the response excerpt
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class FetchFailure(NetworkError):
    """
    The feed endpoint answered with a non-success status.

    ``status_code`` is always set. The core never retries on this error.
    """

    def __init__(self, status_code: int, url: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(
            f"Failed to fetch from SubsPlease API, status: {status_code}",
            url=url,
            status_code=status_code,
            details=details,
        )


class SearchError(AniTorrentError):
    """A search finished but cannot satisfy the request, e.g. a missing result row."""

    def __init__(self, message: str, query: Optional[str] = None, source: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.query = query
        self.source = source


__all__ = [
    "AniTorrentError",
    "ConfigurationError",
    "PluginError",
    "NetworkError",
    "FetchFailure",
    "SearchError",
]
