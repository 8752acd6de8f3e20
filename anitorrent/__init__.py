"""
AniTorrent - Normalized anime torrent search from release feeds.

Provider plugins turn a source's release feed into uniform torrent records
(info-hash, size, resolution, episode number) and narrow them for smart
searches by episode and resolution.
"""

__version__ = "0.1.0"
__author__ = "AniTorrent Team"

# Package metadata
__title__ = "anitorrent"
__description__ = "Normalized anime torrent search from release feeds"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

# Export main components for easy importing
from anitorrent.core.models import AnimeTorrent, AnimeMedia, SmartSearchOptions, ProviderSettings
from anitorrent.plugins.subsplease import SubsPleasePlugin
from anitorrent.cli.main import cli_main

__all__ = [
    "__version__",
    "__author__",
    "AnimeTorrent",
    "AnimeMedia",
    "SmartSearchOptions",
    "ProviderSettings",
    "SubsPleasePlugin",
    "cli_main",
]
