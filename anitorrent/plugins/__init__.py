"""
Plugin Layer - Torrent provider implementations.

This module contains the plugin architecture and the individual provider
implementations that turn source feeds into normalized torrents.
"""

from anitorrent.plugins.base import BasePlugin, PluginMetadata
from anitorrent.plugins.subsplease import SubsPleasePlugin

# Registered providers, keyed by the name used on the command line
PLUGINS = {
    "subsplease": SubsPleasePlugin,
}

__all__ = [
    "BasePlugin",
    "PluginMetadata",
    "SubsPleasePlugin",
    "PLUGINS",
]
