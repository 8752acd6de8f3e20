"""
SubsPlease Plugin - Torrent provider for subsplease.org

This plugin turns the SubsPlease release feed into normalized torrents,
with free-text and smart (episode/resolution) search support.
"""

from .plugin import SubsPleasePlugin, plugin_metadata, provider_settings
from .config import SubsPleaseConfig, get_default_config, validate_config
from .filters import apply_smart_filter
from .magnet import MagnetInfo, parse_magnet
from .parser import SubsPleaseParser

__all__ = [
    "SubsPleasePlugin",
    "plugin_metadata",
    "provider_settings",
    "SubsPleaseConfig",
    "get_default_config",
    "validate_config",
    "apply_smart_filter",
    "MagnetInfo",
    "parse_magnet",
    "SubsPleaseParser",
]
