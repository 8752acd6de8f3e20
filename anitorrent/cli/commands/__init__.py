"""
CLI Commands - Individual command implementations.
"""

from anitorrent.cli.commands import config, torrents

__all__ = ["config", "torrents"]
