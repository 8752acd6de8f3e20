"""
CLI Context - Global application context.

This module holds the configuration manager shared by CLI commands so that
command modules do not import the main application.
"""

from typing import Optional

from anitorrent.core import ConfigManager


# Global application state
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    if _config_manager is None:
        raise RuntimeError("Configuration manager not initialized")
    return _config_manager


def set_config_manager(config_manager: ConfigManager) -> None:
    """Set the global configuration manager instance."""
    global _config_manager
    _config_manager = config_manager


__all__ = ["get_config_manager", "set_config_manager"]
