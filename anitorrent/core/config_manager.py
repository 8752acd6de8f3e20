"""
Configuration Manager - Persistent application settings.

Settings live in ``settings.json`` inside a configuration directory. The
file is validated against ``AppSettings`` on load, rewritten atomically on
every change and regenerated from defaults when it cannot be read.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import ValidationError

from anitorrent.core.config_schemas import AppSettings
from anitorrent.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


class ConfigManager:
    """
    Loads, validates and stores ``AppSettings``.

    Access goes through a lock so commands and plugins can share a single
    instance. Values are addressed with dotted paths such as
    ``network.timeout``.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            config_dir: Directory holding ``settings.json``; './config' by default
        """
        self.config_dir = Path(config_dir or "config")
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._settings_file = self.config_dir / SETTINGS_FILENAME
        self._lock = Lock()

        try:
            self._settings: AppSettings = self._read()
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Could not load {self._settings_file}: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}", str(self._settings_file))

        logger.info(f"Configuration loaded from {self._settings_file}")

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    @property
    def settings(self) -> AppSettings:
        with self._lock:
            return self._settings

    def _read(self) -> AppSettings:
        if not self._settings_file.exists():
            logger.info(f"No {SETTINGS_FILENAME} yet, writing defaults")
            return self._write(AppSettings())

        try:
            raw = json.loads(self._settings_file.read_text(encoding="utf-8"))
            return AppSettings.model_validate(raw)
        except (json.JSONDecodeError, ValidationError) as e:
            backup = self._settings_file.with_suffix(".json.backup")
            self._settings_file.replace(backup)
            logger.warning(f"Unreadable settings moved to {backup}, restoring defaults: {e}")
            return self._write(AppSettings())

    def _write(self, settings: AppSettings) -> AppSettings:
        # Atomic replace via a sibling temp file
        staging = self._settings_file.with_suffix(".tmp")
        try:
            staging.write_text(
                json.dumps(settings.model_dump(), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
            staging.replace(self._settings_file)
        except OSError as e:
            staging.unlink(missing_ok=True)
            raise ConfigurationError(f"Failed to save settings: {e}", str(self._settings_file))

        logger.debug(f"Settings written to {self._settings_file}")
        return settings

    @staticmethod
    def _walk(data: Dict[str, Any], key_path: str) -> Tuple[Dict[str, Any], str]:
        """Return ``(parent_mapping, final_key)`` for a dotted path, or raise KeyError."""
        *sections, leaf = key_path.split(".")
        node: Any = data
        for section in sections:
            node = node[section]
            if not isinstance(node, dict):
                raise KeyError(section)
        if leaf not in node:
            raise KeyError(leaf)
        return node, leaf

    def get_setting(self, key_path: str, default: Any = None) -> Any:
        """
        Read one value by dotted path.

        Returns:
            The stored value, or ``default`` when the path does not exist
        """
        try:
            parent, leaf = self._walk(self.settings.model_dump(), key_path)
        except (KeyError, TypeError):
            return default
        return parent[leaf]

    def update_setting(self, key_path: str, value: Any) -> None:
        """
        Change one value by dotted path and persist the result.

        Raises:
            ConfigurationError: If the path does not exist or the value fails validation
        """
        with self._lock:
            data = self._settings.model_dump()
            try:
                parent, leaf = self._walk(data, key_path)
            except (KeyError, TypeError):
                raise ConfigurationError(f"Invalid setting path: {key_path}", str(self._settings_file))

            parent[leaf] = value
            try:
                updated = AppSettings.model_validate(data)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid value for {key_path}: {e}", str(self._settings_file))

            self._settings = self._write(updated)

        logger.info(f"Setting updated: {key_path} = {value!r}")

    def reset_to_defaults(self) -> None:
        """Replace every setting with its default."""
        with self._lock:
            logger.warning("Resetting configuration to defaults")
            self._settings = self._write(AppSettings())


__all__ = ["ConfigManager", "SETTINGS_FILENAME"]
