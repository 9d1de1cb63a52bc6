"""
Configuration Service

JSON-file backed settings store with dot-notation access. Holds the
persisted provider records, the file server address and a few runtime
knobs.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger("CodeArchitect.ConfigService")

DEFAULT_CONFIG_PATH = Path.home() / ".codearchitect" / "config.json"

DEFAULTS: Dict[str, Any] = {
    "workspace_url": "http://localhost:3002",
    "default_dir": None,
    "plan_pacing": 0.05,
}


class ConfigService:
    """
    Service class for configuration management.

    Provides:
    - Configuration loading
    - Configuration saving
    - Dot-notation get/set with built-in defaults
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Path to config file (defaults to ~/.codearchitect/config.json)
        """
        self.config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}

        # A missing or unreadable file leaves an empty config
        if self.config_path.exists():
            self._load_config()

    def _load_config(self) -> None:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            self._config = data if isinstance(data, dict) else {}
            logger.info(f"Configuration loaded from {self.config_path}")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config: {e}")
            self._config = {}

    def load(self) -> Dict[str, Any]:
        """
        Reload configuration from file.

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid JSON
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found at: {self.config_path}")

        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                self._config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing config.json: {e}")
            raise ValueError(f"Error parsing {self.config_path}: {e}") from e
        logger.info(f"Configuration loaded from {self.config_path}")
        return self._config.copy()

    def save(self, data: Optional[Dict[str, Any]] = None) -> bool:
        """
        Save configuration to file.

        Args:
            data: Optional data to save (uses internal config if None)

        Returns:
            True if successful
        """
        try:
            if data is not None:
                self._config = data

            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with self.config_path.open("w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=4)
            logger.info(f"Configuration saved to {self.config_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to save config: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key (supports dot notation: "providers.OpenAI.apiKey")
            default: Value if key not found; built-in defaults apply when omitted

        Returns:
            Configuration value
        """
        if default is None:
            default = DEFAULTS.get(key)

        value: Any = self._config
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        return self._config.copy()
