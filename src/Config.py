#!/filepath: src/Config.py
"""
Configuration module for the kit dispensing dashboard.

This module handles loading configuration from YAML files and
providing access to configuration values throughout the application.
Nested values can be reached with dotted keys such as
``"data_source.sheet_id"``.
"""

import logging
import os
from typing import Any, Dict, Optional

# Add type ignore for yaml module until stubs are installed
import yaml  # type: ignore

_MISSING = object()


class Config:
    """
    Configuration handler class for the dashboard.

    Loads configuration values from a YAML file and provides
    methods to access those values.
    """

    def __init__(
        self, config_path: str = "config.yaml", logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the configuration.

        Args:
            config_path: Path to the YAML configuration file
            logger: Logger instance for logging configuration events
        """
        self.config_path = config_path
        self.logger = logger or logging.getLogger(__name__)
        self._config_data: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """
        Load configuration from the YAML file.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist
            ValueError: If the YAML file is invalid or is not a mapping
        """
        if not os.path.exists(self.config_path):
            self.logger.error(f"Config file not found: {self.config_path}")
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing YAML configuration: {str(e)}")
            raise ValueError(f"Invalid YAML configuration: {str(e)}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            self.logger.error("Configuration root must be a mapping")
            raise ValueError("Configuration root must be a mapping")

        self._config_data = data
        self.logger.info(f"Configuration loaded from {self.config_path}")

    def is_valid(self) -> bool:
        """Return True when a mapping was loaded from the file."""
        return isinstance(self._config_data, dict)

    def get(self, key: str, default: Any = _MISSING) -> Any:
        """
        Get a configuration value by (optionally dotted) key.

        Args:
            key: The configuration key to look up
            default: Value returned when the key is not found

        Returns:
            The configuration value or the default if not found

        Raises:
            KeyError: If the key is missing and no default was given
        """
        node: Any = self._config_data
        found = bool(key)
        for part in key.split(".") if key else []:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                found = False
                break

        if found:
            return node
        if default is not _MISSING:
            return default

        self.logger.error(f"Configuration key not found: {key}")
        raise KeyError(key)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        This changes the value in memory but does not update the YAML file.

        Args:
            key: The (optionally dotted) configuration key to set
            value: The value to set
        """
        parts = key.split(".")
        node = self._config_data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value
        self.logger.debug(f"Set configuration {key}={value}")
