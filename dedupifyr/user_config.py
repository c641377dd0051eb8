"""
User configuration management for dedupifyr.

Supports configuration from multiple sources (in order of priority):
1. Command-line flags (highest priority)
2. Environment variables
3. User config file (~/.dedupifyr/config.json)
4. Default values from config.py (lowest priority)

Example config.json:
{
    "search_depth": "top",
    "bias_factor": 90,
    "workers": 4,
    "calculator": "pixel"
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    BIAS_FACTOR_FLAG,
    CONFIG_DIR,
    DEFAULT_WORKERS,
    SEARCH_DEPTH_FLAG,
)

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    The config file is read lazily and cached until ``reload()``.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('DEDUPIFYR_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)
        return Path(CONFIG_DIR)

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                logger.debug(f"Loaded configuration from {self.config_file_path}")
                return data
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for numbers and booleans
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def search_depth(self) -> Optional[str]:
        """Search depth token ('top' or 'all'), None if unset."""
        return self.get(SEARCH_DEPTH_FLAG, env_var='DEDUPIFYR_SEARCH_DEPTH')

    @property
    def bias_factor(self) -> Optional[str]:
        """Bias factor percentage (0-100), None if unset."""
        value = self.get(BIAS_FACTOR_FLAG, env_var='DEDUPIFYR_BIAS_FACTOR')
        return None if value is None else str(value)

    @property
    def workers(self) -> int:
        """Number of parallel workers for loading and comparing."""
        value = self.get('workers', default=DEFAULT_WORKERS, env_var='DEDUPIFYR_WORKERS')
        try:
            return max(1, int(value))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid workers setting: {value!r}")
            return DEFAULT_WORKERS

    @property
    def calculator(self) -> str:
        """Difference calculator name ('pixel' or 'phash')."""
        return str(self.get('calculator', default='pixel', env_var='DEDUPIFYR_CALCULATOR'))

    def as_flags(self) -> dict[str, str]:
        """Configured option values as raw flags for the options builder."""
        flags = {}
        if self.search_depth is not None:
            flags[SEARCH_DEPTH_FLAG] = str(self.search_depth)
        if self.bias_factor is not None:
            flags[BIAS_FACTOR_FLAG] = self.bias_factor
        return flags

    def create_example_config(self) -> bool:
        """Create an example configuration file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        example_config = {
            "_comment": "dedupifyr user configuration",
            SEARCH_DEPTH_FLAG: "top",
            BIAS_FACTOR_FLAG: 90,
            "workers": DEFAULT_WORKERS,
            "calculator": "pixel",
        }

        try:
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
            logger.info(f"Created example config file at {self.config_file_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
