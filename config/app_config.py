"""
Configuration management for AudioXRef.

Handles loading, validation, and saving of application configuration.
"""

import copy
import json
import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Optional

from config.constants import VALID_DIRECTIONS, VALID_LINUX_BACKENDS, VALID_LOG_LEVELS


APP_DIR_NAME = ".audioxref"


def get_app_dir() -> Path:
    """Return the root directory for AudioXRef user data."""
    return Path.home() / APP_DIR_NAME


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_default_config_version() -> str:
    """Return the application version defined in the default config."""
    default_config_path = Path(__file__).parent / "default_config.json"

    try:
        with open(default_config_path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except FileNotFoundError:
        logger.error("Default configuration file not found: %s", default_config_path)
        return "0.0.0"
    except json.JSONDecodeError as exc:
        logger.error(
            "Invalid JSON in default configuration file %s: %s",
            default_config_path,
            exc
        )
        return "0.0.0"

    version = data.get("version")
    if isinstance(version, str) and version.strip():
        return version.strip()

    logger.warning(
        "Default configuration missing valid 'version'; falling back to 0.0.0"
    )
    return "0.0.0"


class ConfigManager:
    """Manages application configuration with validation and persistence."""

    def __init__(self, user_config_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            user_config_path: Optional override for the user config file,
                defaults to ``~/.audioxref/app_config.json``
        """
        self.default_config_path = (
            Path(__file__).parent / "default_config.json"
        )
        if user_config_path is None:
            self.user_config_dir = get_app_dir()
            self.user_config_path = self.user_config_dir / "app_config.json"
        else:
            self.user_config_path = Path(user_config_path)
            self.user_config_dir = self.user_config_path.parent
        self._config: Dict[str, Any] = {}
        self._default_config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from user config or default config."""
        try:
            logger.debug(
                f"Loading default configuration from "
                f"{self.default_config_path}"
            )
            with open(self.default_config_path, 'r', encoding='utf-8') as f:
                self._default_config = json.load(f)

            user_config: Dict[str, Any] = {}
            if self.user_config_path.exists():
                logger.info(
                    f"Loading user configuration from "
                    f"{self.user_config_path}"
                )
                with open(self.user_config_path, 'r', encoding='utf-8') as f:
                    user_config = json.load(f)

            self._config = self._deep_merge(self._default_config, user_config)

            self._validate_config()
            logger.debug("Configuration loaded and validated successfully")

        except FileNotFoundError as e:
            logger.error(f"Configuration file not found: {e}")
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in configuration file: {e}")
            raise
        except Exception as e:
            logger.error(f"Error loading configuration: {e}")
            raise

    def _validate_config(self) -> None:
        """Validate required configuration fields and types."""
        required_fields = {
            "version": str,
            "enumeration": dict,
            "matching": dict,
            "logging": dict,
        }

        for field, expected_type in required_fields.items():
            if field not in self._config:
                raise ValueError(
                    f"Missing required configuration field: {field}"
                )
            if not isinstance(self._config[field], expected_type):
                raise TypeError(
                    f"Configuration field '{field}' must be of type "
                    f"{expected_type.__name__}, got "
                    f"{type(self._config[field]).__name__}"
                )

        self._validate_enumeration_config()
        self._validate_matching_config()
        self._validate_logging_config()

    def _validate_enumeration_config(self) -> None:
        """Validate device enumeration configuration."""
        enum_config = self._config["enumeration"]
        for field in ("direction", "command_timeout_seconds"):
            if field not in enum_config:
                raise ValueError(
                    f"Missing required field: enumeration.{field}"
                )

        if enum_config["direction"] not in VALID_DIRECTIONS:
            raise ValueError(
                f"enumeration.direction must be one of {list(VALID_DIRECTIONS)}"
            )

        timeout = enum_config["command_timeout_seconds"]
        if (isinstance(timeout, bool) or
                not isinstance(timeout, (int, float)) or timeout <= 0):
            raise ValueError(
                "enumeration.command_timeout_seconds must be a positive number"
            )

        if "linux_backends" in enum_config:
            backends = enum_config["linux_backends"]
            if not isinstance(backends, list):
                raise TypeError("enumeration.linux_backends must be a list")
            for backend in backends:
                if backend not in VALID_LINUX_BACKENDS:
                    raise ValueError(
                        f"enumeration.linux_backends entries must be one of "
                        f"{list(VALID_LINUX_BACKENDS)}"
                    )

    def _validate_matching_config(self) -> None:
        """Validate cross-reference matching configuration."""
        match_config = self._config["matching"]

        if "enable_position_correlation" in match_config:
            if not isinstance(match_config["enable_position_correlation"], bool):
                raise TypeError(
                    "matching.enable_position_correlation must be a boolean"
                )

        for field in ("default_device_score", "position_score", "min_score"):
            if field not in match_config:
                continue
            value = match_config[field]
            if (isinstance(value, bool) or
                    not isinstance(value, (int, float)) or
                    not (0 <= value <= 100)):
                raise ValueError(
                    f"matching.{field} must be a number between 0 and 100"
                )

        if "excluded_foreign_ids" in match_config:
            excluded = match_config["excluded_foreign_ids"]
            if not isinstance(excluded, list) or not all(
                isinstance(item, str) for item in excluded
            ):
                raise TypeError(
                    "matching.excluded_foreign_ids must be a list of strings"
                )

    def _validate_logging_config(self) -> None:
        """Validate logging configuration."""
        log_config = self._config["logging"]
        if "level" not in log_config:
            raise ValueError("Missing required field: logging.level")

        if str(log_config["level"]).upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"logging.level must be one of {list(VALID_LOG_LEVELS)}"
            )

        if "file_enabled" in log_config:
            if not isinstance(log_config["file_enabled"], bool):
                raise TypeError("logging.file_enabled must be a boolean")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports nested keys using dot notation (e.g., "matching.min_score").

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key.

        Supports nested keys using dot notation (e.g., "matching.min_score").

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def save(self) -> None:
        """Save the current configuration to the user config file."""
        try:
            self.user_config_dir.mkdir(parents=True, exist_ok=True)

            self._validate_config()

            with open(self.user_config_path, 'w', encoding='utf-8') as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)

            # Owner read/write only
            try:
                os.chmod(self.user_config_path, 0o600)
            except OSError as e:
                logger.warning(f"Could not set file permissions: {e}")

            logger.info(f"Configuration saved to {self.user_config_path}")

        except Exception as e:
            logger.error(f"Error saving configuration: {e}")
            raise

    def get_all(self) -> Dict[str, Any]:
        """
        Get the entire configuration dictionary.

        Returns:
            Complete configuration dictionary
        """
        return self._clone_value(self._config)

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._load_config()

    def get_defaults(self) -> Mapping[str, Any]:
        """Return an immutable view of the default configuration."""
        return self._deep_freeze(self._default_config)

    @classmethod
    def _deep_merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two dictionaries without mutating inputs."""
        result: Dict[str, Any] = {}

        for key, base_value in base.items():
            if key in override:
                override_value = override[key]
                if isinstance(base_value, dict) and isinstance(override_value, dict):
                    result[key] = cls._deep_merge(base_value, override_value)
                else:
                    result[key] = cls._clone_value(override_value)
            else:
                result[key] = cls._clone_value(base_value)

        for key, override_value in override.items():
            if key not in base:
                result[key] = cls._clone_value(override_value)

        return result

    @classmethod
    def _clone_value(cls, value: Any) -> Any:
        """Return a deep copy of supported container types."""
        if isinstance(value, dict):
            return {k: cls._clone_value(v) for k, v in value.items()}
        if isinstance(value, list):
            return [cls._clone_value(v) for v in value]
        return copy.deepcopy(value)

    @classmethod
    def _deep_freeze(cls, value: Any) -> Any:
        """Create an immutable representation of nested configuration data."""
        if isinstance(value, dict):
            frozen = {k: cls._deep_freeze(v) for k, v in value.items()}
            return MappingProxyType(frozen)
        if isinstance(value, list):
            return tuple(cls._deep_freeze(v) for v in value)
        return value
