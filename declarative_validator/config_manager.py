"""
Configuration management for the declarative validator.

This module provides configuration with support for:
- Environment variables
- Configuration files (YAML/JSON)
- Configuration validation
"""

import os
import json
import yaml
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union, List
from dataclasses import dataclass, field
from pydantic import BaseModel, ValidationError, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "DECLARATIVE_VALIDATOR_"


@dataclass
class RulesConfig:
    """Which bundled rule sets the default registry loads."""
    load_bundled: bool = True
    rule_sets: List[str] = field(
        default_factory=lambda: ["simple_types", "parametrized_types", "converters"]
    )


@dataclass
class MessagesConfig:
    """Rendering of offending values in error messages."""
    undefined_placeholder: str = "<None>"
    empty_placeholder: str = "empty string"
    nonprintable_replacement: str = "."


@dataclass
class LoggingConfig:
    """Logging configuration used by setup_logging."""
    level: str = "WARNING"
    enable_file_logging: bool = False
    log_file_path: Optional[str] = None


class ConfigurationModel(BaseModel):
    """Pydantic model for configuration validation."""
    rules: RulesConfig = Field(default_factory=RulesConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"arbitrary_types_allowed": True}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ['true', '1', 'yes', 'on']


def _parse_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


class ConfigManager:
    """
    Configuration manager combining a configuration file with environment
    variable overrides, validated through ConfigurationModel.
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_file: Path to configuration file (YAML or JSON)
        """
        self.config_file_path = Path(config_file) if config_file else None
        self._config_lock = threading.RLock()
        self._config: Optional[ConfigurationModel] = None

        self.load_configuration()

    def load_configuration(self):
        """Load configuration from environment variables and config file."""
        with self._config_lock:
            config_dict = {}

            if self.config_file_path and self.config_file_path.exists():
                config_dict = self._load_config_file()

            config_dict = self._load_environment_variables(config_dict)

            try:
                self._config = ConfigurationModel(**config_dict)
            except ValidationError as e:
                raise ValueError(f"Configuration validation failed: {e}")

    def _load_config_file(self) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file."""
        suffix = self.config_file_path.suffix.lower()
        if suffix not in ['.yml', '.yaml', '.json']:
            raise ValueError(f"Unsupported configuration file format: {self.config_file_path.suffix}")
        try:
            with open(self.config_file_path, 'r') as f:
                if suffix == '.json':
                    return json.load(f)
                return yaml.safe_load(f) or {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to load configuration file {self.config_file_path}: {e}")

    def _load_environment_variables(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_mappings = {
            # Rule sets
            'LOAD_BUNDLED_RULES': ('rules', 'load_bundled', _parse_bool),
            'RULE_SETS': ('rules', 'rule_sets', _parse_list),

            # Messages
            'UNDEFINED_PLACEHOLDER': ('messages', 'undefined_placeholder', str),
            'EMPTY_PLACEHOLDER': ('messages', 'empty_placeholder', str),
            'NONPRINTABLE_REPLACEMENT': ('messages', 'nonprintable_replacement', str),

            # Logging
            'LOG_LEVEL': ('logging', 'level', lambda x: x.strip().upper()),
            'ENABLE_FILE_LOGGING': ('logging', 'enable_file_logging', _parse_bool),
            'LOG_FILE': ('logging', 'log_file_path', str),
        }

        for suffix, (section, key, type_converter) in env_mappings.items():
            env_var = ENV_PREFIX + suffix
            env_value = os.getenv(env_var)
            if env_value is not None:
                try:
                    config_dict.setdefault(section, {})
                    config_dict[section][key] = type_converter(env_value)
                except (ValueError, TypeError) as e:
                    raise ValueError(f"Invalid value for environment variable {env_var}: {env_value} ({e})")

        return config_dict

    def reload_configuration(self) -> bool:
        """Reload configuration from file and environment variables."""
        try:
            self.load_configuration()
        except ValueError as e:
            logger.error(f"Failed to reload configuration: {e}")
            return False
        logger.info("Configuration reloaded successfully")
        return True

    @property
    def config(self) -> ConfigurationModel:
        """Get the current configuration."""
        with self._config_lock:
            if self._config is None:
                raise RuntimeError("Configuration not loaded")
            return self._config


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        explicit = os.getenv(ENV_PREFIX + "CONFIG")
        config_paths = [Path(explicit)] if explicit else [
            Path("declarative_validator.yml"),
            Path("declarative_validator.yaml"),
            Path("declarative_validator.json"),
        ]

        config_file = None
        for path in config_paths:
            if path.exists():
                config_file = path
                break

        _config_manager = ConfigManager(config_file)

    return _config_manager


def set_config_manager(config_manager: Optional[ConfigManager]):
    """Set the global configuration manager instance."""
    global _config_manager
    _config_manager = config_manager
