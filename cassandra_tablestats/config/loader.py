"""Configuration loader with YAML parsing and environment variable substitution."""

import yaml
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .models import CollectorConfig
from .settings import Settings
from ..collectors.errors import ConfigurationError


class ConfigLoader:
    """Load and validate collector configuration."""

    @staticmethod
    def load_from_file(config_path: str) -> Dict[str, Any]:
        """
        Load raw configuration from YAML file with environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Dict[str, Any]: Raw configuration values

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ValueError: If the top level is not a mapping
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        return ConfigLoader._substitute_env_vars(raw_config)

    @staticmethod
    def resolve(
        default_name: str,
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> CollectorConfig:
        """
        Merge defaults, environment, config file and CLI overrides.

        Later sources win; None-valued overrides are ignored so unset flags
        keep values from earlier sources.

        Args:
            default_name: Check name used when no source sets one
            config_path: Optional YAML file
            overrides: Values from the command line

        Returns:
            CollectorConfig: Validated configuration

        Raises:
            ConfigurationError: If the file cannot be read or validation fails
        """
        merged: Dict[str, Any] = {"name": default_name}
        merged.update(Settings.as_overrides())

        config_path = config_path or Settings().CONFIG_PATH
        if config_path:
            try:
                merged.update(ConfigLoader.load_from_file(config_path))
            except (OSError, yaml.YAMLError, ValueError) as e:
                raise ConfigurationError(f"Failed to load configuration: {e}") from e

        merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

        try:
            return CollectorConfig(**merged)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """
        Recursively substitute ${ENV_VAR} placeholders with environment values.

        Args:
            obj: Object to process (str, dict, list, or primitive)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, str):
            # Replace ${VAR_NAME} with os.getenv('VAR_NAME')
            pattern = r'\$\{(\w+)\}'
            return re.sub(pattern, lambda m: os.getenv(m.group(1), ''), obj)

        elif isinstance(obj, dict):
            return {k: ConfigLoader._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [ConfigLoader._substitute_env_vars(item) for item in obj]

        return obj
