"""Environment settings."""

import os
from typing import Any, Dict, Optional


ENV_PREFIX = "TABLESTATS_"

TRUTHY = {"1", "true", "yes", "on"}


class Settings:
    """Application settings from environment variables."""

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a prefixed environment variable value.

        Args:
            key: Variable name without the TABLESTATS_ prefix
            default: Default value if not set or empty

        Returns:
            Optional[str]: Environment variable value
        """
        value = os.getenv(f"{ENV_PREFIX}{key}")
        return value if value else default

    @staticmethod
    def get_bool(key: str) -> Optional[bool]:
        """Boolean variable; None when unset."""
        value = Settings.get(key)
        if value is None:
            return None
        return value.strip().lower() in TRUTHY

    @staticmethod
    def as_overrides() -> Dict[str, Any]:
        """
        Collect configuration values defined in the environment.

        Returns:
            Dict[str, Any]: Only the keys that are set
        """
        values = {
            "name": Settings.get("NAME"),
            "jolokia": Settings.get("JOLOKIA_URL"),
            "debug": Settings.get_bool("DEBUG"),
            "stderr": Settings.get_bool("STDERR"),
            "skip_zeros": Settings.get_bool("SKIP_ZEROS"),
            "skip": Settings.get("SKIP"),
            "timeout": Settings.get("TIMEOUT"),
        }
        return {k: v for k, v in values.items() if v is not None}

    CONFIG_PATH = property(lambda self: Settings.get("CONFIG"))
