"""
Centralized configuration management for kubeclean.

Provides a unified interface for accessing environment variables and
configuration with defaults and validation.
"""

import os
from typing import List, Optional

DEFAULT_FETCH_WORKERS = 8


class Config:
    """
    Environment-backed configuration.

    Every setting has a default, so kubeclean runs without any of these
    variables set.
    """

    @staticmethod
    def get(key: str, default: Optional[str] = None, required: bool = False) -> str:
        """
        Get an environment variable with optional default and validation.

        Args:
            key: Environment variable name
            default: Default value if not set
            required: If True, raise ValueError if not set

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required=True and variable is not set
        """
        value = os.getenv(key, default)
        if required and value is None:
            raise ValueError(f"Required environment variable {key} is not set")
        return value or ""

    @staticmethod
    def kubectl() -> str:
        """Return the kubectl binary to invoke (defaults to "kubectl" on PATH)."""
        return Config.get("KUBECLEAN_KUBECTL", "kubectl")

    @staticmethod
    def request_timeout() -> Optional[str]:
        """
        Get the kubectl request timeout, e.g. "30s".

        Returns:
            Timeout string or None if not set
        """
        return Config.get("KUBECLEAN_REQUEST_TIMEOUT") or None

    @staticmethod
    def fetch_workers() -> int:
        """
        Get the number of threads used to fetch resources concurrently.

        Returns:
            Positive worker count (defaults to 8, one per fetched kind)

        Raises:
            ValueError: If KUBECLEAN_FETCH_WORKERS is not a positive integer
        """
        raw = Config.get("KUBECLEAN_FETCH_WORKERS")
        if not raw:
            return DEFAULT_FETCH_WORKERS
        try:
            workers = int(raw)
        except ValueError:
            raise ValueError(f"KUBECLEAN_FETCH_WORKERS must be an integer, got {raw!r}")
        if workers < 1:
            raise ValueError(f"KUBECLEAN_FETCH_WORKERS must be at least 1, got {workers}")
        return workers

    @staticmethod
    def extra_exemptions() -> List[str]:
        """Return ConfigMap names from KUBECLEAN_EXTRA_EXEMPTIONS (comma-separated)."""
        raw = Config.get("KUBECLEAN_EXTRA_EXEMPTIONS")
        return [name.strip() for name in raw.split(",") if name.strip()]


# Global config instance for convenience
config = Config()
