"""Configuration module for mdp-search.

Loads configuration from environment variables with sensible defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

VALID_FORMATS = ("json", "table")


@dataclass
class Config:
    """Application configuration."""

    project_path: Path | None
    output_format: str
    search_limit: int
    host: str
    port: int
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        project_env = os.getenv("MDP_PROJECT_PATH")
        project_path = Path(project_env).expanduser() if project_env else None

        output_format = os.getenv("MDP_FORMAT", "json").lower()
        if output_format not in VALID_FORMATS:
            raise ValueError(
                f"Invalid MDP_FORMAT value '{output_format}': "
                f"expected one of {', '.join(VALID_FORMATS)}"
            )

        limit_str = os.getenv("MDP_SEARCH_LIMIT", "20")
        try:
            search_limit = int(limit_str)
            if search_limit < 1:
                raise ValueError(f"Limit must be a positive integer, got {search_limit}")
        except ValueError as e:
            raise ValueError(f"Invalid MDP_SEARCH_LIMIT value '{limit_str}': {e}") from e

        port_str = os.getenv("MDP_PORT", "8080")
        try:
            port = int(port_str)
            if not 1 <= port <= 65535:
                raise ValueError(f"Port must be between 1 and 65535, got {port}")
        except ValueError as e:
            raise ValueError(f"Invalid MDP_PORT value '{port_str}': {e}") from e

        host = os.getenv("MDP_HOST", "127.0.0.1")

        log_level = os.getenv("MDP_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Invalid MDP_LOG_LEVEL value '{log_level}'")

        return cls(
            project_path=project_path,
            output_format=output_format,
            search_limit=search_limit,
            host=host,
            port=port,
            log_level=log_level,
        )


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
