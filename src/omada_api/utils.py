"""Utility functions for the Omada API client."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str | None = None) -> None:
    """Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.

    Raises:
        ConfigurationError: If the level name is not a logging level.
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid log level {log_level!r}; expected one of {', '.join(LOG_LEVELS)}"
        )
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_env_file(env_file: str | Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Args:
        env_file: Explicit path. Defaults to ``.env`` in the current directory.

    Returns:
        True if a file was found and loaded.
    """
    env_path = Path(env_file) if env_file else Path.cwd() / ".env"
    if not env_path.exists():
        if env_file:
            logger.warning(f"Env file not found: {env_path}")
        return False
    return load_dotenv(env_path)


def mask_token(token: str | None, visible: int = 8) -> str:
    """Shorten a credential for log output (``abcd1234...``)."""
    if not token:
        return "<none>"
    return f"{token[:visible]}..."
