"""Runtime configuration for inekoalaty.

Defaults can be overridden via environment variables so batch scripts can be
tuned without code changes.
"""

import logging
import os

# Default configuration (can be overridden via environment variables)
DEFAULT_MAX_ROUNDS = 100
DEFAULT_MAX_WORKERS = 1
DEFAULT_LOG_LEVEL = "WARNING"


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_max_rounds() -> int:
    """Get configured default round cap from environment."""
    return _int_from_env("INEKOALATY_MAX_ROUNDS", DEFAULT_MAX_ROUNDS)


def get_max_workers() -> int:
    """Get configured batch worker count from environment.

    A value of 1 or less runs batches inline in the calling process.
    """
    return _int_from_env("INEKOALATY_MAX_WORKERS", DEFAULT_MAX_WORKERS)


def get_log_level() -> str:
    """Get configured log level name from environment."""
    return os.environ.get("INEKOALATY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts.

    Args:
        level: Level name. If None, uses environment config.
    """
    logging.basicConfig(
        level=level or get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
