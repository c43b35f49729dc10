"""
Library configuration and logging setup.
"""

import logging
import sys
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreConfig(BaseSettings):
    """Settings store configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="GROUPSETTINGS_", env_file=".env", extra="ignore"
    )

    # File I/O
    encoding: str = Field(
        default="utf-8", description="Text encoding for settings files"
    )
    fsync_on_save: bool = Field(
        default=True, description="Flush the temp file to disk before replacing"
    )

    # Formatting of newly added entries
    space_around_delimiter: bool = Field(
        default=False, description="Write new entries as 'key = value'"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Library log level")


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure logging with development-friendly structured output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the configured ``log_level``.
    """
    from ..utils.logging.structured import create_development_formatter

    log_level = getattr(logging, (level or get_config().log_level).upper())
    formatter = create_development_formatter()

    # Configure only our library logger (groupsettings.*)
    lib_logger = logging.getLogger("groupsettings")
    lib_logger.setLevel(log_level)

    for handler in lib_logger.handlers[:]:
        lib_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    lib_logger.addHandler(console_handler)

    # Host applications keep control of the root logger
    lib_logger.propagate = False


# Global config instance
_config: Optional[StoreConfig] = None


def get_config() -> StoreConfig:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = StoreConfig()
    return _config


def reset_config() -> None:
    """Drop the cached config so the environment is read again."""
    global _config
    _config = None
