"""
Configuration management for groupsettings.
"""

from .settings import StoreConfig, configure_logging, get_config, reset_config

__all__ = ["StoreConfig", "configure_logging", "get_config", "reset_config"]
