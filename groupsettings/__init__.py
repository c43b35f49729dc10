"""
groupsettings - group-scoped access to key/value configuration files.

Open one group of a ``[group]`` / ``key=value`` file, walk its keys in file
order, change values in memory and write the whole file back atomically,
keeping comments and unrelated groups intact.
"""

__version__ = "0.1.0"

from .config import StoreConfig, configure_logging, get_config
from .exceptions import (
    IteratorStateError,
    LoadError,
    SerializeError,
    SettingsClosedError,
    SettingsError,
    WriteError,
)
from .iterator import SettingsIterator
from .settings import Settings

__all__ = [
    "Settings",
    "SettingsIterator",
    "StoreConfig",
    "configure_logging",
    "get_config",
    "SettingsError",
    "LoadError",
    "SerializeError",
    "WriteError",
    "SettingsClosedError",
    "IteratorStateError",
]
