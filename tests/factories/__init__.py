"""
Data factories for creating test key files.
"""

from .keyfile_factory import SCANNER_CONF, SCANNER_KEYS, KeyFile, KeyFileFactory

__all__ = ["SCANNER_CONF", "SCANNER_KEYS", "KeyFile", "KeyFileFactory"]
