"""
Storage layer: the key-file engine adapter.
"""

from . import keyfile

__all__ = ["keyfile"]
