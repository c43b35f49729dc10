"""
Shared utilities: structured logging and the Result type.
"""

from .result import Failure, Result, Success

__all__ = ["Failure", "Result", "Success"]
