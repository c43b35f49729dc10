"""
Logging infrastructure for groupsettings.

Structured events on the standard ``logging`` module plus a single
decorator for tracking operations.
"""

from .context import get_correlation_id, operation_context, set_correlation_id
from .smart_logger import track
from .structured import StructuredLogger, create_development_formatter, log_event

__all__ = [
    # Primary API
    "track",
    "log_event",
    "get_correlation_id",
    "set_correlation_id",
    "operation_context",
    # Advanced usage
    "StructuredLogger",
    "create_development_formatter",
]
