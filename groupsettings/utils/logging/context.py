"""
Context management for scoped logging with correlation IDs.

Lets a host application tag every settings event emitted while handling
one request (or one load/save cycle) with the same identifier.
"""

import contextvars
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

# Context variables for scoped data
_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)
_operation_context: contextvars.ContextVar[Optional[Dict[str, Any]]] = (
    contextvars.ContextVar("operation_context", default=None)
)


def get_correlation_id() -> str:
    """
    Get the current correlation ID, generating one if none exists.

    Returns:
        Correlation ID string for tracking operations across components
    """
    correlation_id = _correlation_id.get()
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
        _correlation_id.set(correlation_id)
    return correlation_id


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID for the current context.

    Args:
        correlation_id: String to use for operation tracking
    """
    _correlation_id.set(correlation_id)


def get_operation_context() -> Dict[str, Any]:
    """
    Get the current operation context dictionary.

    Returns:
        Dictionary containing operation-scoped context data
    """
    context = _operation_context.get()
    return context.copy() if context is not None else {}


@contextmanager
def operation_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """
    Attach extra fields to every event logged inside the block.

    Example::

        with operation_context(file_path="/etc/app.conf"):
            Settings.open("/etc/app.conf", "main")
    """
    merged = get_operation_context()
    merged.update(fields)
    token = _operation_context.set(merged)
    try:
        yield merged
    finally:
        _operation_context.reset(token)
