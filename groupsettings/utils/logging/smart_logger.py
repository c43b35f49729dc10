"""
Operation tracking decorator.

Wraps a settings operation with started/completed/failed events carrying
timing, selected arguments and a short description of the result.
"""

import functools
import inspect
import logging
import time
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union, cast

from .context import get_correlation_id
from .structured import log_event

F = TypeVar("F", bound=Callable[..., Any])


class LogConfig:
    """Global configuration for operation tracking."""

    # Argument filtering
    SENSITIVE_KEYS = {"password", "token", "secret", "api_key", "auth"}
    LARGE_CONTENT_KEYS = {"value", "text", "data"}
    MAX_ARG_LENGTH = 100


def track(
    operation: Optional[str] = None,
    level: int = logging.DEBUG,
    failure_level: int = logging.WARNING,
    include_args: Union[bool, List[str]] = True,
    include_result: bool = True,
    track_performance: bool = True,
    emit_events: bool = True,
):
    """
    Decorator that logs the lifecycle of a synchronous operation.

    Args:
        operation: Operation name (auto-detected from function if None)
        level: Log level for started/completed events
        failure_level: Log level for the failed event
        include_args: True for all args, List[str] for specific args, False for none
        include_result: Whether to log return value info
        track_performance: Whether to track timing metrics
        emit_events: Whether to emit log events (False for silent mode)

    Examples:
        @track()
        @track(operation="settings_save", include_args=False)
    """

    def decorator(func: F) -> F:
        op_name = operation or _get_operation_name(func)
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = OperationTracker(
                operation=op_name,
                level=level,
                failure_level=failure_level,
                include_args=include_args,
                include_result=include_result,
                track_performance=track_performance,
                emit_events=emit_events,
                arguments=_bind_arguments(signature, args, kwargs),
            )

            tracker.on_enter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                tracker.on_exit(type(e), e)
                raise
            tracker.set_result(result)
            tracker.on_exit(None, None)
            return result

        return cast(F, wrapper)

    return decorator


class OperationTracker:
    """Tracker that handles all logging for one operation call."""

    def __init__(
        self,
        operation: str,
        level: int,
        failure_level: int,
        include_args: Union[bool, List[str]],
        include_result: bool,
        track_performance: bool,
        emit_events: bool,
        arguments: Dict[str, Any],
    ):
        self.operation = operation
        self.level = level
        self.failure_level = failure_level
        self.include_args = include_args
        self.include_result = include_result
        self.track_performance = track_performance
        self.emit_events = emit_events
        self.arguments = arguments

        # Runtime state
        self.start_time: Optional[float] = None
        self.correlation_id: Optional[str] = None
        self.result: Any = None
        self.metrics: Dict[str, Any] = {}

    def on_enter(self) -> None:
        """Called when entering the tracked operation."""
        if self.track_performance:
            self.start_time = time.perf_counter()

        self.correlation_id = get_correlation_id()

        if self.emit_events:
            log_event("operation_started", self._build_start_context(), self.level)

    def on_exit(self, exc_type: Optional[type], exc_val: Optional[Exception]) -> None:
        """Called when exiting the tracked operation."""
        if self.track_performance and self.start_time is not None:
            duration_ms = int((time.perf_counter() - self.start_time) * 1000)
            self.metrics["duration_ms"] = duration_ms

        if not self.emit_events:
            return

        context = self._build_exit_context(exc_type, exc_val)
        if exc_type is None:
            log_event("operation_completed", context, self.level)
        else:
            log_event("operation_failed", context, self.failure_level)

    def set_result(self, result: Any) -> None:
        """Set the operation result for logging."""
        self.result = result

    def _build_start_context(self) -> Dict[str, Any]:
        """Build context for operation start."""
        context = {
            "operation": self.operation,
            "correlation_id": self.correlation_id,
        }
        context.update(_extract_safe_args(self.arguments, self.include_args))
        return context

    def _build_exit_context(
        self, exc_type: Optional[type], exc_val: Optional[Exception]
    ) -> Dict[str, Any]:
        """Build context for operation exit."""
        context = {
            "operation": self.operation,
            "correlation_id": self.correlation_id,
            "success": exc_type is None,
            **self.metrics,
        }

        if self.include_result and exc_type is None and self.result is not None:
            context.update(_extract_result_info(self.result))

        if exc_type is not None:
            context.update(
                {
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val) if exc_val else "",
                }
            )

        return context


# Utility functions


def _get_operation_name(func: Callable) -> str:
    """Extract operation name from function."""
    if hasattr(func, "__qualname__"):
        return func.__qualname__.replace(".", "_").lower()
    return func.__name__.lower()


def _bind_arguments(
    signature: inspect.Signature, args: tuple, kwargs: dict
) -> Dict[str, Any]:
    """Map positional and keyword arguments onto parameter names."""
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        # Let the call itself raise the real error
        return dict(kwargs)
    return {
        name: value
        for name, value in bound.arguments.items()
        if name not in ("self", "cls")
    }


def _extract_safe_args(
    arguments: Dict[str, Any], include_spec: Union[bool, List[str]]
) -> Dict[str, Any]:
    """Extract safe arguments for logging."""
    if include_spec is True:
        include_keys = set(arguments.keys())
    elif isinstance(include_spec, list):
        include_keys = set(include_spec)
    else:
        return {}

    return {
        f"arg_{key}": _sanitize_value(key, value)
        for key, value in arguments.items()
        if key in include_keys
    }


def _sanitize_value(key: str, value: Any) -> Any:
    """Sanitize a single value for logging."""
    if any(sensitive in key.lower() for sensitive in LogConfig.SENSITIVE_KEYS):
        return "[REDACTED]"

    if key.lower() in LogConfig.LARGE_CONTENT_KEYS and isinstance(value, str):
        if len(value) > LogConfig.MAX_ARG_LENGTH:
            return f"<{len(value)} chars>"
        return value

    if isinstance(value, (str, int, float, bool, type(None))):
        if isinstance(value, str) and len(value) > LogConfig.MAX_ARG_LENGTH:
            return f"{value[:LogConfig.MAX_ARG_LENGTH]}..."
        return value
    return f"<{type(value).__name__}>"


def _extract_result_info(result: Any) -> Dict[str, Any]:
    """Extract safe information about the result."""
    result_info: Dict[str, Any] = {"result_type": type(result).__name__}

    if isinstance(result, (list, tuple)):
        result_info["result_length"] = len(result)
    elif isinstance(result, dict):
        result_info["result_keys_count"] = len(result.keys())
    elif isinstance(result, str):
        result_info["result_length"] = len(result)
    elif isinstance(result, bool):
        result_info["result_value"] = result

    return result_info
