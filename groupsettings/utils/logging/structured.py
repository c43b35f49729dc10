"""
Structured logging utilities for event-based logging.

Provides structured event logging and a human-readable development
formatter for settings load/save events.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional


class StructuredLogger:
    """
    Structured logger that creates consistent, searchable log events.

    Provides methods for logging structured events with consistent field names
    and automatic context injection.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def event(
        self,
        event_name: str,
        data: Optional[Dict[str, Any]] = None,
        level: int = logging.INFO,
    ):
        """
        Log a structured event with optional data.

        Args:
            event_name: Name of the event (e.g., 'settings_saved')
            data: Dictionary of structured data to include
            level: Log level (defaults to INFO)
        """
        if not self.logger.isEnabledFor(level):
            return

        from .context import get_correlation_id, get_operation_context

        structured_data = {
            "event": event_name,
            "correlation_id": get_correlation_id(),
        }

        operation_context = get_operation_context()
        if operation_context:
            structured_data.update(operation_context)

        if data:
            structured_data.update(data)

        record = self.logger.makeRecord(
            self.logger.name, level, "(structured)", 0, event_name, (), None
        )
        record.structured_data = structured_data

        self.logger.handle(record)


# Global structured logger instance
_global_logger: Optional[StructuredLogger] = None


def get_structured_logger(name: str = "groupsettings") -> StructuredLogger:
    """Get or create a structured logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = StructuredLogger(name)
    return _global_logger


def log_event(
    event_name: str, data: Optional[Dict[str, Any]] = None, level: int = logging.INFO
):
    """
    Convenience function for logging structured events.

    Args:
        event_name: Name of the event
        data: Optional structured data
        level: Log level

    Example::

        log_event("settings_saved", {
            "file_path": "/etc/app.conf",
            "size_bytes": 512,
        })
    """
    structured_logger = get_structured_logger()
    structured_logger.event(event_name, data, level)


def _file_name(data: dict) -> str:
    file_path = data.get("file_path")
    return Path(file_path).name if file_path else "unknown file"


def _format_size(size_bytes: int) -> str:
    if size_bytes > 1024 * 1024:
        return f"{size_bytes / (1024*1024):.1f}MB"
    elif size_bytes > 1024:
        return f"{size_bytes / 1024:.1f}KB"
    return f"{size_bytes}B"


def create_development_formatter() -> logging.Formatter:
    """
    Create a human-readable formatter for development environments.

    Returns a formatter that outputs clean, readable logs while still
    including the interesting fields of structured settings events.
    """

    class DevelopmentFormatter(logging.Formatter):
        def format(self, record: logging.LogRecord) -> str:
            timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[
                :-3
            ]

            data: Optional[dict] = getattr(record, "structured_data", None)

            # Non-structured records
            if not data:
                return f"{timestamp} | {record.levelname:5} | {record.getMessage()}"

            event = data.get("event", "")
            operation = data.get("operation", "")

            if event == "operation_started":
                message_content = f"{operation or 'operation'} started"
            elif event == "operation_completed":
                message_content = self._format_operation_success(data, operation)
            elif event == "operation_failed":
                message_content = self._format_operation_error(data, operation)
            else:
                message_content = self._format_settings_event(data, event)

            return f"{timestamp} | {record.levelname:5} | {message_content}"

        def _format_operation_success(self, data: dict, operation: str) -> str:
            """Format successful operation completion events."""
            duration_ms = data.get("duration_ms")
            if duration_ms is None:
                return f"{operation} completed"
            return f"{operation} completed in {duration_ms}ms"

        def _format_operation_error(self, data: dict, operation: str) -> str:
            """Format failed operation events."""
            error_type = data.get("error_type", "Error")
            error_message = data.get("error_message", "")

            # Truncate long error messages
            if len(error_message) > 80:
                error_message = error_message[:77] + "..."

            return f"{operation} failed ({error_type}: {error_message})"

        def _format_settings_event(self, data: dict, event: str) -> str:
            """Format settings load/save events."""
            group = data.get("group_name", "?")

            if event == "settings_loaded":
                return f"loaded {_file_name(data)} [{group}]"
            elif event == "settings_load_failed":
                reason = data.get("error_message", "unknown error")
                return f"failed to load {_file_name(data)}: {reason}"
            elif event == "settings_group_empty":
                return f"group [{group}] in {_file_name(data)} has no keys"
            elif event == "settings_saved":
                size = _format_size(data.get("size_bytes", 0))
                return f"saved {_file_name(data)} ({size})"
            elif event == "settings_save_failed":
                stage = data.get("stage", "save")
                reason = data.get("error_message", "unknown error")
                return f"{stage} of {_file_name(data)} failed: {reason}"

            return event or "log_event"

    return DevelopmentFormatter()
