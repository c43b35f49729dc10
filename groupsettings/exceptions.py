"""
Structured exception hierarchy for settings files.

Every error carries the file and group it concerns so callers can report
failures without re-deriving context.
"""

from typing import Any, Dict, Optional


class SettingsError(Exception):
    """
    Base exception for all settings errors.

    Attributes:
        message: Human-readable error message
        file_path: Path of the settings file involved (if known)
        group_name: Group the operation was scoped to (if known)
        error_type: Categorization of error type
        metadata: Additional context about the error
    """

    default_error_type = "settings_error"

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        group_name: Optional[str] = None,
        error_type: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.file_path = file_path
        self.group_name = group_name
        self.error_type = error_type or self.default_error_type
        self.metadata = metadata or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error": self.message,
            "error_type": self.error_type,
            "file_path": self.file_path,
            "group_name": self.group_name,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [self.message]
        if self.file_path:
            parts.append(f"(file: {self.file_path})")
        if self.group_name:
            parts.append(f"(group: {self.group_name})")
        return " ".join(parts)


class LoadError(SettingsError):
    """
    Raised when a settings file or group cannot be loaded.

    Covers missing, unreadable, undecodable and unparseable files, as well
    as a group that is absent or has no keys.
    """

    default_error_type = "load_error"


class SerializeError(SettingsError):
    """Raised when the in-memory document cannot be rendered to text."""

    default_error_type = "serialize_error"


class WriteError(SettingsError):
    """Raised when rendered settings cannot be written to disk."""

    default_error_type = "write_error"


class SettingsClosedError(SettingsError):
    """Raised when a closed settings instance is used."""

    default_error_type = "settings_closed"


class IteratorStateError(SettingsError, LookupError):
    """Raised when an iterator is read while it has no current key."""

    default_error_type = "iterator_state"
