"""
Result type for explicit error handling.

The non-raising ``try_open`` and ``try_save`` entry points of the settings
store return either a Success carrying the value or a Failure carrying the
SettingsError that would otherwise have been raised.

Example:
    >>> result = Settings.try_open("/etc/app.conf", "scanner")
    >>> if result.is_failure():
    ...     print(result.error_type, result.context.get("group_name"))
    LoadError scanner
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, NoReturn, TypeVar, Union

from ..exceptions import SettingsError

T = TypeVar("T")


@dataclass
class Success(Generic[T]):
    """
    Represents a successful operation with a value.

    Attributes:
        value: The successful result value
    """

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass
class Failure:
    """
    Represents a failed operation.

    Attributes:
        error: The settings error the operation stopped on
    """

    error: SettingsError

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    @property
    def error_type(self) -> str:
        """Class name of the error, e.g. ``"LoadError"``."""
        return type(self.error).__name__

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def context(self) -> Dict[str, Any]:
        """File, group and metadata of the error, leaving out empty ones."""
        context = {
            "file_path": self.error.file_path,
            "group_name": self.error.group_name,
            "metadata": self.error.metadata,
        }
        return {key: value for key, value in context.items() if value}

    def unwrap(self) -> NoReturn:
        """
        Re-raise the wrapped error.

        Raises:
            SettingsError: Always, since this is a Failure
        """
        raise self.error

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Failure({self.error_type}: {self.message})"


# Type alias for Result
Result = Union[Success[T], Failure]
