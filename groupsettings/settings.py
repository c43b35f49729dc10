"""
Group-scoped access to a key file.

A ``Settings`` instance owns the parsed document of one file and scopes
reads and writes to one group of it. Changes stay in memory until
``save()`` rewrites the whole file.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Union

from configupdater import ConfigUpdater

from .config import StoreConfig, get_config
from .exceptions import LoadError, SerializeError, SettingsClosedError, WriteError
from .storage import keyfile
from .utils.logging import log_event, track
from .utils.result import Failure, Result, Success


def _require(name: str, value: Union[str, "os.PathLike[str]", None]) -> str:
    """Return ``value`` as a non-empty string or raise ValueError."""
    if value is None:
        raise ValueError(f"{name} is required")
    text = os.fspath(value)
    if not text:
        raise ValueError(f"{name} must not be empty")
    return text


class Settings:
    """
    One group of one key file.

    Usage::

        with Settings.open("/etc/scanner.conf", "scanner") as settings:
            settings.set_value("max_hosts", "30")
            settings.save()

    Leaving the ``with`` block closes the instance without saving.
    """

    def __init__(
        self,
        file_path: str,
        group_name: str,
        document: ConfigUpdater,
        config: StoreConfig,
    ):
        self.file_path = file_path
        self.group_name = group_name
        self.config = config
        self._document: Optional[ConfigUpdater] = document

    @classmethod
    @track(
        operation="settings_open",
        include_args=["file_path", "group_name"],
        include_result=False,
    )
    def open(
        cls,
        file_path: Union[str, "os.PathLike[str]"],
        group_name: str,
        config: Optional[StoreConfig] = None,
    ) -> "Settings":
        """
        Load ``file_path`` and scope the result to ``group_name``.

        Args:
            file_path: Path of the key file
            group_name: Group that reads and writes apply to
            config: Store configuration (defaults to the global config)

        Returns:
            Open settings instance

        Raises:
            ValueError: If either argument is missing or empty
            LoadError: If the file cannot be read or parsed
        """
        path = _require("file_path", file_path)
        group = _require("group_name", group_name)
        config = config or get_config()

        try:
            document = keyfile.parse(path, config)
        except LoadError as e:
            e.group_name = group
            log_event(
                "settings_load_failed",
                {"file_path": path, "group_name": group, "error_message": e.message},
                logging.WARNING,
            )
            raise

        log_event(
            "settings_loaded", {"file_path": path, "group_name": group}, logging.DEBUG
        )
        return cls(path, group, document, config)

    @classmethod
    def try_open(
        cls,
        file_path: Union[str, "os.PathLike[str]"],
        group_name: str,
        config: Optional[StoreConfig] = None,
    ) -> Result:
        """Like ``open`` but returns Success(settings) or Failure instead of raising."""
        try:
            return Success(cls.open(file_path, group_name, config=config))
        except LoadError as e:
            return Failure(e)

    @property
    def closed(self) -> bool:
        return self._document is None

    @property
    def document(self) -> ConfigUpdater:
        """The parsed document of the whole file."""
        if self._document is None:
            raise SettingsClosedError(
                "Settings are closed",
                file_path=self.file_path,
                group_name=self.group_name,
            )
        return self._document

    def set_value(self, key: str, value: str) -> None:
        """
        Set ``key`` in this group to ``value`` in memory.

        The group and key are created when missing. Line breaks and edge
        spaces in ``value`` are escaped so it reads back unchanged. Nothing
        is written to disk until ``save()``.

        Raises:
            ValueError: If ``key`` is not a valid key name
        """
        if not isinstance(value, str):
            raise TypeError(f"value must be str, not {type(value).__name__}")
        keyfile.set_value(self.document, self.group_name, key, value)

    def get_value(self, key: str) -> Optional[str]:
        """Current value of ``key`` in this group, or None when absent."""
        return keyfile.get_value(self.document, self.group_name, key)

    def keys(self) -> List[str]:
        """Keys of this group in file order; empty when the group is missing."""
        document = self.document
        if not document.has_section(self.group_name):
            return []
        return keyfile.get_keys(document, self.group_name)

    @track(operation="settings_save", include_args=False)
    def save(self) -> None:
        """
        Write the whole document (every group) back to ``file_path``.

        The file is replaced atomically. On failure the file on disk and the
        in-memory document are left as they were.

        Raises:
            SerializeError: If the document cannot be rendered; nothing is written
            WriteError: If the rendered text cannot be written
        """
        document = self.document

        try:
            text = keyfile.serialize(document)
            size = keyfile.write_file_atomic(
                self.file_path,
                text,
                encoding=self.config.encoding,
                fsync=self.config.fsync_on_save,
            )
        except (SerializeError, WriteError) as e:
            e.file_path = self.file_path
            e.group_name = self.group_name
            log_event(
                "settings_save_failed",
                self._event_data(
                    stage="serialize" if isinstance(e, SerializeError) else "write",
                    error_message=e.message,
                ),
                logging.WARNING,
            )
            raise

        log_event("settings_saved", self._event_data(size_bytes=size), logging.INFO)

    def try_save(self) -> Result:
        """Like ``save`` but returns Success(file_path) or Failure instead of raising."""
        try:
            self.save()
        except (SerializeError, WriteError) as e:
            return Failure(e)
        return Success(self.file_path)

    def close(self) -> None:
        """Release the parsed document. Unsaved changes are discarded."""
        self._document = None

    def _event_data(self, **extra: Any) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "file_path": self.file_path,
            "group_name": self.group_name,
        }
        data.update(extra)
        return data

    def __enter__(self) -> "Settings":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"Settings({self.file_path!r}, {self.group_name!r}, {state})"
