"""
Sequential iteration over the keys of one group.
"""

import logging
import os
from typing import Iterable, Optional, Tuple, Union

from .config import StoreConfig
from .exceptions import IteratorStateError, LoadError, SettingsClosedError
from .settings import Settings
from .storage import keyfile
from .utils.logging import log_event, track


class SettingsIterator:
    """
    Cursor over a snapshot of a group's key names.

    The key names are captured when the iterator is opened, in file order.
    Values are looked up in the live document, so ``set_value`` calls made
    through ``iterator.settings`` are visible through ``value``. Keys added
    or removed after opening do not change the snapshot.

    The cursor starts before the first key. ``advance()`` moves it forward
    and returns False once it runs past the last key; from then on the
    iterator is exhausted for good.

    Usage::

        with SettingsIterator.open("/etc/scanner.conf", "scanner") as it:
            while it.advance():
                print(it.name, it.value)
    """

    def __init__(self, settings: Settings, keys: Iterable[str]):
        self._settings = settings
        self._keys: Tuple[str, ...] = tuple(keys)
        self._cursor = -1
        self._exhausted = False

    @classmethod
    @track(
        operation="settings_iterator_open",
        include_args=["file_path", "group_name"],
        include_result=False,
    )
    def open(
        cls,
        file_path: Union[str, "os.PathLike[str]"],
        group_name: str,
        config: Optional[StoreConfig] = None,
    ) -> "SettingsIterator":
        """
        Open ``file_path`` and snapshot the keys of ``group_name``.

        A group that is missing or has no keys is a load failure, not an
        empty iterator.

        Raises:
            ValueError: If either argument is missing or empty
            LoadError: If the file cannot be loaded or the group is missing or empty
        """
        settings = Settings.open(file_path, group_name, config=config)
        event_data = {"file_path": settings.file_path, "group_name": group_name}

        try:
            keys = keyfile.get_keys(settings.document, group_name)
            if not keys:
                log_event("settings_group_empty", event_data, logging.WARNING)
                raise LoadError(
                    f"Group '{group_name}' has no keys",
                    error_type="empty_group",
                )
        except LoadError as e:
            settings.close()
            e.file_path = settings.file_path
            e.group_name = group_name
            log_event(
                "settings_load_failed",
                {**event_data, "error_message": e.message},
                logging.WARNING,
            )
            raise

        return cls(settings, keys)

    @property
    def settings(self) -> Settings:
        """The settings instance the iterator reads from."""
        return self._settings

    @property
    def keys(self) -> Tuple[str, ...]:
        """Key names captured when the iterator was opened."""
        return self._keys

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def advance(self) -> bool:
        """
        Move to the next key.

        Returns:
            True if the cursor now points at a key, False once past the last one
        """
        if self._exhausted:
            return False
        if self._cursor + 1 >= len(self._keys):
            self._exhausted = True
            return False
        self._cursor += 1
        return True

    @property
    def name(self) -> str:
        """Key name at the cursor."""
        self._check_positioned()
        return self._keys[self._cursor]

    @property
    def value(self) -> Optional[str]:
        """Current value of the key at the cursor, or None if it was removed."""
        return self._settings.get_value(self.name)

    def close(self) -> None:
        """Drop the key snapshot and close the underlying settings."""
        self._keys = ()
        self._exhausted = True
        self._settings.close()

    def _check_positioned(self) -> None:
        if self._settings.closed:
            raise SettingsClosedError(
                "Iterator is closed",
                file_path=self._settings.file_path,
                group_name=self._settings.group_name,
            )
        if self._exhausted:
            raise IteratorStateError(
                "Iterator is exhausted",
                file_path=self._settings.file_path,
                group_name=self._settings.group_name,
            )
        if self._cursor < 0:
            raise IteratorStateError(
                "advance() has not been called",
                file_path=self._settings.file_path,
                group_name=self._settings.group_name,
            )

    def __iter__(self) -> "SettingsIterator":
        return self

    def __next__(self) -> Tuple[str, Optional[str]]:
        if not self.advance():
            raise StopIteration
        return self.name, self.value

    def __enter__(self) -> "SettingsIterator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        if self._exhausted:
            position = "exhausted"
        elif self._cursor < 0:
            position = "before first"
        else:
            position = f"{self._cursor + 1}/{len(self._keys)}"
        return (
            f"SettingsIterator({self._settings.file_path!r}, "
            f"{self._settings.group_name!r}, {position})"
        )
