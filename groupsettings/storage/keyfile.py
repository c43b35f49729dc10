"""
Key-file engine adapter.

Thin functions over ``configupdater`` covering everything the settings store
needs from a key-file engine: parse a file, list and read the keys of a
group, upsert a value, render the document back to text and replace a file
atomically. Comments, blank lines and translated keys (``Name[de]=...``)
are kept as-is by the engine, so a load/save cycle round-trips them.

Values follow the key-file escaping rules: ``set_value`` writes newlines,
tabs, carriage returns and backslashes as ``\\n``, ``\\t``, ``\\r`` and
``\\\\``, and a leading or trailing space as ``\\s``; ``get_value`` reverses
this. A stored value therefore always fits on one line.

The engine reads the configparser dialect of the format. One difference
from other key-file readers: an indented line continues the previous
value, so ``a=1`` followed by ``  b=2`` loads as a single key ``a`` with
the value ``"1\\nb=2"`` instead of a second key ``b``.
"""

import configparser
import os
import re
import stat
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from configupdater import ConfigUpdater

from ..config import StoreConfig
from ..exceptions import LoadError, SerializeError, WriteError

PathLike = Union[str, os.PathLike]

# Key files use '=' only and '#' comments
DELIMITERS = ("=",)
COMMENT_PREFIXES = ("#",)

# Mode for files that did not exist before the first save
NEW_FILE_MODE = 0o644

KEY_FORBIDDEN_CHARS = ("=", "\n", "\r")
KEY_FORBIDDEN_FIRST = ("[", "#")

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\t": "\\t", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "t": "\t", "r": "\r", "s": " "}
_ESCAPE_SEQUENCE = re.compile(r"\\([\\ntrs])")


def new_document(config: StoreConfig) -> ConfigUpdater:
    """Create an empty document configured for the key-file dialect."""
    document = ConfigUpdater(
        delimiters=DELIMITERS,
        comment_prefixes=COMMENT_PREFIXES,
        space_around_delimiters=config.space_around_delimiter,
    )
    # Keys are case-sensitive
    document.optionxform = str
    return document


def parse(file_path: PathLike, config: StoreConfig) -> ConfigUpdater:
    """
    Load and parse a key file.

    Args:
        file_path: Path of the file to read
        config: Store configuration (encoding, formatting)

    Returns:
        Parsed document

    Raises:
        LoadError: If the file cannot be read, decoded or parsed
    """
    path = str(file_path)
    try:
        text = Path(path).read_text(encoding=config.encoding)
    except OSError as e:
        raise LoadError(
            f"Failed to read configuration: {e.strerror or e}",
            file_path=path,
            metadata={"errno": e.errno},
        ) from e
    except UnicodeDecodeError as e:
        raise LoadError(
            f"Failed to decode configuration as {config.encoding}: {e.reason}",
            file_path=path,
            metadata={"encoding": config.encoding, "position": e.start},
        ) from e

    # Entries appended later must start on their own line
    if text and not text.endswith("\n"):
        text += "\n"

    document = new_document(config)
    try:
        document.read_string(text, source=path)
    except configparser.Error as e:
        raise LoadError(
            f"Failed to parse configuration: {e}",
            file_path=path,
            metadata={"parser_error": type(e).__name__},
        ) from e
    return document


def get_keys(document: ConfigUpdater, group: str) -> List[str]:
    """
    List the keys of a group in file order.

    Raises:
        LoadError: If the group does not exist
    """
    if not document.has_section(group):
        raise LoadError(f"Group '{group}' not found", group_name=group)
    return list(document.options(group))


def check_key_name(key: str) -> None:
    """
    Reject key names that would not read back as the same single key.

    Raises:
        ValueError: If the key is empty, contains '=' or a line break,
            starts with '[' or '#', or has surrounding whitespace
    """
    if not key:
        raise ValueError("key must not be empty")
    if any(char in key for char in KEY_FORBIDDEN_CHARS):
        raise ValueError(f"key {key!r} must not contain '=' or line breaks")
    if key[0] in KEY_FORBIDDEN_FIRST:
        raise ValueError(f"key {key!r} must not start with '[' or '#'")
    if key != key.strip():
        raise ValueError(f"key {key!r} must not start or end with whitespace")


def escape_value(value: str) -> str:
    """Escape ``value`` so it is stored on one line and keeps edge spaces."""
    escaped = "".join(_ESCAPES.get(char, char) for char in value)
    if escaped.startswith(" "):
        escaped = "\\s" + escaped[1:]
    if escaped.endswith(" "):
        escaped = escaped[:-1] + "\\s"
    return escaped


def unescape_value(raw: str) -> str:
    """Reverse ``escape_value``; unknown escape sequences are kept as-is."""
    return _ESCAPE_SEQUENCE.sub(lambda match: _UNESCAPES[match.group(1)], raw)


def get_value(document: ConfigUpdater, group: str, key: str) -> Optional[str]:
    """Return the value of ``key`` in ``group``, or None when absent."""
    if not document.has_option(group, key):
        return None
    raw = document[group][key].value
    return None if raw is None else unescape_value(raw)


def set_value(document: ConfigUpdater, group: str, key: str, value: str) -> None:
    """
    Set ``key`` in ``group`` to ``value``, creating both when missing.

    Raises:
        ValueError: If ``key`` is not a valid key name
    """
    check_key_name(key)
    if not document.has_section(group):
        document.add_section(group)
    document.set(group, key, escape_value(value))


def serialize(document: ConfigUpdater) -> str:
    """
    Render the whole document as text.

    Raises:
        SerializeError: If the document cannot be rendered
    """
    try:
        return str(document)
    except Exception as e:
        raise SerializeError(
            f"Failed to serialize configuration: {e}",
            metadata={"engine_error": type(e).__name__},
        ) from e


def write_file_atomic(
    file_path: PathLike, text: str, encoding: str = "utf-8", fsync: bool = True
) -> int:
    """
    Replace the contents of ``file_path`` with ``text`` atomically.

    The text goes to a temporary file in the same directory which is then
    renamed over the target, so readers see either the old or the new
    contents. An existing file keeps its permission bits.

    Returns:
        Number of bytes written

    Raises:
        WriteError: If the file cannot be written or replaced
    """
    target = Path(file_path)
    try:
        data = text.encode(encoding)
    except UnicodeEncodeError as e:
        raise WriteError(
            f"Failed to encode configuration as {encoding}: {e.reason}",
            file_path=str(target),
            metadata={"encoding": encoding, "stage": "encode"},
        ) from e

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
    except OSError as e:
        raise WriteError(
            f"Failed to create temporary file: {e.strerror or e}",
            file_path=str(target),
            metadata={"errno": e.errno, "stage": "create"},
        ) from e

    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            if fsync:
                os.fsync(handle.fileno())
        os.chmod(tmp_name, _target_mode(target))
        os.replace(tmp_name, target)
    except OSError as e:
        _discard(tmp_name)
        raise WriteError(
            f"Failed to write configuration: {e.strerror or e}",
            file_path=str(target),
            metadata={"errno": e.errno, "stage": "write"},
        ) from e
    except BaseException:
        _discard(tmp_name)
        raise

    return len(data)


def _target_mode(target: Path) -> int:
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        return NEW_FILE_MODE


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass
