"""
Key file factory for settings tests.

Builds key-file text from group/key/value tables and writes it to
temporary paths, so tests can describe files as data.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

SCANNER_CONF = """\
# Scanner preferences
[scanner]
# Hosts scanned in parallel
max_hosts=30
max_checks=4
name[de]=Scanner
plugins_timeout=320

# Output settings
[reporting]
format=xml
"""

SCANNER_KEYS = ["max_hosts", "max_checks", "name[de]", "plugins_timeout"]


@dataclass
class KeyFile:
    """
    Key-file contents described as data.

    Groups keep insertion order; ``header`` lines are written as comments
    before the first group.
    """

    groups: Dict[str, List[Tuple[str, str]]] = field(default_factory=dict)
    header: List[str] = field(default_factory=list)

    def render(self) -> str:
        lines = [f"# {comment}" for comment in self.header]
        for name, entries in self.groups.items():
            if lines:
                lines.append("")
            lines.append(f"[{name}]")
            lines.extend(f"{key}={value}" for key, value in entries)
        return "\n".join(lines) + "\n"


class KeyFileFactory:
    """Factory for key files on disk."""

    @staticmethod
    def write(directory: Path, text: str, filename: str = "settings.conf") -> Path:
        path = directory / filename
        path.write_text(text, encoding="utf-8")
        return path

    @staticmethod
    def scanner(directory: Path, filename: str = "scanner.conf") -> Path:
        """The standard two-group file with comments and a translated key."""
        return KeyFileFactory.write(directory, SCANNER_CONF, filename)

    @staticmethod
    def from_groups(
        directory: Path,
        groups: Dict[str, List[Tuple[str, str]]],
        header: Optional[List[str]] = None,
        filename: str = "settings.conf",
    ) -> Path:
        key_file = KeyFile(groups=groups, header=header or [])
        return KeyFileFactory.write(directory, key_file.render(), filename)

    @staticmethod
    def numbered(directory: Path, group: str, count: int) -> Path:
        """A file with one group holding key_0..key_{count-1}."""
        entries = [(f"key_{i}", f"value_{i}") for i in range(count)]
        return KeyFileFactory.from_groups(directory, {group: entries})
