"""The staging index: a flat list of paths with their blob hashes and modes."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from motor.utils import MotorError

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _now() -> int:
    return int(time.time())


@dataclass
class IndexEntry:
    """One staged file."""

    path: str
    hash: str
    mode: int
    mtime: int = field(default_factory=_now, compare=False)

    def to_line(self) -> str:
        """Return the entry as a single ``mode hash path`` line."""
        return f"{self.mode} {self.hash} {self.path}"

    @classmethod
    def from_line(cls, line: str) -> IndexEntry:
        """Parse a line written by :meth:`to_line`."""
        parts = line.split(None, 2)
        if len(parts) < 2:
            raise MotorError(f"Invalid index entry: {line!r}")
        try:
            mode = int(parts[0])
        except ValueError:
            raise MotorError(f"Invalid index entry: {line!r}") from None
        path = parts[2] if len(parts) == 3 else ""
        return cls(path, parts[1], mode)


class Index:
    """Entries staged for the next commit, kept in a text file."""

    def __init__(self, index_path: str | Path) -> None:
        self.index_path = Path(index_path)
        self.entries: list[IndexEntry] = []

    def load(self) -> None:
        """Replace the entries with those stored on disk, if the file exists."""
        self.entries = []
        if not self.index_path.exists():
            return
        with open(self.index_path, encoding=_ENCODING, errors=_ERRORS, newline="") as handle:
            text = handle.read()
        self.entries = [IndexEntry.from_line(line) for line in text.split("\n") if line]

    def save(self) -> None:
        """Write every entry to disk, one per line."""
        with open(self.index_path, "w", encoding=_ENCODING, errors=_ERRORS, newline="") as handle:
            handle.writelines(f"{entry.to_line()}\n" for entry in self.entries)

    def add(self, entry: IndexEntry) -> None:
        """Stage ``entry``, replacing any entry with the same path."""
        for position, existing in enumerate(self.entries):
            if existing.path == entry.path:
                self.entries[position] = entry
                return
        self.entries.append(entry)

    def remove(self, path: str) -> None:
        """Unstage ``path`` and everything below it."""
        below = path + "/"
        self.entries = [
            entry
            for entry in self.entries
            if entry.path != path and not entry.path.startswith(below)
        ]

    def __contains__(self, path: object) -> bool:
        return any(entry.path == path for entry in self.entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, path: str) -> IndexEntry | None:
        """Return the entry staged for ``path``, or None."""
        return next((entry for entry in self.entries if entry.path == path), None)