"""Command history with up/down navigation (``~/.mysh_history``)."""

from __future__ import annotations

import logging
from pathlib import Path

from mysh.exceptions import HistoryError

logger = logging.getLogger(__name__)


class HistoryStore:
    """Persisted command history with up/down navigation.

    Entries are stored in order of submission, one per line in the history
    file. Navigation uses a cursor that starts past the end (the line being
    typed). previous() moves backward, next() moves forward. Both return an
    empty string at the boundaries.
    """

    def __init__(self, path: Path, entries: list[str] | None = None) -> None:
        self._path = path
        self._entries: list[str] = list(entries or [])
        self._cursor: int = len(self._entries)

    @classmethod
    def load(cls, path: Path) -> HistoryStore:
        """Read the history file, creating it empty if it does not exist.

        Raises:
            HistoryError: If the file exists but cannot be read.
        """
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
            return cls(path)
        try:
            text = path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise HistoryError(path, str(e)) from e
        entries = [line for line in text.splitlines() if line.strip()]
        logger.debug("Loaded %d history entries from %s", len(entries), path)
        return cls(path, entries)

    @property
    def path(self) -> Path:
        """Location of the history file."""
        return self._path

    @property
    def entries(self) -> list[str]:
        """Copy of the entries, oldest first."""
        return list(self._entries)

    @property
    def cursor(self) -> int:
        """Current navigation position (0..len)."""
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, line: str) -> None:
        """Record a submitted line. Whitespace-only lines are skipped."""
        if not line.strip():
            return
        self._entries.append(line)
        self._cursor = len(self._entries)
        with self._path.open("a") as f:
            f.write(line + "\n")

    def reset_cursor(self) -> None:
        """Move the cursor past the newest entry."""
        self._cursor = len(self._entries)

    def previous(self) -> str:
        """Move cursor back and return entry, or "" if already at the start."""
        if self._cursor <= 0:
            self._cursor = 0
            return ""
        self._cursor -= 1
        return self._entries[self._cursor]

    def next(self) -> str:
        """Move cursor forward and return entry, or "" at the end."""
        if self._cursor >= len(self._entries) - 1:
            self._cursor = len(self._entries)
            return ""
        self._cursor += 1
        return self._entries[self._cursor]

    def clear(self) -> None:
        """Delete the history file and start again with an empty one."""
        self._path.unlink(missing_ok=True)
        self._path.touch()
        self._entries.clear()
        self._cursor = 0
