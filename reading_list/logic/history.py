"""History of command lines entered during a session."""

from typing import List, Optional, Tuple


class CommandHistory:
    """Append-only record of successfully executed command lines.

    ``previous`` and ``next`` walk a recall cursor over the record; every
    ``add`` puts the cursor back past the most recent line.
    """

    def __init__(self, entries: Optional[List[str]] = None):
        self._entries: List[str] = list(entries or [])
        self._cursor = len(self._entries)

    def add(self, command_text: str) -> None:
        self._entries.append(command_text)
        self._cursor = len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def previous(self) -> Optional[str]:
        """Step back one line; returns None when already at the oldest line."""
        if self._cursor == 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def next(self) -> Optional[str]:
        """Step forward one line; returns None once past the newest line."""
        if self._cursor >= len(self._entries) - 1:
            self._cursor = len(self._entries)
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CommandHistory):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None
