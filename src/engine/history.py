"""
History Navigator

A bounded log of submitted lines with a recall cursor for arrow-key
navigation. The cursor is either at rest (no navigation in progress) or
positioned on an entry.
"""

from __future__ import annotations

from collections import deque
from enum import Enum

AT_REST = -1


class RecallDirection(str, Enum):
    """Direction of a history recall."""

    BACKWARD = "backward"  # older
    FORWARD = "forward"  # newer


class HistoryNavigator:
    """
    Session command history.

    Consecutive duplicates are stored once. When full, the oldest entry is
    evicted. Appending always puts the cursor back at rest.
    """

    def __init__(self, capacity: int = 50) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._entries: deque[str] = deque(maxlen=capacity)
        self._cursor = AT_REST

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    @property
    def cursor(self) -> int:
        """Index of the recalled entry, or AT_REST."""
        return self._cursor

    @property
    def is_at_rest(self) -> bool:
        return self._cursor == AT_REST

    def append(self, line: str) -> None:
        """Record a submitted line."""
        if not line.strip():
            return

        if self._entries and self._entries[-1] == line:
            self._cursor = AT_REST
            return

        self._entries.append(line)
        self._cursor = AT_REST

    def recall(self, direction: RecallDirection | str) -> str | None:
        """
        Move the cursor and return the entry under it.

        Backward from rest jumps to the newest entry and stops at the oldest.
        Forward from the newest entry returns to rest and yields None, which
        tells the front end to clear the input line.
        """
        direction = RecallDirection(direction)

        if not self._entries:
            return None

        if direction is RecallDirection.BACKWARD:
            if self._cursor == AT_REST:
                self._cursor = len(self._entries) - 1
            elif self._cursor > 0:
                self._cursor -= 1
            return self._entries[self._cursor]

        if self._cursor == AT_REST:
            return None

        if self._cursor < len(self._entries) - 1:
            self._cursor += 1
            return self._entries[self._cursor]

        self._cursor = AT_REST
        return None

    def reset(self) -> None:
        """Put the cursor back at rest without changing the log."""
        self._cursor = AT_REST

    def entries(self) -> list[str]:
        """Get a copy of the log, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]
