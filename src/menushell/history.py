"""Output and command history buffers.

``OutputHistory`` is the append-only log of result messages shared by the
dispatcher (writer) and the renderers (readers through snapshots).
``CommandHistory`` keeps submitted command lines for up/down recall.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class OutputEntry:
    seq: int
    text: str
    timestamp: datetime
    source: Optional[str] = None
    is_error: bool = False

    def display_text(self) -> str:
        if self.source:
            return f"[{self.source}] {self.text}"
        return self.text


class OutputHistory:
    """Append-only ordered log with a clamped scroll cursor.

    Sequence numbers start at 1 and are assigned at append time. The cursor
    is an index into the log, kept within ``[0, len - 1]`` (``0`` while the
    log is empty). Nothing is ever evicted.
    """

    def __init__(self) -> None:
        self._entries: List[OutputEntry] = []
        self._cursor = 0
        self._next_seq = 1
        self._new_output = False

    def append(
        self,
        text: str,
        source: Optional[str] = None,
        is_error: bool = False,
        timestamp: Optional[datetime] = None,
    ) -> OutputEntry:
        entry = OutputEntry(
            seq=self._next_seq,
            text=text,
            timestamp=timestamp or datetime.now(),
            source=source,
            is_error=is_error,
        )
        self._next_seq += 1
        self._entries.append(entry)
        self._new_output = True
        return entry

    @property
    def entries(self) -> Tuple[OutputEntry, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def last(self) -> Optional[OutputEntry]:
        return self._entries[-1] if self._entries else None

    def scroll(self, delta: int) -> int:
        """Move the cursor by ``delta`` lines, clamped into range."""
        if not self._entries:
            return self._cursor
        self._cursor = max(0, min(len(self._entries) - 1, self._cursor + delta))
        return self._cursor

    def jump_top(self) -> int:
        if self._entries:
            self._cursor = 0
        return self._cursor

    def jump_bottom(self) -> int:
        if self._entries:
            self._cursor = len(self._entries) - 1
        return self._cursor

    def has_new_output(self) -> bool:
        """Report whether entries were appended since the last call, then reset."""
        flag = self._new_output
        self._new_output = False
        return flag

    def window(self, height: int, follow: bool = False) -> Tuple[int, Sequence[OutputEntry]]:
        """Return ``(start, entries)`` for a view ``height`` lines tall.

        With ``follow`` the view shows the newest entries; otherwise it
        starts at the cursor, pulled back so the view stays full near the end.
        """
        total = len(self._entries)
        if follow:
            start = max(0, total - height)
        else:
            start = max(0, min(self._cursor, total - height))
        return start, tuple(self._entries[start:start + height])


class CommandHistory:
    """Bounded list of submitted command lines with browsing support."""

    def __init__(self, max_size: int = 100):
        self.max_size = max_size
        self.entries: List[str] = []
        self.position: Optional[int] = None

    def add(self, command: str) -> None:
        if not command:
            return
        if self.entries and self.entries[-1] == command:
            self.position = None
            return
        self.entries.append(command)
        if len(self.entries) > self.max_size:
            del self.entries[0]
        self.position = None

    def up(self) -> Optional[str]:
        """Step to an older command; stays on the oldest one."""
        if not self.entries:
            return None
        if self.position is None:
            self.position = len(self.entries) - 1
        elif self.position > 0:
            self.position -= 1
        return self.entries[self.position]

    def down(self) -> Optional[str]:
        """Step to a newer command; leaves browsing past the newest one."""
        if self.position is None:
            return None
        if self.position < len(self.entries) - 1:
            self.position += 1
            return self.entries[self.position]
        self.position = None
        return None

    def exit_browsing(self) -> None:
        self.position = None

    @property
    def browsing(self) -> bool:
        return self.position is not None
