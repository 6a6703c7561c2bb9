"""Plain renderer - linear text for pipes, logs and dumb terminals.

The menu is printed whenever the active node or mode changes. In Command
mode every history entry not printed before is written, including entries
that arrived while scrolling or outside the visible window; in Scroll mode the
visible window is reprinted with a marker on the cursor line.
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO, Tuple

from ..modes import Mode
from ..session import Snapshot
from .base import help_line, position_label

SEPARATOR = "-" * 40


class PlainRenderer:
    def __init__(self, stream: Optional[TextIO] = None, prompt: str = "> "):
        self.stream = stream or sys.stdout
        self.prompt = prompt
        self._menu_key: Optional[Tuple] = None
        self._scroll_key: Optional[Tuple] = None
        self._last_seq = 0

    def menu_lines(self, snapshot: Snapshot) -> List[str]:
        lines = ["", f"== {snapshot.breadcrumb_text} =="]
        for item in snapshot.children:
            label = item.label + (" >" if item.is_submenu else "")
            if item.alias:
                label += f" ({item.alias})"
            lines.append(f"[{item.key}] {label}")
        exit_item = snapshot.exit_item
        lines.append(f"[{exit_item.key}] {exit_item.label}")
        lines.append(help_line(snapshot))
        lines.append(SEPARATOR)
        return lines

    def window_lines(self, snapshot: Snapshot) -> List[str]:
        lines = [f"Output [{position_label(snapshot)}]:"]
        for offset, entry in enumerate(snapshot.output):
            marker = ">" if snapshot.output_start + offset == snapshot.scroll_cursor else " "
            lines.append(f"{marker} {self._entry_text(entry)}")
        lines.append(SEPARATOR)
        return lines

    @staticmethod
    def _entry_text(entry) -> str:
        prefix = "! " if entry.is_error else ""
        return prefix + entry.display_text()

    def render(self, snapshot: Snapshot) -> None:
        lines: List[str] = []
        menu_key = (snapshot.node_id, snapshot.breadcrumb, snapshot.mode, snapshot.children)
        if menu_key != self._menu_key:
            self._menu_key = menu_key
            lines.extend(self.menu_lines(snapshot))

        if snapshot.mode is Mode.SCROLL:
            scroll_key = (snapshot.output_start, snapshot.scroll_cursor, snapshot.output)
            if scroll_key != self._scroll_key:
                self._scroll_key = scroll_key
                lines.extend(self.window_lines(snapshot))
        else:
            self._scroll_key = None
            # seq n lives at index n - 1
            fresh = snapshot.history[self._last_seq:]
            if fresh:
                lines.append("Output:")
                lines.extend(f"  {self._entry_text(e)}" for e in fresh)
                lines.append(SEPARATOR)
                self._last_seq = fresh[-1].seq

        if not lines:
            return
        self.stream.write("\n".join(lines) + "\n")
        if snapshot.mode is Mode.COMMAND and self.prompt:
            self.stream.write(self.prompt)
        self.stream.flush()
