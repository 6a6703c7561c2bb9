"""Rich renderer - panels for the menu, output and key hints.

The building blocks (``menu_panel``, ``output_panel``, ``status_text``,
``help_text``, ``input_text``) are also used directly by the textual shell.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..modes import Mode
from ..session import MenuItemView, Snapshot
from .base import help_line, position_label

EMPTY_OUTPUT = "No output yet. Run commands to see their output here."

MODE_STYLES = {
    Mode.COMMAND: "bold green",
    Mode.SCROLL: "bold yellow",
}


class RichRenderer:
    """Renders snapshots as rich renderables printed to a Console."""

    def __init__(self, console: Optional[Console] = None, clear: bool = True):
        self.console = console or Console()
        self.clear = clear

    # --- building blocks ------------------------------------------------

    def status_text(self, snapshot: Snapshot) -> Text:
        text = Text()
        text.append(snapshot.breadcrumb_text, style="bold cyan")
        text.append("  |  ")
        text.append(snapshot.mode.display_name, style=MODE_STYLES[snapshot.mode])
        if snapshot.pending_tasks:
            text.append(f"  |  {snapshot.pending_tasks} running", style="magenta")
        return text

    def menu_table(self, snapshot: Snapshot) -> Table:
        table = Table.grid(padding=(0, 1))
        table.add_column(style="yellow", no_wrap=True)
        table.add_column(style="white")
        for item in snapshot.children:
            table.add_row(Text(f"[{item.key}]"), self._item_label(item))
        exit_item = snapshot.exit_item
        table.add_row(Text(f"[{exit_item.key}]"), Text(exit_item.label))
        return table

    @staticmethod
    def _item_label(item: MenuItemView) -> Text:
        label = Text(item.label)
        if item.is_submenu:
            label.append(" >", style="cyan")
        if item.alias:
            label.append(f" ({item.alias})", style="dim")
        if item.kind is not None and item.kind.value == "deferred":
            label.append(" ~", style="magenta")
        return label

    def menu_panel(self, snapshot: Snapshot) -> Panel:
        return Panel(
            self.menu_table(snapshot),
            title=Text(snapshot.breadcrumb_text, style="bold cyan"),
            title_align="left",
            border_style=MODE_STYLES[snapshot.mode].split()[-1],
        )

    def output_text(self, snapshot: Snapshot) -> Text:
        if not snapshot.output:
            return Text(EMPTY_OUTPUT, style="grey50")
        text = Text()
        for offset, entry in enumerate(snapshot.output):
            index = snapshot.output_start + offset
            style = "red" if entry.is_error else ""
            if snapshot.mode is Mode.SCROLL and index == snapshot.scroll_cursor:
                style = (style + " reverse").strip()
            if offset:
                text.append("\n")
            text.append(entry.display_text(), style=style or None)
        return text

    def output_panel(self, snapshot: Snapshot) -> Panel:
        follow = "Follow ON" if snapshot.follow else "Follow OFF"
        return Panel(
            self.output_text(snapshot),
            title=Text(f"Output [{follow}] [{position_label(snapshot)}]"),
            title_align="left",
        )

    def help_text(self, snapshot: Snapshot) -> Text:
        style = "yellow" if snapshot.mode is Mode.SCROLL else "grey50"
        return Text(help_line(snapshot), style=style)

    def input_text(self, snapshot: Snapshot) -> Text:
        return Text(f"> {snapshot.input_buffer}")

    def build(self, snapshot: Snapshot) -> RenderableType:
        body = Table.grid(expand=True)
        body.add_column(ratio=1)
        body.add_column(ratio=1)
        body.add_row(self.menu_panel(snapshot), self.output_panel(snapshot))
        parts = [self.status_text(snapshot), body]
        if snapshot.mode is Mode.COMMAND:
            parts.append(self.input_text(snapshot))
        parts.append(self.help_text(snapshot))
        return Group(*parts)

    # --- Renderer protocol ----------------------------------------------

    def render(self, snapshot: Snapshot) -> None:
        if self.clear and self.console.is_terminal:
            self.console.clear()
        self.console.print(self.build(snapshot))
