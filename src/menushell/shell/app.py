"""Textual front end for a menu Application.

Layout:
- Sidebar: brand + current menu + key hints
- Detail view: status line (breadcrumb, mode) + output window
- Control panel: command input

The shell never interprets input itself. Submitted lines and Scroll-mode
keys are fed to the Application on textual's event loop, which is the
control thread; a timer ticks the Application to drain deferred results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Key as KeyEvent
from textual.timer import Timer
from textual.widgets import Footer, Header, Input, Static

from ..input import Key, Line
from ..modes import Mode
from ..rendering.rich import RichRenderer
from ..session import Snapshot
from .detail_view import DetailView
from .diagnostics import DiagnosticsManager

if TYPE_CHECKING:
    from ..application import Application


class ShellRenderer:
    """Renderer that draws snapshots into the shell's widgets."""

    def __init__(self, shell: "MenuShell"):
        self.shell = shell
        self.frames = 0

    def render(self, snapshot: Snapshot) -> None:
        self.frames += 1
        self.shell.show_snapshot(snapshot)


class MenuShell(App):
    """Interactive shell around an Application."""

    CSS = """
    #body { height: 1fr; }
    #sidebar { width: 40%; min-width: 30; border-right: solid $primary; }
    #brand { padding: 0 1; text-style: bold; }
    #menu { height: 1fr; }
    #hint { color: $text-muted; padding: 0 1; }
    #detail { width: 1fr; }
    #title { height: auto; padding: 0 1; }
    #output { height: 1fr; }
    #help { height: auto; padding: 0 1; }
    """

    BINDINGS = [
        Binding("tab", "switch_mode", "Switch mode", priority=True),
        Binding("f12", "export_diagnostics", "Diagnostics"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, application: "Application", brand: Optional[str] = None, **kwargs):
        """Initialize the shell.

        Args:
            application: The Application to drive
            brand: Sidebar brand text (defaults to the root menu title)
            **kwargs: Additional App arguments
        """
        super().__init__(**kwargs)
        self.application = application
        self.brand = brand or f"menushell • {application.config.title}"
        self.rich_renderer = RichRenderer(clear=False)
        self.shell_renderer = ShellRenderer(self)
        self.diagnostics = DiagnosticsManager(application)

        # Widgets (set in compose)
        self.menu_view: Optional[Static] = None
        self.detail_view: Optional[DetailView] = None
        self.help_line: Optional[Static] = None
        self.control_input: Optional[Input] = None

        self._tick_timer: Optional[Timer] = None

    def compose(self) -> ComposeResult:
        yield Header(id="header")

        with Horizontal(id="body"):
            with Vertical(id="sidebar"):
                yield Static(self.brand, id="brand")
                self.menu_view = Static("", id="menu")
                yield self.menu_view
                yield Static("Tab: mode • F12: diagnostics • Ctrl+Q: quit", id="hint")

            with Vertical(id="right-panel"):
                self.detail_view = DetailView(initial_status=self.application.config.title)
                yield self.detail_view
                self.help_line = Static("", id="help")
                yield self.help_line

        self.control_input = Input(placeholder="Command [param] - Enter to run", id="control-input")
        yield self.control_input
        yield Footer(id="footer")

    async def on_mount(self) -> None:
        self.title = self.application.config.title
        self.application.renderer = self.shell_renderer
        self.application.render(force=True)
        self._tick_timer = self.set_interval(self.application.config.tick_interval, self._on_tick)
        if self.control_input:
            self.control_input.focus()

    def on_unmount(self) -> None:
        self.application.stop()

    # --- drawing ------------------------------------------------------

    def show_snapshot(self, snapshot: Snapshot) -> None:
        """Draw a snapshot using the rich renderer's building blocks."""
        rich = self.rich_renderer
        if self.menu_view:
            self.menu_view.update(rich.menu_panel(snapshot))
        if self.detail_view:
            self.detail_view.update_status(rich.status_text(snapshot))
            self.detail_view.update_output(rich.output_panel(snapshot))
        if self.help_line:
            self.help_line.update(rich.help_text(snapshot))

    # --- input --------------------------------------------------------

    def _on_tick(self) -> None:
        if not self.application.tick():
            self.exit()

    def _after_input(self) -> None:
        if not self.application.running:
            self.exit()
            return
        self.application.render()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input is not self.control_input:
            return
        text = event.value
        event.input.value = ""
        self.application.feed(Line(text))
        self._after_input()

    def on_key(self, event: KeyEvent) -> None:
        self.diagnostics.record_key_event(event.key, event.character)
        key = Key(event.key, event.character)
        if self.application.mode is Mode.SCROLL:
            self.application.feed(key)
            event.stop()
            self._after_input()
        elif event.key in ("up", "down") and self.control_input is not None:
            self.application.feed(key)
            recalled = self.application.session.input_buffer
            self.control_input.value = recalled
            self.control_input.cursor_position = len(recalled)
            event.stop()

    def action_switch_mode(self) -> None:
        self.application.feed(Key(self.application.config.mode_switch_token))
        scrolling = self.application.mode is Mode.SCROLL
        if self.control_input:
            self.control_input.disabled = scrolling
            if not scrolling:
                self.control_input.focus()
        self._after_input()

    def action_export_diagnostics(self) -> None:
        path = self.diagnostics.export_to_file()
        if path:
            self.application.add_output(f"Diagnostics saved → {path}", source="shell")
        else:
            self.application.add_output("Diagnostics export failed", source="shell")
        self._after_input()
