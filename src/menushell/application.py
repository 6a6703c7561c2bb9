"""Application loop - the composition root of the menu core.

One ``tick()``:

1. polls the input source for at most one raw input unit and drains every
   finished deferred result, neither waiting on the other
2. routes input through ModeController -> InputInterpreter to an Intent
3. applies the Intent to the navigation path, the scroll cursor or the
   ActionDispatcher
4. builds a Snapshot and hands it to the renderer when it changed

Quick Start
-----------
```python
tree = MenuTree("Counter")
tree.add_action(tree.root_id, "Increment", increment, binding="i", alias="inc")
app = Application(tree, CounterState())
app.run(UIMode.TEXT)
```
"""

from __future__ import annotations

import sys
import time
from enum import Enum
from typing import Any, Callable, Iterable, Optional, TextIO, Union

from .config import MenuConfig
from .dispatcher import ActionDispatcher, ExecutionContext, Outcome
from .history import OutputEntry
from .input import EndOfInput, InputSource, Key, Line, QueueInputSource, RawInput, StreamInputSource
from .intents import (
    Ignored,
    Intent,
    Invoke,
    NavigateBack,
    NavigateInto,
    Quit,
    ScrollDirection,
    ScrollMove,
    SwitchMode,
    ToggleFollow,
    Unresolved,
)
from .interpreter import InputInterpreter
from .log_manager import LogManager
from .modes import Mode, ModeController
from .rendering.base import Renderer
from .rendering.plain import PlainRenderer
from .session import Session, Snapshot
from .tree import MenuTree

TickHandler = Callable[[Any, float], Union[None, str, Iterable[str]]]


class UIMode(str, Enum):
    """Front end used by ``Application.run``."""

    TUI = "tui"
    TEXT = "text"


class Application:
    """Owns the session and drives input, actions and rendering.

    The tree is validated against the configured reserved tokens and frozen
    here, so a structurally broken menu raises before anything runs.
    """

    def __init__(
        self,
        tree: MenuTree,
        state: Any,
        config: Optional[MenuConfig] = None,
        renderer: Optional[Renderer] = None,
        input_source: Optional[InputSource] = None,
        executor: Optional[ExecutionContext] = None,
        log_manager: Optional[LogManager] = None,
        tick_handler: Optional[TickHandler] = None,
    ):
        self.config = config or MenuConfig(title=tree.node(tree.root_id).display_title)
        tree.validate(self.config.reserved_tokens)
        tree.freeze()

        self.tree = tree
        self.state = state
        self.log_manager = log_manager or LogManager()
        self.session = Session(tree, history_size=self.config.history_size)
        self.interpreter = InputInterpreter(
            tree, self.config, debug_logger=self.log_manager.debug_logger
        )
        self.modes = ModeController(self.interpreter, on_change=self._on_mode_change)
        self.dispatcher = ActionDispatcher(
            tree.actions,
            self.session.output,
            executor=executor,
            log_manager=self.log_manager,
        )
        self.renderer = renderer
        self.input_source: InputSource = input_source or QueueInputSource()
        self.tick_handler = tick_handler

        self._last_tick = time.monotonic()
        self._last_snapshot: Optional[Snapshot] = None

    # --- state accessors ------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self.modes.mode

    @property
    def running(self) -> bool:
        return self.session.running

    @property
    def output(self):
        return self.session.output

    @property
    def current_node(self) -> int:
        return self.session.current_node

    def add_output(self, message: str, source: Optional[str] = None) -> OutputEntry:
        """Append a message from the embedding application (control thread only)."""
        return self.session.output.append(message, source=source)

    # --- input ----------------------------------------------------------

    def feed(self, raw: Union[RawInput, str]) -> Optional[Intent]:
        """Process one raw input unit right now; strings are lines.

        Returns the intent that was applied, or ``None`` when the input only
        edited the command line buffer.
        """
        if not self.running:
            return None
        if isinstance(raw, str):
            raw = Line(raw)
        if isinstance(raw, EndOfInput):
            self.log_manager.add("events", "input exhausted")
            self.stop()
            return Quit()
        if isinstance(raw, Key):
            return self._handle_key(raw)
        return self._handle_line(raw.text)

    def _handle_line(self, text: str) -> Intent:
        if self.mode is Mode.COMMAND:
            self.session.input_buffer = ""
            command = text.strip()
            if command:
                self.session.commands.add(command)
            else:
                self.session.commands.exit_browsing()
        intent = self.modes.route(text, self.session.current_node)
        self.apply(intent)
        return intent

    def _handle_key(self, key: Key) -> Optional[Intent]:
        session = self.session
        if key.key == self.config.mode_switch_token or self.mode is Mode.SCROLL:
            intent = self.modes.route(key.token, session.current_node)
            self.apply(intent)
            return intent

        name = key.key
        if name == "enter":
            line = session.input_buffer
            session.input_buffer = ""
            session.commands.exit_browsing()
            return self._handle_line(line)
        if name == "backspace":
            session.input_buffer = session.input_buffer[:-1]
        elif name == "escape":
            session.input_buffer = ""
            session.commands.exit_browsing()
        elif name == "up":
            recalled = session.commands.up()
            if recalled is not None:
                session.input_buffer = recalled
        elif name == "down":
            session.input_buffer = session.commands.down() or ""
        elif key.printable is not None:
            session.input_buffer += key.printable
        return None

    # --- intents --------------------------------------------------------

    def apply(self, intent: Intent) -> Optional[Outcome]:
        """Apply one intent to the session; only Invoke yields an Outcome."""
        session = self.session
        if isinstance(intent, NavigateInto):
            session.path.push(intent.node_id)
            self.log_manager.add("events", f"enter '{self.tree.node(intent.node_id).label}'")
        elif isinstance(intent, NavigateBack):
            left = session.path.pop()
            if left is not None:
                self.log_manager.add("events", f"back from '{self.tree.node(left).label}'")
        elif isinstance(intent, Quit):
            self.log_manager.add("events", "quit")
            self.stop()
        elif isinstance(intent, ScrollMove):
            self._scroll(intent.direction)
        elif isinstance(intent, ToggleFollow):
            if session.follow:
                session.output.jump_bottom()
            session.follow = not session.follow
        elif isinstance(intent, Invoke):
            node = self.tree.node(intent.node_id)
            return self.dispatcher.invoke(node, self.state, intent.parameter)
        elif isinstance(intent, Unresolved):
            session.output.append(intent.hint or f"unknown command: {intent.raw}")
        elif isinstance(intent, (SwitchMode, Ignored)):
            pass
        return None

    def _scroll(self, direction: ScrollDirection) -> None:
        output = self.session.output
        page = self.config.page_size
        if self.session.follow and direction in (ScrollDirection.UP, ScrollDirection.PAGE_UP):
            output.jump_bottom()
        if direction is ScrollDirection.UP:
            output.scroll(-1)
        elif direction is ScrollDirection.DOWN:
            output.scroll(1)
        elif direction is ScrollDirection.PAGE_UP:
            output.scroll(-page)
        elif direction is ScrollDirection.PAGE_DOWN:
            output.scroll(page)
        elif direction is ScrollDirection.TOP:
            output.jump_top()
        elif direction is ScrollDirection.BOTTOM:
            output.jump_bottom()

        if direction is ScrollDirection.BOTTOM:
            self.session.follow = True
        elif direction in (ScrollDirection.TOP, ScrollDirection.UP, ScrollDirection.PAGE_UP):
            self.session.follow = False

    def _on_mode_change(self, previous: Mode, current: Mode) -> None:
        self.log_manager.add("events", f"mode {previous.value} -> {current.value}")

    # --- loop -----------------------------------------------------------

    def tick(self) -> bool:
        """Run one loop iteration; returns whether the loop should continue."""
        if not self.running:
            return False

        raw = self.input_source.poll()
        if raw is not None:
            self.feed(raw)
        if not self.running:
            return False

        self.dispatcher.drain()
        self._run_tick_handler()
        self.render()
        return self.running

    def _run_tick_handler(self) -> None:
        now = time.monotonic()
        delta = now - self._last_tick
        self._last_tick = now
        if self.tick_handler is None:
            return
        try:
            produced = self.tick_handler(self.state, delta)
        except Exception as exc:
            self.log_manager.add("errors", f"tick handler failed: {exc!r}")
            self.session.output.append(f"Error: {exc}", source="tick", is_error=True)
            return
        if produced is None:
            return
        if isinstance(produced, str):
            produced = [produced]
        for message in produced:
            self.session.output.append(message)

    def snapshot(self) -> Snapshot:
        cfg = self.config
        return self.session.snapshot(
            self.mode,
            cfg.output_window,
            back_token=cfg.back_token,
            quit_token=cfg.quit_token,
            mode_switch_token=cfg.mode_switch_token,
            pending_tasks=len(self.dispatcher.pending),
        )

    def render(self, force: bool = False) -> Optional[Snapshot]:
        """Hand the current snapshot to the renderer if it changed."""
        if self.renderer is None:
            return None
        fresh = self.session.output.has_new_output()
        snapshot = self.snapshot()
        if force or fresh or snapshot != self._last_snapshot:
            self._last_snapshot = snapshot
            self.renderer.render(snapshot)
        return snapshot

    def stop(self) -> None:
        if not self.session.running:
            return
        self.session.running = False
        stopper = getattr(self.input_source, "stop", None)
        if callable(stopper):
            stopper()
        self.dispatcher.shutdown(wait=False)

    def run_loop(self) -> None:
        """Block in the tick loop until a Quit at the root (or end of input)."""
        starter = getattr(self.input_source, "start", None)
        if callable(starter):
            starter()
        self.render(force=True)
        try:
            while self.tick():
                if not self.input_source.pending() and not self.dispatcher.has_completions():
                    time.sleep(self.config.tick_interval)
        finally:
            self.stop()

    def run(
        self,
        ui_mode: UIMode = UIMode.TUI,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        """Run with the chosen front end until the user quits."""
        if UIMode(ui_mode) is UIMode.TEXT:
            self.run_text(stdin=stdin, stdout=stdout)
        else:
            from .shell.app import MenuShell

            MenuShell(self).run()

    def run_text(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        """Plain linear front end: lines from ``stdin``, text to ``stdout``."""
        self.input_source = StreamInputSource(
            stdin or sys.stdin, debug_logger=self.log_manager.debug_logger
        )
        self.renderer = PlainRenderer(stdout or sys.stdout)
        self.run_loop()
