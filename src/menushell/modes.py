"""ModeController - the Command/Scroll state machine.

The controller is the only writer of the current mode. It picks which of
the interpreter's rule sets handles a raw input unit and flips state when
the resulting intent is a mode switch.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from .intents import Intent, SwitchMode
from .interpreter import InputInterpreter


class Mode(str, Enum):
    """Application mode for the duration of one run."""

    COMMAND = "command"
    SCROLL = "scroll"

    @property
    def display_name(self) -> str:
        return f"{self.name} MODE"


class ModeController:
    def __init__(
        self,
        interpreter: InputInterpreter,
        initial: Mode = Mode.COMMAND,
        on_change: Optional[Callable[[Mode, Mode], None]] = None,
    ):
        self.interpreter = interpreter
        self._mode = initial
        self._on_change = on_change

    @property
    def mode(self) -> Mode:
        return self._mode

    def route(self, raw: str, node_id: int) -> Intent:
        """Interpret ``raw`` with the rules of the active mode.

        In Command mode ``raw`` is a submitted line; in Scroll mode it is a
        key name or a one-word line. A ``SwitchMode`` result is applied here
        before it is returned.
        """
        if self._mode is Mode.COMMAND:
            intent = self.interpreter.interpret_command(raw, node_id)
        else:
            intent = self.interpreter.interpret_scroll(raw)
        if isinstance(intent, SwitchMode):
            self.toggle()
        return intent

    def toggle(self) -> Mode:
        previous = self._mode
        self._mode = Mode.SCROLL if previous is Mode.COMMAND else Mode.COMMAND
        self.interpreter.reset_chord()
        if self._on_change:
            self._on_change(previous, self._mode)
        return self._mode
