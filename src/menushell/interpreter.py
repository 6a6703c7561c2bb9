"""InputInterpreter - turns one raw input unit into exactly one Intent.

Command mode works on whole lines: the first whitespace-delimited word is the
command token, the trimmed remainder (if any) is the parameter. Reserved
tokens (mode switch, back, quit) are checked before the current menu's
children.

Scroll mode works on single keys through the configured keyword table.
Multi-key entries such as ``gg`` are matched by holding a prefix key until
the next one arrives.
"""

from __future__ import annotations

from typing import Callable, Optional

from .config import FOLLOW_TOGGLE, MenuConfig
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
from .tree import MenuTree


class InputInterpreter:
    def __init__(
        self,
        tree: MenuTree,
        config: Optional[MenuConfig] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ):
        self.tree = tree
        self.config = config or MenuConfig()
        self._debug_logger = debug_logger or (lambda msg: None)
        self._chord = ""

    # --- Command mode ---------------------------------------------------

    def interpret_command(self, text: str, node_id: int) -> Intent:
        """Interpret a submitted line against the children of ``node_id``."""
        line = text.strip()
        if not line:
            return Ignored(text)

        parts = line.split(None, 1)
        token = parts[0]
        parameter = parts[1].strip() if len(parts) > 1 else None
        if not parameter:
            parameter = None

        cfg = self.config
        if token == cfg.mode_switch_token:
            return SwitchMode()
        if token == cfg.back_token:
            return NavigateBack()
        if token == cfg.quit_token:
            if self.tree.is_root(node_id):
                return Quit()
            return Unresolved(
                line,
                hint=(
                    f"Use '{cfg.back_token}' to return to the previous menu, "
                    f"or go to the root menu to quit"
                ),
            )

        if not self.tree.node(node_id).children:
            return Unresolved(line)

        child_id = self.tree.resolve(node_id, token, cfg.binding_precedence)
        if child_id is None:
            self._debug_logger(f"Unresolved token {token!r} at node {node_id}")
            return Unresolved(line)

        child = self.tree.node(child_id)
        if child.is_submenu:
            return NavigateInto(child_id)
        return Invoke(child_id, parameter)

    # --- Scroll mode ----------------------------------------------------

    def interpret_scroll(self, token: str) -> Intent:
        """Interpret one key (or a one-word line) through the scroll keymap."""
        token = token.strip() if len(token) > 1 else token
        if token == self.config.mode_switch_token:
            self.reset_chord()
            return SwitchMode()

        keys = self.config.scroll_keys
        if self._chord:
            candidate = self._chord + token
            self._chord = ""
            if candidate in keys:
                return self._scroll_intent(keys[candidate])
            if self._is_prefix(candidate):
                self._chord = candidate
                return Ignored(token)

        if token in keys:
            return self._scroll_intent(keys[token])
        if self._is_prefix(token):
            self._chord = token
        return Ignored(token)

    def reset_chord(self) -> None:
        self._chord = ""

    @property
    def pending_chord(self) -> str:
        return self._chord

    def _is_prefix(self, partial: str) -> bool:
        return any(k != partial and k.startswith(partial) for k in self.config.scroll_keys)

    @staticmethod
    def _scroll_intent(action: str) -> Intent:
        if action == FOLLOW_TOGGLE:
            return ToggleFollow()
        return ScrollMove(ScrollDirection(action))
