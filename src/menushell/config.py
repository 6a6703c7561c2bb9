"""Configuration recognised by the menu core.

Only reserved tokens, the Scroll-mode keymap and a handful of sizes live
here; how input is read and output drawn is up to the front end.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Tuple

from .errors import ConfigError
from .intents import ScrollDirection

FOLLOW_TOGGLE = "follow"

DEFAULT_SCROLL_KEYS: Dict[str, str] = {
    "j": ScrollDirection.DOWN.value,
    "k": ScrollDirection.UP.value,
    "d": ScrollDirection.PAGE_DOWN.value,
    "u": ScrollDirection.PAGE_UP.value,
    "gg": ScrollDirection.TOP.value,
    "G": ScrollDirection.BOTTOM.value,
    "down": ScrollDirection.DOWN.value,
    "up": ScrollDirection.UP.value,
    "pagedown": ScrollDirection.PAGE_DOWN.value,
    "pageup": ScrollDirection.PAGE_UP.value,
    "home": ScrollDirection.TOP.value,
    "end": ScrollDirection.BOTTOM.value,
    "ctrl+a": FOLLOW_TOGGLE,
}

BINDING_FIRST = "binding"
ALIAS_FIRST = "alias"


@dataclass(frozen=True)
class MenuConfig:
    """Reserved tokens, keymap and sizes for one application run."""

    back_token: str = "b"
    quit_token: str = "q"
    mode_switch_token: str = "tab"
    scroll_keys: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SCROLL_KEYS))
    page_size: int = 10
    output_window: int = 20
    history_size: int = 100
    tick_interval: float = 0.1
    binding_precedence: str = BINDING_FIRST
    title: str = "Menu"

    def __post_init__(self) -> None:
        self.validate()

    @property
    def reserved_tokens(self) -> Tuple[str, ...]:
        return (self.back_token, self.quit_token, self.mode_switch_token)

    def validate(self) -> None:
        reserved = self.reserved_tokens
        if any(not token or token != token.strip() for token in reserved):
            raise ConfigError(f"Reserved tokens must be non-empty words: {reserved!r}")
        if len(set(reserved)) != len(reserved):
            raise ConfigError(f"Reserved tokens must be distinct: {reserved!r}")
        if self.mode_switch_token in self.scroll_keys:
            raise ConfigError(
                f"Scroll key '{self.mode_switch_token}' shadows the mode switch token"
            )
        known = {d.value for d in ScrollDirection} | {FOLLOW_TOGGLE}
        for token, action in self.scroll_keys.items():
            if action not in known:
                raise ConfigError(f"Unknown scroll action {action!r} for key '{token}'")
        if self.binding_precedence not in (BINDING_FIRST, ALIAS_FIRST):
            raise ConfigError(f"Unknown binding precedence {self.binding_precedence!r}")
        if self.page_size < 1 or self.output_window < 1 or self.history_size < 1:
            raise ConfigError("page_size, output_window and history_size must be positive")

    def with_overrides(self, **overrides) -> "MenuConfig":
        """Return a validated copy with ``overrides`` applied."""
        return replace(self, **overrides)
