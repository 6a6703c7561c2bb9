"""Structured results of interpreting one raw input unit.

The interpreter turns every key or line into exactly one of these; the
application loop is the only place that acts on them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ScrollDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class NavigateInto:
    node_id: int


@dataclass(frozen=True)
class NavigateBack:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class SwitchMode:
    pass


@dataclass(frozen=True)
class ScrollMove:
    direction: ScrollDirection


@dataclass(frozen=True)
class ToggleFollow:
    """Turn automatic tracking of the newest output on or off."""


@dataclass(frozen=True)
class Invoke:
    node_id: int
    parameter: Optional[str] = None


@dataclass(frozen=True)
class Unresolved:
    """Input that matched nothing in Command mode.

    ``hint`` replaces the generic "unknown command" message when the
    interpreter knows why the input was refused (e.g. quit outside the root).
    """

    raw: str
    hint: Optional[str] = None


@dataclass(frozen=True)
class Ignored:
    """Input that is silently dropped (unknown Scroll-mode keys, chord prefixes)."""

    raw: str


Intent = Union[
    NavigateInto,
    NavigateBack,
    Quit,
    SwitchMode,
    ScrollMove,
    ToggleFollow,
    Invoke,
    Unresolved,
    Ignored,
]
