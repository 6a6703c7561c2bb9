"""Action handlers and the registry that binds them to menu nodes.

Handlers are never stored inside the tree. The registry maps a node id to an
``Action`` and hands the caller's state to the handler only at call time.

A handler has the signature ``handler(state, parameter) -> Optional[str]``:

- ``state`` is the mutable application state owned by the embedding app
- ``parameter`` is the trimmed remainder of the command line, or ``None``
  when nothing followed the command token

Immediate handlers run on the control thread inside the current tick.
Deferred handlers run on the background execution context and report their
message back through the completion channel.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from .errors import UnknownNodeError

Handler = Callable[[Any, Optional[str]], Any]


class ActionKind(str, Enum):
    IMMEDIATE = "immediate"
    DEFERRED = "deferred"


def infer_kind(handler: Handler) -> ActionKind:
    """Coroutine functions are deferred, every other callable is immediate."""
    target = getattr(handler, "__call__", None)
    if inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(target):
        return ActionKind.DEFERRED
    return ActionKind.IMMEDIATE


@dataclass(frozen=True)
class Action:
    handler: Handler
    kind: ActionKind = ActionKind.IMMEDIATE

    @classmethod
    def immediate(cls, handler: Handler) -> "Action":
        return cls(handler, ActionKind.IMMEDIATE)

    @classmethod
    def deferred(cls, handler: Handler) -> "Action":
        return cls(handler, ActionKind.DEFERRED)

    @classmethod
    def from_handler(cls, handler: Handler, kind: Optional[ActionKind] = None) -> "Action":
        if not callable(handler):
            raise TypeError(f"Action handler must be callable, got {type(handler).__name__}")
        return cls(handler, ActionKind(kind) if kind is not None else infer_kind(handler))

    @property
    def is_deferred(self) -> bool:
        return self.kind is ActionKind.DEFERRED


class ActionRegistry:
    """Node id -> Action lookup, populated while the tree is built."""

    def __init__(self) -> None:
        self._actions: Dict[int, Action] = {}

    def register(self, node_id: int, action: Action) -> None:
        self._actions[node_id] = action

    def get(self, node_id: int) -> Action:
        try:
            return self._actions[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def has_action(self, node_id: int) -> bool:
        return node_id in self._actions

    def items(self) -> Iterator[Tuple[int, Action]]:
        return iter(self._actions.items())

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._actions
