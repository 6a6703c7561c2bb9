"""Demo menu: a counter with a settings submenu and a log generator.

Used by the ``menushell-demo`` command and by the tests as a realistic
tree with immediate actions, a deferred action and a tick handler.
"""

from __future__ import annotations

import asyncio
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from .tree import MenuTree

LOG_LINES_PER_TICK = 5


@dataclass
class DemoState:
    count: int = 0
    step: int = 1
    backlog: Deque[str] = field(default_factory=deque)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


def _amount(parameter: Optional[str], default: int) -> int:
    if parameter is None:
        return default
    try:
        return int(parameter)
    except ValueError:
        raise ValueError(f"not a number: {parameter}") from None


def increment(state: DemoState, parameter: Optional[str]) -> str:
    amount = _amount(parameter, state.step)
    with state.lock:
        state.count += amount
        return f"Counter: {state.count}"


def decrement(state: DemoState, parameter: Optional[str]) -> str:
    amount = _amount(parameter, state.step)
    with state.lock:
        state.count -= amount
        return f"Counter: {state.count}"


async def slow_increment(state: DemoState, parameter: Optional[str]) -> str:
    """Increment by the step after ``parameter`` seconds (default 1)."""
    try:
        delay = float(parameter) if parameter is not None else 1.0
    except ValueError:
        raise ValueError(f"not a delay: {parameter}") from None
    await asyncio.sleep(max(delay, 0.0))
    with state.lock:
        state.count += state.step
        return f"Counter: {state.count} (after {delay:g}s)"


def show_settings(state: DemoState, parameter: Optional[str]) -> str:
    return f"count={state.count} step={state.step}"


def set_step(state: DemoState, parameter: Optional[str]) -> str:
    if parameter is None:
        return f"Step: {state.step}"
    step = _amount(parameter, state.step)
    if step <= 0:
        raise ValueError("step must be positive")
    state.step = step
    return f"Step set to {step}"


def reset(state: DemoState, parameter: Optional[str]) -> str:
    with state.lock:
        state.count = 0
    state.step = 1
    return "Counter reset"


def generate_logs(state: DemoState, parameter: Optional[str]) -> str:
    count = _amount(parameter, 50)
    for index in range(1, count + 1):
        state.backlog.append(f"log line {index}/{count}")
    return f"Generating {count} log lines"


def emit_backlog(state: DemoState, delta: float) -> List[str]:
    """Tick handler: release a few queued log lines per tick."""
    lines: List[str] = []
    while state.backlog and len(lines) < LOG_LINES_PER_TICK:
        lines.append(state.backlog.popleft())
    return lines


def build_demo_tree(title: str = "Demo") -> MenuTree:
    tree = MenuTree(title)
    root = tree.root_id
    tree.add_action(root, "Increment", increment, binding="i", alias="inc")
    tree.add_action(root, "Decrement", decrement, binding="d", alias="dec")
    tree.add_action(root, "Slow increment", slow_increment, binding="s", alias="slow")
    tree.add_action(root, "Generate logs", generate_logs, binding="l", alias="logs")

    settings = tree.add_submenu(root, "Settings", binding="t", alias="settings", title="Settings")
    tree.add_action(settings, "Show", show_settings, binding="v", alias="show")
    tree.add_action(settings, "Step", set_step, binding="p", alias="step")
    tree.add_action(settings, "Reset", reset, binding="r", alias="reset")
    return tree
