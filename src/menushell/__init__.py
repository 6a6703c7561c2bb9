"""menushell - menu-driven terminal control core.

A hierarchical menu of commands, a two-mode input model (Command and
Scroll), immediate and deferred actions, and a scrollable output history,
drawn by a pluggable renderer.

Quick Start
-----------
```python
from menushell import Application, MenuTree, UIMode

def increment(state, param):
    state["count"] += int(param or 1)
    return f"Counter: {state['count']}"

tree = MenuTree("Counter")
tree.add_action(tree.root_id, "Increment", increment, binding="i", alias="inc")
Application(tree, {"count": 0}).run(UIMode.TEXT)
```

The Textual shell lives in ``menushell.shell`` and is imported on demand.
"""

from .actions import Action, ActionKind, ActionRegistry
from .application import Application, UIMode
from .config import MenuConfig
from .dispatcher import ActionDispatcher, BackgroundExecutor, Outcome
from .errors import (
    ConfigError,
    DuplicateTokenError,
    FrozenTreeError,
    InvalidTokenError,
    MenuShellError,
    MixedNodeError,
    ReservedTokenError,
    StructuralError,
    TaskRejectedError,
    UnknownNodeError,
)
from .history import CommandHistory, OutputEntry, OutputHistory
from .input import EndOfInput, Key, Line, QueueInputSource, StreamInputSource
from .log_manager import LogManager
from .modes import Mode, ModeController
from .session import Session, Snapshot
from .tree import ROOT_ID, MenuTree

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionKind",
    "ActionRegistry",
    "ActionDispatcher",
    "Application",
    "BackgroundExecutor",
    "CommandHistory",
    "ConfigError",
    "DuplicateTokenError",
    "EndOfInput",
    "FrozenTreeError",
    "InvalidTokenError",
    "Key",
    "Line",
    "LogManager",
    "MenuConfig",
    "MenuShellError",
    "MenuTree",
    "MixedNodeError",
    "Mode",
    "ModeController",
    "Outcome",
    "OutputEntry",
    "OutputHistory",
    "QueueInputSource",
    "ROOT_ID",
    "ReservedTokenError",
    "Session",
    "Snapshot",
    "StreamInputSource",
    "StructuralError",
    "TaskRejectedError",
    "UIMode",
    "UnknownNodeError",
]
