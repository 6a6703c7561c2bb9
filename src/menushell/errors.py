"""Exception types raised by the menu core.

Structural errors are raised while a menu tree is being built or validated
and mean the application must not start. Everything that can go wrong while
the loop is running (unknown commands, failing handlers) is reported as an
output entry instead of an exception.
"""

from typing import Optional


class MenuShellError(Exception):
    """Base class for all menushell errors."""


class StructuralError(MenuShellError):
    """The menu tree violates a construction rule."""


class UnknownNodeError(StructuralError):
    def __init__(self, node_id: int):
        super().__init__(f"Unknown menu node id {node_id!r}")
        self.node_id = node_id


class DuplicateTokenError(StructuralError):
    """Two siblings share a binding or an alias."""

    def __init__(self, token: str, menu_title: str):
        super().__init__(f"Duplicate command key '{token}' in menu '{menu_title}'")
        self.token = token
        self.menu_title = menu_title


class ReservedTokenError(StructuralError):
    """A binding or alias collides with a reserved token (back, quit, mode switch)."""

    def __init__(self, token: str, menu_title: str):
        super().__init__(f"Reserved command key '{token}' in menu '{menu_title}'")
        self.token = token
        self.menu_title = menu_title


class MixedNodeError(StructuralError):
    """A node would carry both children and an action."""

    def __init__(self, label: str):
        super().__init__(f"Menu node '{label}' cannot have both children and an action")
        self.label = label


class InvalidTokenError(StructuralError):
    def __init__(self, token: str, reason: str):
        super().__init__(f"Invalid command token {token!r}: {reason}")
        self.token = token
        self.reason = reason


class FrozenTreeError(StructuralError):
    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation}: menu tree is frozen once the application starts")
        self.operation = operation


class ConfigError(MenuShellError):
    """Invalid reserved-token or keymap configuration."""


class TaskRejectedError(MenuShellError):
    """The execution context refused a deferred action."""

    def __init__(self, label: str, reason: Optional[str] = None):
        message = f"Deferred action '{label}' was rejected"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.label = label
        self.reason = reason
