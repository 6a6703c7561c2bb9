"""MenuTree - arena of menu nodes addressed by integer ids.

Nodes refer to their parent by id, never by object, so back-navigation is a
dictionary lookup and there is no ownership cycle. The tree is built once
before the application starts and frozen afterwards.

Quick Start
-----------
```python
tree = MenuTree("Main")
tree.add_action(tree.root_id, "Increment", inc, binding="i", alias="inc")
settings = tree.add_submenu(tree.root_id, "Settings", binding="s")
tree.add_action(settings, "Reset", reset, binding="r")
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .actions import Action, ActionKind, ActionRegistry, Handler
from .config import ALIAS_FIRST, BINDING_FIRST
from .errors import (
    DuplicateTokenError,
    FrozenTreeError,
    InvalidTokenError,
    MixedNodeError,
    ReservedTokenError,
    UnknownNodeError,
)

ROOT_ID = 0


@dataclass
class MenuNode:
    """One entry of the menu.

    A node is either a submenu (may have children) or a leaf bound to an
    action in the registry, never both.
    """

    id: int
    label: str
    binding: Optional[str] = None
    alias: Optional[str] = None
    parent: Optional[int] = None
    title: Optional[str] = None
    children: List[int] = field(default_factory=list)
    has_action: bool = False

    @property
    def is_submenu(self) -> bool:
        return not self.has_action

    @property
    def display_title(self) -> str:
        return self.title or self.label

    def tokens(self) -> List[str]:
        return [t for t in (self.binding, self.alias) if t is not None]


@dataclass(frozen=True)
class ChildRef:
    """Read-only view of a child node, as listed for display."""

    id: int
    label: str
    binding: Optional[str]
    alias: Optional[str]
    is_submenu: bool
    kind: Optional[ActionKind] = None

    @property
    def key(self) -> str:
        return self.binding if self.binding is not None else (self.alias or "")


class MenuTree:
    """Hierarchical menu structure with a separate action registry."""

    def __init__(self, title: str = "Menu"):
        root = MenuNode(id=ROOT_ID, label=title, title=title)
        self._nodes: List[MenuNode] = [root]
        self.actions = ActionRegistry()
        self._frozen = False

    # --- building -------------------------------------------------------

    @property
    def root_id(self) -> int:
        return ROOT_ID

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def add_submenu(
        self,
        parent_id: int,
        label: str,
        binding: Optional[str] = None,
        alias: Optional[str] = None,
        title: Optional[str] = None,
    ) -> int:
        """Add a submenu under ``parent_id`` and return its id."""
        node = self._add_node(parent_id, label, binding, alias, "add a submenu")
        node.title = title
        return node.id

    def add_action(
        self,
        parent_id: int,
        label: str,
        handler: Handler,
        binding: Optional[str] = None,
        alias: Optional[str] = None,
        kind: Optional[ActionKind] = None,
    ) -> int:
        """Add a leaf bound to ``handler`` under ``parent_id`` and return its id.

        ``kind`` defaults to Deferred for coroutine functions and Immediate
        for everything else.
        """
        action = Action.from_handler(handler, kind)
        node = self._add_node(parent_id, label, binding, alias, "add an action")
        node.has_action = True
        self.actions.register(node.id, action)
        return node.id

    def _add_node(
        self,
        parent_id: int,
        label: str,
        binding: Optional[str],
        alias: Optional[str],
        operation: str,
    ) -> MenuNode:
        if self._frozen:
            raise FrozenTreeError(operation)
        parent = self.node(parent_id)
        if parent.has_action:
            raise MixedNodeError(parent.label)
        _check_tokens(binding, alias)
        for sibling_id in parent.children:
            sibling = self._nodes[sibling_id]
            if binding is not None and sibling.binding == binding:
                raise DuplicateTokenError(binding, parent.display_title)
            if alias is not None and sibling.alias == alias:
                raise DuplicateTokenError(alias, parent.display_title)
        node = MenuNode(
            id=len(self._nodes),
            label=label,
            binding=binding,
            alias=alias,
            parent=parent_id,
        )
        self._nodes.append(node)
        parent.children.append(node.id)
        return node

    # --- queries --------------------------------------------------------

    def node(self, node_id: int) -> MenuNode:
        if not isinstance(node_id, int) or node_id < 0 or node_id >= len(self._nodes):
            raise UnknownNodeError(node_id)
        return self._nodes[node_id]

    def is_root(self, node_id: int) -> bool:
        return self.node(node_id).parent is None

    def parent_of(self, node_id: int) -> Optional[int]:
        return self.node(node_id).parent

    def children_of(self, node_id: int) -> List[ChildRef]:
        return [self._child_ref(child_id) for child_id in self.node(node_id).children]

    def _child_ref(self, node_id: int) -> ChildRef:
        node = self._nodes[node_id]
        kind = self.actions.get(node_id).kind if node.has_action else None
        return ChildRef(
            id=node.id,
            label=node.label,
            binding=node.binding,
            alias=node.alias,
            is_submenu=node.is_submenu,
            kind=kind,
        )

    def resolve(self, parent_id: int, token: str, precedence: str = BINDING_FIRST) -> Optional[int]:
        """Resolve ``token`` against the children of ``parent_id``.

        Bindings are checked before aliases (or the reverse when
        ``precedence`` is ``"alias"``); the first sibling that matches wins.
        Returns ``None`` when nothing matches.
        """
        children = [self._nodes[c] for c in self.node(parent_id).children]
        order = ("alias", "binding") if precedence == ALIAS_FIRST else ("binding", "alias")
        for attr in order:
            for child in children:
                if getattr(child, attr) == token:
                    return child.id
        return None

    def path_to(self, node_id: int) -> List[int]:
        """Ids from the root down to ``node_id`` inclusive."""
        path = [node_id]
        current = self.node(node_id)
        while current.parent is not None:
            path.append(current.parent)
            current = self._nodes[current.parent]
        path.reverse()
        return path

    def walk(self, start: int = ROOT_ID) -> Iterable[MenuNode]:
        """Depth-first iteration in display order."""
        stack = [start]
        while stack:
            node = self.node(stack.pop())
            yield node
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        return len(self._nodes)

    # --- validation -----------------------------------------------------

    def validate(self, reserved_tokens: Sequence[str] = ()) -> None:
        """Re-check every structural rule across the whole tree.

        Raises the matching ``StructuralError`` subclass on the first
        violation found.
        """
        reserved = set(reserved_tokens)
        for node in self.walk():
            if node.has_action and node.children:
                raise MixedNodeError(node.label)
            if node.has_action and node.id not in self.actions:
                raise UnknownNodeError(node.id)
            seen_bindings = set()
            seen_aliases = set()
            for child_id in node.children:
                child = self.node(child_id)
                if child.parent != node.id:
                    raise UnknownNodeError(child_id)
                for token in child.tokens():
                    if token in reserved:
                        raise ReservedTokenError(token, node.display_title)
                if child.binding is not None:
                    if child.binding in seen_bindings:
                        raise DuplicateTokenError(child.binding, node.display_title)
                    seen_bindings.add(child.binding)
                if child.alias is not None:
                    if child.alias in seen_aliases:
                        raise DuplicateTokenError(child.alias, node.display_title)
                    seen_aliases.add(child.alias)


def _check_tokens(binding: Optional[str], alias: Optional[str]) -> None:
    if binding is None and alias is None:
        raise InvalidTokenError("", "a node needs a binding or an alias")
    if binding is not None and (len(binding) != 1 or binding.isspace()):
        raise InvalidTokenError(binding, "bindings are single non-space characters")
    if alias is not None and (not alias or any(ch.isspace() for ch in alias)):
        raise InvalidTokenError(alias, "aliases are non-empty words without whitespace")
