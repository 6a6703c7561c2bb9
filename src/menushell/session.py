"""Session state owned by the control thread, and the Snapshot handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .actions import ActionKind
from .history import CommandHistory, OutputEntry, OutputHistory
from .modes import Mode
from .tree import ChildRef, MenuTree


class NavigationPath:
    """Breadcrumb of node ids from the root to the active node.

    Never empty; element 0 is always the root id.
    """

    def __init__(self, root_id: int):
        self._ids: List[int] = [root_id]

    @property
    def current(self) -> int:
        return self._ids[-1]

    @property
    def root(self) -> int:
        return self._ids[0]

    @property
    def at_root(self) -> bool:
        return len(self._ids) == 1

    def push(self, node_id: int) -> None:
        self._ids.append(node_id)

    def pop(self) -> Optional[int]:
        """Leave the current node; a no-op returning ``None`` at the root."""
        if self.at_root:
            return None
        return self._ids.pop()

    def ids(self) -> Tuple[int, ...]:
        return tuple(self._ids)

    def __len__(self) -> int:
        return len(self._ids)


@dataclass(frozen=True)
class MenuItemView:
    key: str
    label: str
    alias: Optional[str] = None
    is_submenu: bool = False
    kind: Optional[ActionKind] = None

    @classmethod
    def from_child(cls, child: ChildRef) -> "MenuItemView":
        alias = child.alias if child.binding is not None else None
        return cls(
            key=child.key,
            label=child.label,
            alias=alias,
            is_submenu=child.is_submenu,
            kind=child.kind,
        )


@dataclass(frozen=True)
class Snapshot:
    """Read-only projection of the session for one display update.

    ``output`` is the visible slice of the history starting at
    ``output_start``; ``scroll_cursor`` is an absolute history index.
    ``history`` is every entry so far, for linear front ends that print
    whatever they have not printed yet; it is left out of comparisons
    since ``output_total`` already changes on every append.
    """

    node_id: int
    title: str
    breadcrumb: Tuple[str, ...]
    children: Tuple[MenuItemView, ...]
    mode: Mode
    output: Tuple[OutputEntry, ...]
    output_start: int
    output_total: int
    scroll_cursor: int
    follow: bool
    at_root: bool
    back_token: str = "b"
    quit_token: str = "q"
    mode_switch_token: str = "tab"
    input_buffer: str = ""
    pending_tasks: int = 0
    history: Tuple[OutputEntry, ...] = field(default=(), compare=False, repr=False)

    @property
    def breadcrumb_text(self) -> str:
        return " > ".join(self.breadcrumb)

    @property
    def exit_item(self) -> MenuItemView:
        if self.at_root:
            return MenuItemView(key=self.quit_token, label="Quit")
        return MenuItemView(key=self.back_token, label="Back")


@dataclass
class Session:
    """Mutable core state: navigation, output, command input.

    Mode lives in the ModeController; everything here is mutated only by
    the application loop on the control thread.
    """

    tree: MenuTree
    history_size: int = 100
    path: NavigationPath = field(init=False)
    output: OutputHistory = field(default_factory=OutputHistory)
    commands: CommandHistory = field(init=False)
    input_buffer: str = ""
    follow: bool = True
    running: bool = True

    def __post_init__(self) -> None:
        self.path = NavigationPath(self.tree.root_id)
        self.commands = CommandHistory(self.history_size)

    @property
    def current_node(self) -> int:
        return self.path.current

    def breadcrumb(self) -> Tuple[str, ...]:
        return tuple(self.tree.node(node_id).display_title for node_id in self.path.ids())

    def snapshot(
        self,
        mode: Mode,
        window: int,
        back_token: str = "b",
        quit_token: str = "q",
        mode_switch_token: str = "tab",
        pending_tasks: int = 0,
    ) -> Snapshot:
        node = self.tree.node(self.path.current)
        start, visible = self.output.window(window, follow=self.follow)
        cursor = self.output.cursor
        if self.follow and len(self.output):
            cursor = len(self.output) - 1
        return Snapshot(
            node_id=node.id,
            title=node.display_title,
            breadcrumb=self.breadcrumb(),
            children=tuple(MenuItemView.from_child(c) for c in self.tree.children_of(node.id)),
            mode=mode,
            output=tuple(visible),
            output_start=start,
            output_total=len(self.output),
            scroll_cursor=cursor,
            follow=self.follow,
            at_root=self.path.at_root,
            back_token=back_token,
            quit_token=quit_token,
            mode_switch_token=mode_switch_token,
            input_buffer=self.input_buffer,
            pending_tasks=pending_tasks,
            history=self.output.entries,
        )
