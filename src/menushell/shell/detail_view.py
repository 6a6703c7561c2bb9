"""DetailView - status line plus the output area of the shell.

This widget encapsulates the right-hand panel that displays:
- Status line (breadcrumb, mode, running task count)
- Output history window
"""

from typing import Optional

from rich.console import RenderableType
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static


class DetailView(Vertical):
    """Detail panel that manages the status line and the output view.

    Usage:
        detail = DetailView(initial_status="Ready")
        detail.update_status("Main > Settings")
        detail.update_output(panel)
    """

    def __init__(self, initial_status: str = "Ready", **kwargs):
        """Initialize the detail view.

        Args:
            initial_status: Initial text for the status line
            **kwargs: Additional Vertical widget arguments
        """
        if "id" not in kwargs:
            kwargs["id"] = "detail"

        super().__init__(**kwargs)

        self._initial_status = initial_status

        # References to child widgets (set in compose)
        self.status_line: Optional[Static] = None
        self.output_view: Optional[Static] = None

    def compose(self) -> ComposeResult:
        self.status_line = Static(self._initial_status, id="title")
        yield self.status_line
        self.output_view = Static("", id="output")
        yield self.output_view

    def update_status(self, text: RenderableType) -> None:
        """Update the status line.

        Args:
            text: New status text or renderable
        """
        if self.status_line:
            self.status_line.update(text)

    def update_output(self, renderable: RenderableType) -> None:
        """Replace the contents of the output view."""
        if self.output_view:
            self.output_view.update(renderable)
