"""Renderer protocol shared by the rich and plain front ends."""

from typing import Protocol, runtime_checkable

from ..session import Snapshot


@runtime_checkable
class Renderer(Protocol):
    """Protocol for anything that can display a Snapshot.

    The core never inspects what a renderer does with the snapshot. Both
    bundled renderers must be drivable from the same snapshot sequence.
    """

    def render(self, snapshot: Snapshot) -> None:
        """Display one snapshot.

        Args:
            snapshot: Read-only projection of the session
        """
        ...


def help_line(snapshot: Snapshot) -> str:
    """One-line key hint for the snapshot's mode."""
    switch = snapshot.mode_switch_token
    if snapshot.mode.value == "scroll":
        return (
            f"SCROLL MODE: {switch} to exit | j/k Scroll | u/d Page | "
            "gg/G Top/Bottom | ctrl+a Toggle follow"
        )
    exit_hint = (
        f"{snapshot.quit_token} to quit" if snapshot.at_root else f"{snapshot.back_token} to go back"
    )
    return f"Type commands with optional parameters | {switch} to switch mode | {exit_hint}"


def position_label(snapshot: Snapshot) -> str:
    """``first-last/total`` for the visible output window."""
    if not snapshot.output_total:
        return "0/0"
    first = snapshot.output_start + 1
    last = snapshot.output_start + len(snapshot.output)
    return f"{first}-{last}/{snapshot.output_total}"
