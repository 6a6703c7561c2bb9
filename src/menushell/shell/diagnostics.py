"""Diagnostics and troubleshooting snapshot generation.

This module produces a plain-text snapshot of a running menu application for
debugging: versions, session state, in-flight deferred tasks, recent key
events and log tails.
"""

from __future__ import annotations

from datetime import datetime, timezone
from importlib import metadata
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

if TYPE_CHECKING:
    from ..application import Application


def gather_version_info(packages: Iterable[str] = ("menushell", "textual", "rich")) -> Dict[str, str]:
    """Collect installed versions, ``unknown`` for anything missing."""
    versions: Dict[str, str] = {}
    for pkg in packages:
        try:
            versions[pkg] = metadata.version(pkg)
        except metadata.PackageNotFoundError:
            versions[pkg] = "unknown"
    return versions


class DiagnosticsManager:
    """Manages diagnostic snapshot generation and export.

    Responsibilities:
    - Record recent key events
    - Generate troubleshooting snapshots
    - Export snapshots to files
    """

    MAX_KEY_EVENTS = 100

    def __init__(self, application: "Application", version_info: Optional[Dict[str, str]] = None):
        """Initialize diagnostics manager.

        Args:
            application: The running Application to inspect
            version_info: Optional pre-collected version information
        """
        self.application = application
        self.version_info = version_info if version_info is not None else gather_version_info()
        self.key_events: List[str] = []

    def record_key_event(self, key: str, character: Optional[str], modifiers: Iterable[str] = ()) -> None:
        """Record a key event for diagnostics.

        Args:
            key: Key name
            character: Character value (if printable)
            modifiers: Modifier key names
        """
        mods = "+".join(sorted(modifiers))
        char_repr = repr(character) if character else "None"
        self.key_events.append(f"{key} char={char_repr} mods={mods}")
        if len(self.key_events) > self.MAX_KEY_EVENTS:
            self.key_events = self.key_events[-self.MAX_KEY_EVENTS:]

    def generate_snapshot(self) -> str:
        """Generate a complete troubleshooting snapshot.

        Returns:
            Formatted snapshot text
        """
        app = self.application
        session = app.session
        lines: List[str] = []

        lines.append(f"timestamp: {datetime.now(timezone.utc).isoformat()}")
        lines.append("versions:")
        for name, version in self.version_info.items():
            lines.append(f"  {name}: {version}")

        lines.append(f"mode: {app.mode.value}")
        lines.append(f"breadcrumb: {' > '.join(session.breadcrumb())}")
        lines.append(f"running: {app.running}")
        lines.append(f"follow: {session.follow}")
        lines.append(f"output_entries: {len(session.output)} cursor={session.output.cursor}")
        lines.append(f"command_history: {len(session.commands.entries)}")

        pending = app.dispatcher.pending
        lines.append(f"pending_tasks: {len(pending)}")
        for task in pending:
            lines.append(f"  - #{task.task_id} {task.label} (node {task.node_id})")

        for category in ("events", "errors", "debug"):
            lines.append(f"---- recent {category} ----")
            lines.append(self._recent_log_text(category))

        if self.key_events:
            lines.append("---- recent key events ----")
            lines.extend(self.key_events[-20:])

        return "\n".join(lines)

    def export_to_file(self, target_dir: str = ".menushell") -> Optional[str]:
        """Export troubleshooting snapshot to file.

        Args:
            target_dir: Directory to save snapshot file

        Returns:
            Path to saved file, or None if export failed
        """
        snapshot = self.generate_snapshot()
        try:
            dir_path = Path(target_dir)
            dir_path.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
            target_file = dir_path / f"diagnostics_{timestamp}.txt"
            target_file.write_text(snapshot, encoding="utf-8")
        except OSError as exc:
            self.application.log_manager.add("errors", f"diagnostics export failed: {exc}")
            return None
        return str(target_file)

    def _recent_log_text(self, category: str, limit: int = 50) -> str:
        recent = self.application.log_manager.tail(category, limit)
        if not recent:
            return f"(no {category})"
        return "\n".join(recent)
