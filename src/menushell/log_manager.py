from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, Dict, List

CATEGORIES = ("events", "errors", "debug")


@dataclass
class LogManager:
    """Simple line-buffered log manager by category.

    Categories: events, errors, debug. Lines are timestamped unless
    ``timestamps`` is off; each buffer keeps the last ``max_lines`` lines.
    """

    max_lines: int = 2000
    timestamps: bool = True
    buffers: Dict[str, Deque[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in CATEGORIES:
            self.buffers[name] = deque(maxlen=self.max_lines)

    def add(self, category: str, message: str) -> None:
        buf = self.buffers.setdefault(category, deque(maxlen=self.max_lines))
        prefix = f"{datetime.now().strftime('%H:%M:%S.%f')[:-3]} " if self.timestamps else ""
        for line in message.splitlines() or [message]:
            buf.append(prefix + line)

    def debug_logger(self, message: str) -> None:
        """Callback form for components that accept a ``debug_logger``."""
        self.add("debug", message)

    def lines(self, category: str) -> List[str]:
        return list(self.buffers.get(category, ()))

    def tail(self, category: str, count: int = 20) -> List[str]:
        return self.lines(category)[-count:]

    def text(self, category: str) -> str:
        buf = self.buffers.get(category)
        if not buf:
            return ""
        return "\n".join(buf)
