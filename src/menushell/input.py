"""Raw input units and the sources that produce them.

Sources are polled by the application loop and must never block: ``poll``
returns ``None`` when nothing is waiting.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TextIO, Union, runtime_checkable


@dataclass(frozen=True)
class Key:
    """A single keypress.

    ``key`` uses textual-style names (``tab``, ``enter``, ``backspace``,
    ``escape``, ``up``, ``down``, ``ctrl+a``) or the character itself for
    printable keys.
    """

    key: str
    character: Optional[str] = None

    @property
    def printable(self) -> Optional[str]:
        ch = self.character
        if ch is None and len(self.key) == 1:
            ch = self.key
        if ch is not None and len(ch) == 1 and ch.isprintable():
            return ch
        return None

    @property
    def token(self) -> str:
        """Name used for keymap lookup: the character when printable."""
        return self.printable or self.key


@dataclass(frozen=True)
class Line:
    """A complete line of typed text."""

    text: str


@dataclass(frozen=True)
class EndOfInput:
    """The source is exhausted; the loop treats this as a request to stop."""


RawInput = Union[Key, Line, EndOfInput]


@runtime_checkable
class InputSource(Protocol):
    def poll(self) -> Optional[RawInput]:
        """Return the next raw input unit, or ``None`` if none is waiting."""
        ...

    def pending(self) -> bool:
        """Whether more input is waiting, without blocking."""
        ...


class QueueInputSource:
    """Thread-safe queue fed by any producer (UI events, tests, scripts)."""

    def __init__(self) -> None:
        self._queue: "queue.Queue[RawInput]" = queue.Queue()

    def put(self, item: Union[RawInput, str]) -> None:
        """Enqueue a raw input unit; plain strings are treated as lines."""
        if isinstance(item, str):
            item = Line(item)
        self._queue.put(item)

    def put_keys(self, keys: str) -> None:
        for ch in keys:
            self._queue.put(Key(ch, ch))

    def poll(self) -> Optional[RawInput]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def pending(self) -> bool:
        return not self._queue.empty()


class StreamInputSource(QueueInputSource):
    """Reads lines from a text stream on a background thread.

    End of stream is reported once as ``EndOfInput``.
    """

    def __init__(
        self,
        stream: TextIO,
        debug_logger: Optional[Callable[[str], None]] = None,
    ):
        super().__init__()
        self.stream = stream
        self._debug_logger = debug_logger or (lambda msg: None)
        self._reader_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def start(self) -> None:
        if self._reader_thread is not None:
            return
        self._reader_thread = threading.Thread(
            target=self._read_loop, name="menushell-input", daemon=True
        )
        self._reader_thread.start()

    def stop(self) -> None:
        self._stop_event.set()

    def _read_loop(self) -> None:
        try:
            for raw in iter(self.stream.readline, ""):
                if self._stop_event.is_set():
                    return
                self.put(Line(raw.rstrip("\r\n")))
        except (OSError, ValueError) as exc:
            self._debug_logger(f"Input stream closed: {exc}")
        self.put(EndOfInput())
