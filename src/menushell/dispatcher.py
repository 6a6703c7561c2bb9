"""ActionDispatcher - runs bound handlers and turns their results into output.

Immediate actions run on the calling (control) thread and their message is
appended before ``invoke`` returns. Deferred actions are handed to an
execution context; their results come back through a completion queue that
the control thread drains once per tick. Only the control thread ever
appends to the OutputHistory.

Completion order across deferred tasks follows completion time, not
invocation time. Concurrent invocations of the same action are allowed; an
embedding application that wants single-flight behaviour enforces it in its
own handler.
"""

from __future__ import annotations

import asyncio
import inspect
import itertools
import queue
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from .actions import ActionRegistry, Handler
from .errors import TaskRejectedError
from .history import OutputEntry, OutputHistory
from .log_manager import LogManager
from .tree import MenuNode


@runtime_checkable
class ExecutionContext(Protocol):
    """Protocol for the background context that runs deferred actions."""

    def submit(self, handler: Handler, state: Any, parameter: Optional[str]) -> Future:
        """Schedule ``handler(state, parameter)`` without blocking the caller.

        Returns:
            A future resolving to the handler's message (or ``None``)

        Raises:
            TaskRejectedError: if the context no longer accepts work
        """
        ...

    def shutdown(self, wait: bool = True) -> None:
        ...


class BackgroundExecutor:
    """Asyncio event loop running on a daemon thread.

    Coroutine handlers are awaited on the loop, plain callables run through
    ``asyncio.to_thread``. When a plain callable returns an awaitable, that
    awaitable is awaited as well.
    """

    def __init__(self, name: str = "menushell-actions"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self._thread is not None:
                return
            loop = asyncio.new_event_loop()
            ready = threading.Event()

            def _run() -> None:
                asyncio.set_event_loop(loop)
                ready.set()
                try:
                    loop.run_forever()
                finally:
                    tasks = asyncio.all_tasks(loop)
                    for task in tasks:
                        task.cancel()
                    if tasks:
                        loop.run_until_complete(asyncio.gather(*tasks, return_exceptions=True))
                    loop.close()

            self._loop = loop
            self._thread = threading.Thread(target=_run, name=self.name, daemon=True)
            self._thread.start()
            ready.wait()

    def submit(self, handler: Handler, state: Any, parameter: Optional[str]) -> Future:
        if self._closed:
            raise TaskRejectedError(getattr(handler, "__name__", "action"), "executor is shut down")
        self.start()
        return asyncio.run_coroutine_threadsafe(
            self._run_handler(handler, state, parameter), self._loop
        )

    @staticmethod
    async def _run_handler(handler: Handler, state: Any, parameter: Optional[str]) -> Any:
        if inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
            getattr(handler, "__call__", None)
        ):
            result = await handler(state, parameter)
        else:
            result = await asyncio.to_thread(handler, state, parameter)
        if inspect.isawaitable(result):
            result = await result
        return result

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
            loop, thread = self._loop, self._thread
        if loop is None or thread is None:
            return
        if not loop.is_closed():
            loop.call_soon_threadsafe(loop.stop)
        if wait:
            thread.join(timeout=2.0)


@dataclass
class PendingTask:
    task_id: int
    node_id: int
    label: str
    future: Optional[Future] = None


@dataclass(frozen=True)
class Completion:
    task: PendingTask
    message: Optional[str] = None
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class Outcome:
    """What happened to one invocation.

    status is one of ``completed`` (immediate, ran), ``failed`` (immediate
    raised, or deferred rejected) or ``scheduled`` (deferred, in flight).
    """

    status: str
    entry: Optional[OutputEntry] = None
    task: Optional[PendingTask] = None


def normalize_message(result: Any) -> Optional[str]:
    if result is None:
        return None
    if isinstance(result, str):
        return result
    return str(result)


def error_text(exc: BaseException) -> str:
    detail = str(exc) or type(exc).__name__
    return f"Error: {detail}"


class ActionDispatcher:
    """Owns handler execution and the deferred-task completion channel."""

    def __init__(
        self,
        registry: ActionRegistry,
        history: OutputHistory,
        executor: Optional[ExecutionContext] = None,
        log_manager: Optional[LogManager] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ):
        self.registry = registry
        self.history = history
        self.executor: ExecutionContext = executor or BackgroundExecutor()
        self._log_manager = log_manager
        self._debug_logger = debug_logger or (lambda msg: None)
        self._completions: "queue.Queue[Completion]" = queue.Queue()
        self._pending: Dict[int, PendingTask] = {}
        self._ids = itertools.count(1)
        self._closed = False

    # --- invocation -----------------------------------------------------

    def invoke(self, node: MenuNode, state: Any, parameter: Optional[str] = None) -> Outcome:
        """Run the action bound to ``node`` against ``state``."""
        action = self.registry.get(node.id)
        self._log("events", f"invoke '{node.label}' ({action.kind.value}) param={parameter!r}")
        if action.is_deferred:
            return self._schedule(node, action.handler, state, parameter)

        try:
            result = action.handler(state, parameter)
        except Exception as exc:
            return self._fail(node, exc)

        if inspect.isawaitable(result):
            # Synchronous prelude already ran here; the awaitable finishes in the background.
            return self._schedule(node, lambda _state, _param: result, state, parameter)

        message = normalize_message(result)
        entry = self.history.append(message) if message is not None else None
        return Outcome("completed", entry=entry)

    def _schedule(
        self, node: MenuNode, handler: Handler, state: Any, parameter: Optional[str]
    ) -> Outcome:
        task = PendingTask(task_id=next(self._ids), node_id=node.id, label=node.label)
        try:
            if self._closed:
                raise TaskRejectedError(node.label, "dispatcher is shut down")
            future = self.executor.submit(handler, state, parameter)
        except TaskRejectedError as exc:
            return self._fail(node, exc)
        except RuntimeError as exc:
            return self._fail(node, TaskRejectedError(node.label, str(exc)))

        task.future = future
        self._pending[task.task_id] = task
        future.add_done_callback(lambda fut, task=task: self._on_done(task, fut))
        self._debug_logger(f"Scheduled task {task.task_id} for '{node.label}'")
        return Outcome("scheduled", task=task)

    def _on_done(self, task: PendingTask, future: Future) -> None:
        # Runs on the executor's thread: only enqueue, never touch history.
        if future.cancelled():
            completion = Completion(task, error=TaskRejectedError(task.label, "cancelled"))
        else:
            exc = future.exception()
            if exc is not None:
                completion = Completion(task, error=exc)
            else:
                completion = Completion(task, message=normalize_message(future.result()))
        self._completions.put(completion)

    def _fail(self, node: MenuNode, exc: BaseException) -> Outcome:
        self._log("errors", f"'{node.label}' failed: {exc!r}")
        entry = self.history.append(error_text(exc), source=node.label, is_error=True)
        return Outcome("failed", entry=entry)

    # --- completions ----------------------------------------------------

    def drain(self) -> List[OutputEntry]:
        """Move every finished deferred result into the history.

        Must be called from the control thread. Each task is delivered at
        most once; results arriving after ``shutdown`` are discarded.
        """
        appended: List[OutputEntry] = []
        while True:
            try:
                completion = self._completions.get_nowait()
            except queue.Empty:
                break
            task = self._pending.pop(completion.task.task_id, None)
            if task is None or self._closed:
                continue
            if completion.error is not None:
                self._log("errors", f"deferred '{task.label}' failed: {completion.error!r}")
                appended.append(
                    self.history.append(error_text(completion.error), source=task.label, is_error=True)
                )
            else:
                self._log("events", f"deferred '{task.label}' completed (task {task.task_id})")
                if completion.message is not None:
                    appended.append(self.history.append(completion.message, source=task.label))
        return appended

    def has_completions(self) -> bool:
        return not self._completions.empty()

    @property
    def pending(self) -> List[PendingTask]:
        return list(self._pending.values())

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; in-flight results are dropped."""
        self._closed = True
        self._pending.clear()
        self.executor.shutdown(wait=wait)

    def _log(self, category: str, message: str) -> None:
        if self._log_manager is not None:
            self._log_manager.add(category, message)
        self._debug_logger(message)
