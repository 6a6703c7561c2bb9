"""Shared fixtures for the menushell test suite."""

import asyncio
from concurrent.futures import Future
from typing import List

import pytest

from menushell.errors import TaskRejectedError
from menushell.session import Snapshot


@pytest.fixture
def anyio_backend():
    return "asyncio"


class RecordingRenderer:
    """Renderer that keeps every snapshot it is handed."""

    def __init__(self):
        self.snapshots: List[Snapshot] = []

    def render(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def last(self) -> Snapshot:
        return self.snapshots[-1]


class InlineExecutor:
    """Execution context that finishes every task before ``submit`` returns."""

    def __init__(self):
        self.submitted = 0
        self.closed = False

    def submit(self, handler, state, parameter):
        if self.closed:
            raise TaskRejectedError(getattr(handler, "__name__", "action"), "closed")
        self.submitted += 1
        future: Future = Future()
        try:
            result = handler(state, parameter)
            if asyncio.iscoroutine(result):
                result = asyncio.run(result)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future

    def shutdown(self, wait=True):
        self.closed = True


class RejectingExecutor:
    """Execution context that refuses all work."""

    def submit(self, handler, state, parameter):
        raise TaskRejectedError(getattr(handler, "__name__", "action"), "no capacity")

    def shutdown(self, wait=True):
        pass


@pytest.fixture
def recorder():
    return RecordingRenderer()


@pytest.fixture
def inline_executor():
    return InlineExecutor()


@pytest.fixture
def rejecting_executor():
    return RejectingExecutor()
