"""Shared fixtures for stream core tests."""

from collections import deque
from typing import Any
from unittest.mock import Mock

import pytest
from reactivex.abc import DisposableBase, ObserverBase
from reactivex.disposable import BooleanDisposable
from reactivex.scheduler.scheduler import Scheduler


class ManualScheduler(Scheduler):
    """Queues scheduled work until the test calls run(). Due times are ignored."""

    def __init__(self) -> None:
        super().__init__()
        self.queue: deque[tuple[Any, Any, BooleanDisposable]] = deque()

    def schedule(self, action: Any, state: Any = None) -> DisposableBase:
        cancel = BooleanDisposable()
        self.queue.append((action, state, cancel))
        return cancel

    def schedule_relative(self, duetime: Any, action: Any, state: Any = None) -> DisposableBase:
        return self.schedule(action, state)

    def schedule_absolute(self, duetime: Any, action: Any, state: Any = None) -> DisposableBase:
        return self.schedule(action, state)

    def run(self, limit: int = 10_000) -> int:
        """Invoke queued units in order; returns how many ran (cancelled units are skipped)."""
        ran = 0
        while self.queue and ran < limit:
            action, state, cancel = self.queue.popleft()
            if cancel.is_disposed:
                continue
            self.invoke_action(action, state)
            ran += 1
        return ran


@pytest.fixture
def manual() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def observer() -> Mock:
    """Observer spy; mock_calls records on_next / on_error / on_completed in order."""
    return Mock(spec=ObserverBase)
