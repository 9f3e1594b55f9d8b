from __future__ import annotations

from typing import Callable

import pytest


class FakeTimers:
    """Manual clock plus scheduler driven by simulated milliseconds."""

    def __init__(self) -> None:
        self.time = 0.0
        self._next_id = 0
        self._callbacks: dict[int, tuple[float, Callable[[], None]]] = {}

    def now(self) -> float:
        return self.time

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> int:
        self._next_id += 1
        self._callbacks[self._next_id] = (self.time + delay_ms, callback)
        return self._next_id

    def cancel(self, schedule_id: int) -> None:
        self._callbacks.pop(schedule_id, None)

    @property
    def scheduled(self) -> int:
        return len(self._callbacks)

    def advance(self, ms: float) -> None:
        """Move time forward, firing due callbacks in deadline order."""
        target = self.time + ms
        while True:
            due = [
                (deadline, schedule_id)
                for schedule_id, (deadline, _) in self._callbacks.items()
                if deadline <= target
            ]
            if not due:
                break
            deadline, schedule_id = min(due)
            _, callback = self._callbacks.pop(schedule_id)
            self.time = max(self.time, deadline)
            callback()
        self.time = target


@pytest.fixture
def timers() -> FakeTimers:
    return FakeTimers()
