"""Clock and deferred-execution adapters used by the debounce controller.

All durations are milliseconds. A scheduler hands out opaque handles and
accepts them back in :meth:`Scheduler.cancel`; cancelling a handle that
already fired must be harmless.
"""

from __future__ import annotations

import asyncio
import math
import threading
import time
from collections.abc import Callable
from typing import Any, Protocol


class Clock(Protocol):
    def now(self) -> float: ...


class Scheduler(Protocol):
    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class MonotonicClock:
    """Milliseconds from :func:`time.monotonic`."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


class ThreadingTimerScheduler:
    """Runs each callback on its own daemon :class:`threading.Timer`."""

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(max(delay_ms, 0.0) / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


class AsyncioScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(delay_ms, 0.0) / 1000.0, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class TkAfterScheduler:
    """Schedules on a Tk widget's event loop via ``after``/``after_cancel``."""

    def __init__(self, widget: Any) -> None:
        self.widget = widget

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> str:
        return self.widget.after(int(math.ceil(max(delay_ms, 0.0))), callback)

    def cancel(self, handle: str) -> None:
        self.widget.after_cancel(handle)


__all__ = [
    "AsyncioScheduler",
    "Clock",
    "MonotonicClock",
    "Scheduler",
    "ThreadingTimerScheduler",
    "TkAfterScheduler",
]
