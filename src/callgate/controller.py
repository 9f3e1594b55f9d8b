from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from typing import Any

from .errors import InvalidArgument
from .options import DebounceOptions
from .timers import Clock, MonotonicClock, Scheduler, ThreadingTimerScheduler

logger = logging.getLogger(__name__)

NO_CONTEXT = object()


class DebounceController:
    """Collapse bursts of calls to ``func`` into leading/trailing invocations.

    Calls made within ``wait`` milliseconds of each other form a burst. The
    callable runs on the leading edge of a burst when ``leading`` is set, and
    once the burst has been quiet for ``wait`` when ``trailing`` is set,
    always with the most recent arguments. ``max_wait`` bounds the time
    between invocations during a burst that never goes quiet.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        options: DebounceOptions | None = None,
        *,
        clock: Clock | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        if not callable(func):
            raise InvalidArgument("Expected a callable")
        self._func = func
        self._options = options or DebounceOptions()
        self._clock = clock or MonotonicClock()
        self._scheduler = scheduler or ThreadingTimerScheduler()
        # timer callbacks may arrive on another thread
        self._lock = threading.RLock()

        self._pending: tuple[tuple, dict, Any] | None = None
        self._last_call_time: float | None = None
        self._last_invoke_time = 0.0
        self._last_result: Any = None
        self._timer: Any | None = None
        self._generation = 0

    def __repr__(self) -> str:
        name = getattr(self._func, "__qualname__", repr(self._func))
        return f"<{type(self).__name__} {name} {self._options}>"

    @property
    def func(self) -> Callable[..., Any]:
        return self._func

    @property
    def options(self) -> DebounceOptions:
        return self._options

    @property
    def wait(self) -> float:
        return self._options.wait

    @property
    def max_wait(self) -> float | None:
        return self._options.max_wait

    @property
    def leading(self) -> bool:
        return self._options.leading

    @property
    def trailing(self) -> bool:
        return self._options.trailing

    @property
    def last_result(self) -> Any:
        return self._last_result

    @property
    def pending(self) -> bool:
        return self.is_pending()

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.invoke(args, kwargs)

    def call_with_context(self, context: Any, *args: Any, **kwargs: Any) -> Any:
        return self.invoke(args, kwargs, context)

    def invoke(self, args: tuple = (), kwargs: dict | None = None, context: Any = NO_CONTEXT) -> Any:
        with self._lock:
            now = self._clock.now()
            self._pending = (tuple(args), dict(kwargs or {}), context)
            invoke_now = self.should_invoke(now)
            self._last_call_time = now

            if invoke_now:
                if self._timer is None:
                    return self._leading_edge(now)
                if self._options.max_wait is not None:
                    self._reschedule(now)
                    if self._options.trailing:
                        logger.debug("max_wait reached for %r, forcing invoke", self)
                        return self._invoke(now)
                    self._last_result = None
                    return self._last_result

            if self._timer is None:
                self._reschedule(now)
            return self._last_result

    def should_invoke(self, now: float) -> bool:
        if self._last_call_time is None:
            return True
        if now - self._last_call_time >= self._options.wait:
            return True
        max_wait = self._options.max_wait
        return max_wait is not None and now - self._last_invoke_time >= max_wait

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None or self._pending is not None:
                logger.debug("Cancelling pending call for %r", self)
            self._clear_timer()
            self._last_invoke_time = 0.0
            self._last_call_time = None
            self._pending = None

    def flush(self) -> Any:
        with self._lock:
            if self._timer is None:
                return self._last_result
            logger.debug("Flushing %r", self)
            return self._trailing_edge(self._clock.now())

    def is_pending(self) -> bool:
        return self._timer is not None

    def _leading_edge(self, now: float) -> Any:
        self._last_invoke_time = now
        try:
            if self._options.leading:
                logger.debug("Leading edge invoke for %r", self)
                self._invoke(now)
        finally:
            # the trailing timer is armed even when the leading call raises
            self._reschedule(now)
        return self._last_result

    def _trailing_edge(self, now: float) -> Any:
        self._clear_timer()
        if self._options.trailing and self._pending is not None:
            logger.debug("Trailing edge invoke for %r", self)
            return self._invoke(now)
        self._pending = None
        return self._last_result

    def _invoke(self, now: float) -> Any:
        self._last_invoke_time = now
        args, kwargs, context = self._pending
        self._pending = None
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Calling %r with args=%r kwargs=%r", self._func, args, kwargs)
        if context is NO_CONTEXT:
            self._last_result = self._func(*args, **kwargs)
        else:
            self._last_result = self._func(context, *args, **kwargs)
        return self._last_result

    def _reschedule(self, now: float) -> None:
        self._clear_timer()
        remaining = self._options.wait
        max_wait = self._options.max_wait
        if max_wait is not None:
            remaining_max = max(0.0, max_wait - (now - self._last_invoke_time))
            remaining = min(remaining, remaining_max)
        self._generation += 1
        callback = functools.partial(self._timer_expired, self._generation)
        self._timer = self._scheduler.schedule(remaining, callback)

    def _timer_expired(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._timer is None:
                return
            self._timer = None
            now = self._clock.now()
            if self.should_invoke(now):
                self._trailing_edge(now)
            else:
                self._reschedule(now)

    def _clear_timer(self) -> None:
        if self._timer is not None:
            self._scheduler.cancel(self._timer)
            self._timer = None


__all__ = ["DebounceController", "NO_CONTEXT"]
