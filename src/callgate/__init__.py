"""Debounce helpers with leading/trailing edges and a max-wait ceiling."""

from .controller import NO_CONTEXT, DebounceController
from .decorators import debounce, debounced_method
from .errors import InvalidArgument
from .options import DebounceOptions, load_options
from .timers import (
    AsyncioScheduler,
    Clock,
    MonotonicClock,
    Scheduler,
    ThreadingTimerScheduler,
    TkAfterScheduler,
)

__all__ = [
    "AsyncioScheduler",
    "Clock",
    "DebounceController",
    "DebounceOptions",
    "InvalidArgument",
    "MonotonicClock",
    "NO_CONTEXT",
    "Scheduler",
    "ThreadingTimerScheduler",
    "TkAfterScheduler",
    "debounce",
    "debounced_method",
    "load_options",
]
