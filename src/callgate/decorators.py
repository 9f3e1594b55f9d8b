from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from .controller import DebounceController
from .errors import InvalidArgument
from .options import DebounceOptions
from .timers import Clock, Scheduler


def _resolve_options(
    options: DebounceOptions | None,
    wait: Any,
    leading: Any,
    trailing: Any,
    max_wait: Any,
) -> DebounceOptions:
    if options is not None:
        return options
    return DebounceOptions(wait=wait, leading=leading, trailing=trailing, max_wait=max_wait)


def _wrap(
    func: Callable[..., Any],
    options: DebounceOptions,
    clock: Clock | None,
    scheduler: Scheduler | None,
) -> DebounceController:
    controller = DebounceController(func, options, clock=clock, scheduler=scheduler)
    functools.update_wrapper(controller, func, updated=())
    return controller


def debounce(
    func: Callable[..., Any] | None = None,
    wait: Any = 0,
    *,
    leading: Any = False,
    trailing: Any = True,
    max_wait: Any = None,
    options: DebounceOptions | None = None,
    clock: Clock | None = None,
    scheduler: Scheduler | None = None,
):
    """Wrap ``func`` in a :class:`DebounceController`.

    ``wait`` and ``max_wait`` are milliseconds. Without ``func`` this returns
    a decorator::

        @debounce(wait=250, leading=True)
        def refresh(view): ...

    ``options`` takes precedence over the individual keyword arguments, which
    makes it easy to pass settings from :func:`callgate.load_options`.
    """

    resolved = _resolve_options(options, wait, leading, trailing, max_wait)
    if func is None:
        return lambda f: _wrap(f, resolved, clock, scheduler)
    return _wrap(func, resolved, clock, scheduler)


class debounced_method:
    """Debounce a method separately for every instance.

    The controller for an instance is created on first access and stored in
    the instance ``__dict__`` under the method's name, so later lookups bypass
    the descriptor. The instance is forwarded to the function as its context.
    """

    def __init__(
        self,
        func: Callable[..., Any] | None = None,
        wait: Any = 0,
        *,
        leading: Any = False,
        trailing: Any = True,
        max_wait: Any = None,
        options: DebounceOptions | None = None,
        clock: Clock | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.options = _resolve_options(options, wait, leading, trailing, max_wait)
        self.clock = clock
        self.scheduler = scheduler
        self.func: Callable[..., Any] | None = None
        self.name: str | None = None
        if func is not None:
            self._set_func(func)

    def __call__(self, func: Callable[..., Any]) -> "debounced_method":
        if self.func is not None:
            raise InvalidArgument("debounced_method already wraps a function")
        self._set_func(func)
        return self

    def _set_func(self, func: Callable[..., Any]) -> None:
        if not callable(func):
            raise InvalidArgument("Expected a callable")
        self.func = func
        self.name = getattr(func, "__name__", None)
        functools.update_wrapper(self, func, updated=())

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None):
        if instance is None:
            return self
        controller = _wrap(self.func, self.options, self.clock, self.scheduler)
        bound = _BoundController(controller, instance)
        instance.__dict__[self.name] = bound
        return bound


class _BoundController:
    """Per-instance view of a controller that passes the instance as context."""

    def __init__(self, controller: DebounceController, instance: Any) -> None:
        self.controller = controller
        self.instance = instance
        functools.update_wrapper(self, controller.func, updated=())

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.controller.invoke(args, kwargs, self.instance)

    def cancel(self) -> None:
        self.controller.cancel()

    def flush(self) -> Any:
        return self.controller.flush()

    def is_pending(self) -> bool:
        return self.controller.is_pending()

    @property
    def pending(self) -> bool:
        return self.controller.is_pending()


__all__ = ["debounce", "debounced_method"]
