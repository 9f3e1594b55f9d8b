from __future__ import annotations


class InvalidArgument(TypeError):
    """Raised when a debounce target or its settings cannot be used."""


__all__ = ["InvalidArgument"]
