from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Mapping

import yaml

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

# Durations are expressed in milliseconds.
DEFAULT_OPTIONS = {
    "wait": 0.0,
    "leading": False,
    "trailing": True,
    "max_wait": None,
}

OPTION_ALIASES = {
    "maxWait": "max_wait",
}


def coerce_duration(value: Any) -> float:
    """Return ``value`` as a non-negative float, ``0.0`` when it is unusable."""

    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return max(0.0, number)


def coerce_max_wait(value: Any) -> float | None:
    if value is None:
        return None
    return coerce_duration(value)


@dataclass(frozen=True)
class DebounceOptions:
    """Normalised debounce configuration."""

    wait: float = 0.0
    leading: bool = False
    trailing: bool = True
    max_wait: float | None = None

    def __post_init__(self) -> None:
        # frozen dataclass, so normalise through object.__setattr__
        object.__setattr__(self, "wait", coerce_duration(self.wait))
        object.__setattr__(self, "leading", bool(self.leading))
        object.__setattr__(
            self, "trailing", True if self.trailing is None else bool(self.trailing)
        )
        object.__setattr__(self, "max_wait", coerce_max_wait(self.max_wait))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DebounceOptions":
        values = dict(DEFAULT_OPTIONS)
        for raw_key, value in data.items():
            key = OPTION_ALIASES.get(raw_key, raw_key)
            if key not in DEFAULT_OPTIONS:
                logger.debug("Ignoring unknown debounce option %r", raw_key)
                continue
            values[key] = value
        return cls(**values)


def load_options(path: str | os.PathLike, section: str | None = None) -> DebounceOptions:
    """Load debounce options from a YAML settings file.

    A missing file yields the defaults. With ``section`` the options are read
    from that top-level key instead of the document root.
    """

    if not os.path.exists(path):
        logger.debug("Settings file %s not found, using defaults", path)
        return DebounceOptions()

    with open(path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}

    if section is not None:
        if not isinstance(loaded, dict):
            raise InvalidArgument(f"{path}: expected a mapping of sections")
        loaded = loaded.get(section) or {}
    if not isinstance(loaded, dict):
        raise InvalidArgument(f"{path}: expected a mapping of debounce options")
    return DebounceOptions.from_mapping(loaded)


__all__ = [
    "DEFAULT_OPTIONS",
    "DebounceOptions",
    "coerce_duration",
    "coerce_max_wait",
    "load_options",
]
