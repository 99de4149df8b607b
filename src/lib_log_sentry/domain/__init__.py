"""Domain entities and value objects used by the Sentry hook."""

from __future__ import annotations

from .events import ERROR_KEY, LogEvent
from .levels import LogLevel
from .routing import DeliveryMode, LevelConflictError, LevelRouting
from .tags import make_tags

__all__ = [
    "DeliveryMode",
    "ERROR_KEY",
    "LevelConflictError",
    "LevelRouting",
    "LogEvent",
    "LogLevel",
    "make_tags",
]
