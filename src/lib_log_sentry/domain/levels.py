"""Log level abstraction used as the routing key for Sentry delivery.

Purpose
-------
Give the routing table a closed, hashable set of severities that maps cleanly
onto the stdlib :mod:`logging` numbers, so records coming from any logger can
be looked up without numeric comparisons.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
* ``_ALIASES`` table for the alternative level spellings accepted by
  :meth:`LogLevel.from_name`.

System Role
-----------
Shared by :mod:`lib_log_sentry.domain.routing` (set membership),
:mod:`lib_log_sentry.runtime` (environment parsing) and the logging handler
(record translation).
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels understood by the hook."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name used in messages and tags."""

        return self.name.lower()

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this level."""

        return getattr(logging, self.name)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Parse ``name`` case-insensitively, accepting ``warn`` and ``fatal``.

        Examples
        --------
        >>> LogLevel.from_name(" Warn ")
        <LogLevel.WARNING: 30>
        """
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`."""
        return cls.from_numeric(level)

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` whose value is exactly ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def nearest(cls, level: int) -> "LogLevel":
        """Floor an arbitrary stdlib level onto the closest standard level.

        Custom levels registered via :func:`logging.addLevelName` (``25``,
        ``45``...) still need a routing key; values below ``DEBUG`` clamp up.

        Examples
        --------
        >>> LogLevel.nearest(25)
        <LogLevel.INFO: 20>
        >>> LogLevel.nearest(0)
        <LogLevel.DEBUG: 10>
        """
        chosen = cls.DEBUG
        for candidate in cls:
            if candidate.value <= level:
                chosen = candidate
        return chosen


_ALIASES = {
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
}


__all__ = ["LogLevel"]
