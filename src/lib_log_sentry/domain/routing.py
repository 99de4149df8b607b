"""Level routing table deciding how each event reaches Sentry.

Purpose
-------
Hold the two disjoint level sets that drive :class:`~lib_log_sentry.hook.SentryHook`:
levels delivered without blocking the caller and levels delivered while the
caller waits for acknowledgement.

Contents
--------
* :class:`DeliveryMode` - ``async`` / ``sync``.
* :class:`LevelConflictError` - raised when a level would join both sets.
* :class:`LevelRouting` - the mutable routing table.

System Role
-----------
Pure domain state. It is mutated during configuration only; concurrent
configuration and lookups are outside its contract, so it takes no locks.
"""

from __future__ import annotations

from enum import Enum

from .levels import LogLevel


class DeliveryMode(Enum):
    """How an event is handed to the reporter."""

    ASYNC = "async"
    SYNC = "sync"


class LevelConflictError(ValueError):
    """A level was registered for one delivery mode while present in the other.

    Attributes
    ----------
    level:
        The offending :class:`LogLevel`.
    registered_as:
        The :class:`DeliveryMode` that already owns ``level``.
    """

    def __init__(self, level: LogLevel, registered_as: DeliveryMode) -> None:
        super().__init__(f"Log level {level.severity} already in {registered_as.value} levels")
        self.level = level
        self.registered_as = registered_as


class LevelRouting:
    """Two mutually exclusive level sets keyed by :class:`LogLevel`.

    Examples
    --------
    >>> routing = LevelRouting()
    >>> routing.set_async(LogLevel.ERROR)
    >>> routing.mode_for(LogLevel.ERROR)
    <DeliveryMode.ASYNC: 'async'>
    >>> routing.set_sync(LogLevel.ERROR)
    Traceback (most recent call last):
    ...
    lib_log_sentry.domain.routing.LevelConflictError: Log level error already in async levels
    """

    def __init__(self) -> None:
        self._async_levels: set[LogLevel] = set()
        self._sync_levels: set[LogLevel] = set()

    def set_async(self, *levels: LogLevel) -> None:
        """Register ``levels`` for non-blocking delivery.

        Levels are applied one by one; the first level already registered as
        sync raises :class:`LevelConflictError` and the remaining ones are not
        looked at. Levels applied before the conflict stay registered.
        """
        self._register(levels, target=self._async_levels, other=self._sync_levels, other_mode=DeliveryMode.SYNC)

    def set_sync(self, *levels: LogLevel) -> None:
        """Register ``levels`` for blocking delivery (see :meth:`set_async`)."""
        self._register(levels, target=self._sync_levels, other=self._async_levels, other_mode=DeliveryMode.ASYNC)

    def mode_for(self, level: LogLevel) -> DeliveryMode | None:
        """Return the delivery mode for ``level`` or ``None`` when unrouted."""
        if level in self._async_levels:
            return DeliveryMode.ASYNC
        if level in self._sync_levels:
            return DeliveryMode.SYNC
        return None

    def levels(self) -> list[LogLevel]:
        """Return every routed level; order is unspecified."""
        return [*self._async_levels, *self._sync_levels]

    @property
    def async_levels(self) -> frozenset[LogLevel]:
        return frozenset(self._async_levels)

    @property
    def sync_levels(self) -> frozenset[LogLevel]:
        return frozenset(self._sync_levels)

    @staticmethod
    def _register(
        levels: tuple[LogLevel, ...],
        *,
        target: set[LogLevel],
        other: set[LogLevel],
        other_mode: DeliveryMode,
    ) -> None:
        for level in levels:
            if level in other:
                raise LevelConflictError(level, other_mode)
            target.add(level)


__all__ = ["DeliveryMode", "LevelConflictError", "LevelRouting"]
