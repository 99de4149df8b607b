"""Sentry hook routing log events by severity.

Purpose
-------
Receive log events one at a time and, for the levels registered on it, forward
them to a :class:`~lib_log_sentry.application.ports.ReporterPort` either
without blocking (async levels) or while the caller waits (sync levels).

Contents
--------
* :class:`SentryHook` - the hook host code configures and attaches.

System Role
-----------
Sits between the logging facility bridge
(:class:`~lib_log_sentry.adapters.logging_handler.SentryLoggingHandler`) and the
reporter adapters. Configuration happens before the hook is attached; after
that it is a long-lived, read-mostly object.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from lib_log_sentry.application.ports.reporter import ReporterPort
from lib_log_sentry.application.use_cases.send_event import SendCallable, create_send_event
from lib_log_sentry.domain import DeliveryMode, LevelRouting, LogEvent, LogLevel

LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None]


class SentryHook:
    """Forward events on registered levels to a reporter.

    Parameters
    ----------
    reporter:
        Backend receiving the captures. ``None`` selects the process-wide
        default from :func:`lib_log_sentry.runtime.current_default_reporter`;
        register a custom default before constructing the hook if needed.
    diagnostic:
        Optional callback invoked with ``("sentry_send_failed", payload)``
        when the reporter raises.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.calls = []
    ...     def _record(name):
    ...         def method(self, subject, tags, *contexts):
    ...             self.calls.append(name)
    ...             return "id"
    ...         return method
    ...     capture_message = _record("capture_message")
    ...     capture_error = _record("capture_error")
    ...     capture_message_and_wait = _record("capture_message_and_wait")
    ...     capture_error_and_wait = _record("capture_error_and_wait")
    >>> recorder = Recorder()
    >>> hook = SentryHook(recorder)
    >>> hook.set_async(LogLevel.ERROR)
    >>> hook.set_sync(LogLevel.CRITICAL)
    >>> hook.fire(LogEvent(LogLevel.ERROR, "disk full"))
    <DeliveryMode.ASYNC: 'async'>
    >>> hook.fire(LogEvent(LogLevel.CRITICAL, "gone").with_error(OSError("io")))
    <DeliveryMode.SYNC: 'sync'>
    >>> hook.fire(LogEvent(LogLevel.INFO, "ignored")) is None
    True
    >>> recorder.calls
    ['capture_message', 'capture_error_and_wait']
    """

    def __init__(self, reporter: ReporterPort | None = None, *, diagnostic: DiagnosticHook | None = None) -> None:
        if reporter is None:
            from lib_log_sentry.runtime._state import current_default_reporter

            reporter = current_default_reporter()
        self._reporter = reporter
        self._routing = LevelRouting()
        self._senders: dict[DeliveryMode, SendCallable] = {mode: create_send_event(reporter, mode) for mode in DeliveryMode}
        self._diagnostic = diagnostic

    @property
    def reporter(self) -> ReporterPort:
        """Reporter the hook sends through (not owned by the hook)."""
        return self._reporter

    @property
    def async_levels(self) -> frozenset[LogLevel]:
        return self._routing.async_levels

    @property
    def sync_levels(self) -> frozenset[LogLevel]:
        return self._routing.sync_levels

    def set_async(self, *levels: LogLevel) -> None:
        """Send events on ``levels`` without blocking the caller.

        Raises
        ------
        LevelConflictError
            When a level is already registered as sync. Levels earlier in the
            same call remain registered.
        """
        self._routing.set_async(*levels)

    def set_sync(self, *levels: LogLevel) -> None:
        """Send events on ``levels`` and wait for the reporter to acknowledge.

        Raises
        ------
        LevelConflictError
            When a level is already registered as async.
        """
        self._routing.set_sync(*levels)

    def levels(self) -> list[LogLevel]:
        """Return all routed levels, in no particular order."""
        return self._routing.levels()

    def fire(self, event: LogEvent) -> DeliveryMode | None:
        """Dispatch ``event`` according to its level.

        Returns the delivery mode used, or ``None`` when the level is not
        routed. Reporter failures are logged and never propagate to the
        logging facility.
        """
        mode = self._routing.mode_for(event.level)
        if mode is None:
            return None
        try:
            event_id = self._senders[mode](event)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Sentry reporter raised while sending %s event", mode.value, exc_info=exc)
            self._emit_diagnostic(
                "sentry_send_failed",
                {"mode": mode.value, "level": event.level.severity, "logger": event.logger_name, "exception": repr(exc)},
            )
        else:
            LOGGER.debug("Routed %s event to Sentry (%s): %s", event.level.severity, mode.value, event_id)
        return mode

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Sentry hook diagnostic raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["DiagnosticHook", "SentryHook"]
