"""Stdlib :mod:`logging` bridge feeding records into :class:`SentryHook`.

Purpose
-------
Satisfy the plugin contract of Python's logging facility: a
:class:`logging.Handler` whose filter asks the hook which levels it routes and
whose ``emit`` hands each admitted record to :meth:`SentryHook.fire`.

Contents
--------
* :func:`record_to_event` - :class:`logging.LogRecord` to :class:`LogEvent`.
* :class:`SentryLoggingHandler` - the handler attached by
  :func:`lib_log_sentry.runtime.init`.

System Role
-----------
Outermost adapter. Structured fields come from ``extra=`` on the logging call;
``logger.exception(...)`` and ``exc_info=`` populate the reserved error field.
"""

from __future__ import annotations

import logging
from typing import Any

from lib_log_sentry.domain import ERROR_KEY, LogEvent, LogLevel
from lib_log_sentry.hook import SentryHook

_STANDARD_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}
#: Attributes every :class:`logging.LogRecord` carries; anything else came from ``extra=``.

IGNORED_LOGGER_PREFIXES: tuple[str, ...] = ("sentry_sdk", "urllib3", "lib_log_sentry")
#: Loggers whose records would feed back into Sentry delivery.


def record_to_event(record: logging.LogRecord) -> LogEvent:
    """Translate ``record`` into a :class:`LogEvent`.

    Examples
    --------
    >>> record = logging.makeLogRecord({"name": "app", "levelno": 40, "msg": "x=%s", "args": (1,), "user": "ann"})
    >>> event = record_to_event(record)
    >>> event.level, event.message, dict(event.fields)
    (<LogLevel.ERROR: 40>, 'x=1', {'user': 'ann'})
    """
    fields: dict[str, Any] = {
        key: value for key, value in vars(record).items() if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }
    if not isinstance(fields.get(ERROR_KEY), BaseException) and record.exc_info:
        exc = record.exc_info[1]
        if exc is not None:
            fields[ERROR_KEY] = exc
    return LogEvent(
        level=LogLevel.nearest(record.levelno),
        message=record.getMessage(),
        fields=fields,
        logger_name=record.name,
    )


class SentryLoggingHandler(logging.Handler):
    """Logging handler delegating routed records to a :class:`SentryHook`."""

    def __init__(self, hook: SentryHook, *, ignored_loggers: tuple[str, ...] = IGNORED_LOGGER_PREFIXES) -> None:
        super().__init__(level=logging.NOTSET)
        self.hook = hook
        self._ignored_loggers = ignored_loggers

    def filter(self, record: logging.LogRecord) -> Any:
        if _is_ignored(record.name, self._ignored_loggers):
            return False
        if LogLevel.nearest(record.levelno) not in set(self.hook.levels()):
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.hook.fire(record_to_event(record))
        except Exception:
            self.handleError(record)


def _is_ignored(name: str, prefixes: tuple[str, ...]) -> bool:
    return any(name == prefix or name.startswith(prefix + ".") for prefix in prefixes)


__all__ = ["IGNORED_LOGGER_PREFIXES", "SentryLoggingHandler", "record_to_event"]
