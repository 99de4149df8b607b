"""Public package surface of the Sentry logging hook.

Host code typically either calls :func:`lib_log_sentry.runtime.init` to attach
a fully wired hook to the logging tree, or builds a :class:`SentryHook` around
its own :class:`ReporterPort` and attaches a :class:`SentryLoggingHandler`
itself.
"""

from __future__ import annotations

from .adapters import QueuedReporter, SentryLoggingHandler, SentrySdkReporter, init_sentry, record_to_event
from .application.ports import MessageContext, ReporterPort
from .domain import ERROR_KEY, DeliveryMode, LevelConflictError, LogEvent, LogLevel, make_tags
from .hook import SentryHook

__all__ = [
    "DeliveryMode",
    "ERROR_KEY",
    "LevelConflictError",
    "LogEvent",
    "LogLevel",
    "MessageContext",
    "QueuedReporter",
    "ReporterPort",
    "SentryHook",
    "SentryLoggingHandler",
    "SentrySdkReporter",
    "init_sentry",
    "make_tags",
    "record_to_event",
]
