"""Adapters connecting the hook to Sentry and to the stdlib logging facility."""

from __future__ import annotations

from .logging_handler import SentryLoggingHandler, record_to_event
from .queue import QueuedReporter
from .sentry import SentrySdkReporter, init_sentry

__all__ = [
    "QueuedReporter",
    "SentryLoggingHandler",
    "SentrySdkReporter",
    "init_sentry",
    "record_to_event",
]
