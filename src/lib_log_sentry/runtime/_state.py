"""Runtime state container, default-reporter registry and access helpers.

The default reporter is what :class:`~lib_log_sentry.hook.SentryHook` uses
when constructed without one. Initialization order: register a reporter (or
call :func:`lib_log_sentry.runtime.init`) before constructing such hooks;
otherwise the first lookup installs a :class:`SentrySdkReporter` bound to the
global SDK client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock

from lib_log_sentry.adapters.logging_handler import SentryLoggingHandler
from lib_log_sentry.adapters.queue import QueuedReporter
from lib_log_sentry.adapters.sentry import SentrySdkReporter
from lib_log_sentry.application.ports.reporter import ReporterPort
from lib_log_sentry.hook import SentryHook

from ._settings import HookSettings


@dataclass(slots=True)
class SentryRuntime:
    """Aggregate of live collaborators assembled by :func:`init`."""

    hook: SentryHook
    handler: SentryLoggingHandler
    logger: logging.Logger
    reporter: ReporterPort
    sdk_reporter: SentrySdkReporter
    queue: QueuedReporter | None
    settings: HookSettings


_STATE: SentryRuntime | None = None
_DEFAULT_REPORTER: ReporterPort | None = None
_STATE_LOCK = RLock()


def set_runtime(runtime: SentryRuntime) -> None:
    """Install ``runtime`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = runtime


def clear_runtime() -> None:
    """Remove the active runtime if present."""

    with _STATE_LOCK:
        global _STATE
        _STATE = None


def current_runtime() -> SentryRuntime:
    """Return the active runtime or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise RuntimeError("lib_log_sentry.runtime.init() must be called before using the runtime")
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_log_sentry.runtime.init` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


def set_default_reporter(reporter: ReporterPort) -> None:
    """Register ``reporter`` as the process-wide default."""

    with _STATE_LOCK:
        global _DEFAULT_REPORTER
        _DEFAULT_REPORTER = reporter


def clear_default_reporter() -> None:
    """Forget the registered default reporter."""

    with _STATE_LOCK:
        global _DEFAULT_REPORTER
        _DEFAULT_REPORTER = None


def current_default_reporter() -> ReporterPort:
    """Return the default reporter, installing an SDK reporter on first use."""

    with _STATE_LOCK:
        global _DEFAULT_REPORTER
        if _DEFAULT_REPORTER is None:
            _DEFAULT_REPORTER = SentrySdkReporter()
        return _DEFAULT_REPORTER


__all__ = [
    "SentryRuntime",
    "clear_default_reporter",
    "clear_runtime",
    "current_default_reporter",
    "current_runtime",
    "is_initialised",
    "set_default_reporter",
    "set_runtime",
]
