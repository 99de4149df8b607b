"""Runtime composition helpers wiring settings, reporters, hook and handler.

Purpose
-------
Translate :class:`HookSettings` into the live :class:`SentryRuntime` singleton.
The helpers keep wiring small, declarative and testable.

Contents
--------
* :func:`build_reporter` - SDK reporter, optionally wrapped in a queue.
* :func:`build_hook` - configured :class:`SentryHook`.
* :func:`build_runtime` - full assembly including the logging handler.
"""

from __future__ import annotations

import logging

from lib_log_sentry.adapters import QueuedReporter, SentryLoggingHandler, SentrySdkReporter, init_sentry
from lib_log_sentry.application.ports.reporter import ReporterPort
from lib_log_sentry.hook import DiagnosticHook, SentryHook

from ._settings import HookSettings
from ._state import SentryRuntime

LOGGER = logging.getLogger(__name__)


def build_reporter(settings: HookSettings) -> tuple[SentrySdkReporter, QueuedReporter | None]:
    """Return the SDK reporter and, when enabled, the started queue around it."""

    sdk_reporter = SentrySdkReporter(flush_timeout=settings.flush_timeout)
    if not settings.queue_enabled:
        return sdk_reporter, None
    queue = QueuedReporter(sdk_reporter, maxsize=settings.queue_maxsize)
    queue.start()
    return sdk_reporter, queue


def build_hook(settings: HookSettings, reporter: ReporterPort, *, diagnostic: DiagnosticHook | None = None) -> SentryHook:
    """Create a hook for ``reporter`` with the levels from ``settings``.

    Raises :class:`~lib_log_sentry.domain.LevelConflictError` when a level is
    configured for both delivery modes.
    """

    hook = SentryHook(reporter, diagnostic=diagnostic)
    hook.set_async(*settings.async_levels)
    hook.set_sync(*settings.sync_levels)
    return hook


def build_runtime(
    settings: HookSettings,
    *,
    logger: logging.Logger,
    diagnostic: DiagnosticHook | None = None,
) -> SentryRuntime:
    """Assemble the runtime and attach its handler to ``logger``."""

    sdk_reporter, queue = build_reporter(settings)
    reporter: ReporterPort = queue if queue is not None else sdk_reporter
    try:
        hook = build_hook(settings, reporter, diagnostic=diagnostic)
    except ValueError:
        if queue is not None:
            queue.stop(drain=False)
        raise
    init_sentry(settings.dsn, environment=settings.environment)
    handler = SentryLoggingHandler(hook)
    logger.addHandler(handler)
    LOGGER.debug(
        "Sentry hook attached to %r (async=%s, sync=%s, queue=%s)",
        logger.name,
        sorted(level.severity for level in hook.async_levels),
        sorted(level.severity for level in hook.sync_levels),
        queue is not None,
    )
    return SentryRuntime(
        hook=hook,
        handler=handler,
        logger=logger,
        reporter=reporter,
        sdk_reporter=sdk_reporter,
        queue=queue,
        settings=settings,
    )


__all__ = ["build_hook", "build_reporter", "build_runtime"]
