"""Runtime façade attaching the Sentry hook to the stdlib logging tree.

Purpose
-------
Expose a stable entry point (``init``, ``shutdown``, the default-reporter
registry) that host applications use instead of wiring the inner layers by
hand.

Contents
--------
* ``init`` - composition root: settings, SDK, reporter, hook, handler.
* ``shutdown`` - deterministic teardown.
* ``set_default_reporter`` / ``current_default_reporter`` /
  ``clear_default_reporter`` - explicit process-wide registry consulted by
  hooks built without a reporter.

System Role
-----------
Outer shell: hosts depend on this module and on
:class:`~lib_log_sentry.hook.SentryHook`; adapters stay an implementation
detail.
"""

from __future__ import annotations

import logging

from lib_log_sentry.hook import DiagnosticHook, SentryHook

from ._composition import build_hook, build_reporter, build_runtime
from ._settings import HookSettings, LevelsInput, build_hook_settings, parse_levels
from ._state import (
    SentryRuntime,
    clear_default_reporter,
    clear_runtime,
    current_default_reporter,
    current_runtime,
    is_initialised,
    set_default_reporter,
    set_runtime,
)


def init(
    *,
    logger: logging.Logger | None = None,
    dsn: str | None = None,
    environment: str | None = None,
    async_levels: LevelsInput | None = None,
    sync_levels: LevelsInput | None = None,
    flush_timeout: float | None = None,
    queue_enabled: bool | None = None,
    queue_maxsize: int | None = None,
    diagnostic: DiagnosticHook | None = None,
) -> SentryHook:
    """Compose the Sentry runtime and attach it to ``logger``.

    Why
    ---
    Hosts call ``init`` once during startup. Centralising the composition keeps
    the initialization order documented in one place: the reporter is
    registered as the process default before anything else can construct a
    hook without one.

    Inputs
    ------
    logger:
        Logger receiving the handler; defaults to the root logger.
    dsn, environment:
        Passed to :func:`sentry_sdk.init` when ``dsn`` is non-empty
        (``SENTRY_DSN`` / ``LOG_SENTRY_ENVIRONMENT``).
    async_levels, sync_levels:
        Levels (names or :class:`LogLevel`) for each delivery mode.
    flush_timeout, queue_enabled, queue_maxsize:
        Reporter tuning; see :mod:`lib_log_sentry.runtime._settings`.
    diagnostic:
        Optional callback receiving hook diagnostics.

    Outputs
    -------
    :class:`SentryHook` wired into the logging tree.

    Side Effects
    ------------
    Raises :class:`RuntimeError` when a runtime is already active, and
    :class:`ValueError` (including :class:`LevelConflictError`) for invalid
    settings. Starts a worker thread when the queue is enabled.
    """

    if is_initialised():
        raise RuntimeError(
            "lib_log_sentry.runtime.init() cannot be called twice without shutdown(); call shutdown() first",
        )

    settings = build_hook_settings(
        dsn=dsn,
        environment=environment,
        async_levels=async_levels,
        sync_levels=sync_levels,
        flush_timeout=flush_timeout,
        queue_enabled=queue_enabled,
        queue_maxsize=queue_maxsize,
    )
    target = logger if logger is not None else logging.getLogger()
    runtime = build_runtime(settings, logger=target, diagnostic=diagnostic)
    set_default_reporter(runtime.reporter)
    set_runtime(runtime)
    return runtime.hook


def shutdown(timeout: float | None = None) -> None:
    """Detach the handler, drain the queue and flush the SDK.

    Side Effects
    ------------
    Clears the runtime singleton and the default reporter. Raises
    :class:`RuntimeError` when ``init`` has not been called.
    """

    runtime = current_runtime()
    runtime.logger.removeHandler(runtime.handler)
    try:
        if runtime.queue is not None:
            runtime.queue.stop(drain=True, timeout=timeout)
        runtime.sdk_reporter.flush(timeout)
    finally:
        clear_runtime()
        clear_default_reporter()


__all__ = [
    "HookSettings",
    "SentryRuntime",
    "build_hook",
    "build_hook_settings",
    "build_reporter",
    "build_runtime",
    "clear_default_reporter",
    "current_default_reporter",
    "current_runtime",
    "init",
    "is_initialised",
    "parse_levels",
    "set_default_reporter",
    "shutdown",
]
