from __future__ import annotations

import logging

import pytest

from lib_log_sentry import runtime
from lib_log_sentry.adapters import QueuedReporter, SentryLoggingHandler, SentrySdkReporter
from lib_log_sentry.domain import LevelConflictError, LogLevel
from lib_log_sentry.hook import SentryHook


@pytest.fixture
def service_logger():
    logger = logging.getLogger("tests.service")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _sentry_handlers(logger: logging.Logger) -> list[SentryLoggingHandler]:
    return [handler for handler in logger.handlers if isinstance(handler, SentryLoggingHandler)]


def test_init_attaches_handler_and_registers_default(service_logger, sentry_calls) -> None:
    hook = runtime.init(logger=service_logger, async_levels="error", sync_levels="critical")

    assert isinstance(hook, SentryHook)
    assert hook.async_levels == frozenset({LogLevel.ERROR})
    assert hook.sync_levels == frozenset({LogLevel.CRITICAL})
    assert [handler.hook for handler in _sentry_handlers(service_logger)] == [hook]
    assert runtime.is_initialised()
    assert runtime.current_default_reporter() is hook.reporter
    assert isinstance(hook.reporter, SentrySdkReporter)
    assert SentryHook().reporter is hook.reporter


def test_logging_after_init_reaches_sentry(service_logger, sentry_calls) -> None:
    runtime.init(logger=service_logger, async_levels="error", sync_levels="critical")

    service_logger.error("async path", extra={"job": "nightly"})
    service_logger.critical("sync path")
    service_logger.warning("not routed")

    assert sentry_calls.names() == ["capture_message", "capture_message", "flush"]
    assert sentry_calls.calls[0][2]["tags"] == {"job": "nightly"}


def test_init_with_only_sync_levels_uses_remaining_defaults(service_logger, sentry_calls) -> None:
    hook = runtime.init(logger=service_logger, sync_levels="critical")

    assert hook.async_levels == frozenset({LogLevel.ERROR})
    assert hook.sync_levels == frozenset({LogLevel.CRITICAL})


def test_conflicting_levels_leave_sdk_uninitialised(service_logger, sentry_calls) -> None:
    with pytest.raises(LevelConflictError):
        runtime.init(logger=service_logger, dsn="https://key@example.invalid/1", async_levels="error", sync_levels="error")

    assert "init" not in sentry_calls.names()


def test_init_with_dsn_initialises_sdk(service_logger, sentry_calls) -> None:
    runtime.init(logger=service_logger, dsn="https://key@example.invalid/1", environment="ci")

    assert sentry_calls.calls[0][0] == "init"
    assert sentry_calls.calls[0][2]["environment"] == "ci"


def test_init_twice_requires_shutdown(service_logger, sentry_calls) -> None:
    runtime.init(logger=service_logger)

    with pytest.raises(RuntimeError, match="cannot be called twice"):
        runtime.init(logger=service_logger)


def test_conflicting_levels_fail_without_side_effects(service_logger, sentry_calls) -> None:
    with pytest.raises(LevelConflictError, match="^Log level error already in async levels$"):
        runtime.init(logger=service_logger, async_levels="error", sync_levels="error", queue_enabled=True)

    assert not runtime.is_initialised()
    assert _sentry_handlers(service_logger) == []


def test_queue_enabled_wraps_sdk_reporter(service_logger, sentry_calls) -> None:
    hook = runtime.init(logger=service_logger, async_levels="error", queue_enabled=True, queue_maxsize=8)
    queued = hook.reporter

    assert isinstance(queued, QueuedReporter)
    assert queued.running
    assert isinstance(queued.reporter, SentrySdkReporter)

    service_logger.error("via worker")
    runtime.shutdown()

    assert not queued.running
    assert sentry_calls.names() == ["capture_message", "flush"]


def test_shutdown_detaches_and_flushes(service_logger, sentry_calls) -> None:
    runtime.init(logger=service_logger, flush_timeout=0.75)

    runtime.shutdown()

    assert _sentry_handlers(service_logger) == []
    assert not runtime.is_initialised()
    assert sentry_calls.calls == [("flush", (), {"timeout": 0.75})]

    service_logger.error("after shutdown")
    assert sentry_calls.names() == ["flush"]


def test_shutdown_without_init_raises() -> None:
    with pytest.raises(RuntimeError, match="must be called before"):
        runtime.shutdown()


def test_shutdown_clears_default_reporter(service_logger, sentry_calls) -> None:
    hook = runtime.init(logger=service_logger)
    runtime.shutdown()

    assert runtime.current_default_reporter() is not hook.reporter


def test_init_defaults_to_root_logger(sentry_calls) -> None:
    root = logging.getLogger()
    runtime.init()
    try:
        assert any(isinstance(handler, SentryLoggingHandler) for handler in root.handlers)
    finally:
        runtime.shutdown()

    assert not any(isinstance(handler, SentryLoggingHandler) for handler in root.handlers)
