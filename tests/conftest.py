from __future__ import annotations

import threading
from typing import Any, Mapping

import pytest
import sentry_sdk

from lib_log_sentry.application.ports.reporter import MessageContext, ReporterPort
from lib_log_sentry.runtime import _settings, _state


class RecordingReporter(ReporterPort):
    """Reporter fake recording every capture call.

    ``release`` gates the ``*_and_wait`` methods when ``block_waits`` is set so
    tests can observe that the caller really waits.
    """

    def __init__(self, *, block_waits: bool = False) -> None:
        self.calls: list[tuple[str, Any, dict[str, str], tuple[MessageContext, ...]]] = []
        self.block_waits = block_waits
        self.entered_wait = threading.Event()
        self.release = threading.Event()

    @property
    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _record(self, name: str, subject: Any, tags: Mapping[str, str], contexts: tuple[MessageContext, ...]) -> str:
        self.calls.append((name, subject, dict(tags), contexts))
        return f"evt-{len(self.calls)}"

    def _wait(self) -> None:
        if self.block_waits:
            self.entered_wait.set()
            self.release.wait(timeout=5)

    def capture_message(self, message: str, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        return self._record("capture_message", message, tags, contexts)

    def capture_error(self, error: BaseException, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        return self._record("capture_error", error, tags, contexts)

    def capture_message_and_wait(self, message: str, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        self._wait()
        return self._record("capture_message_and_wait", message, tags, contexts)

    def capture_error_and_wait(self, error: BaseException, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        self._wait()
        return self._record("capture_error_and_wait", error, tags, contexts)


class SentryCalls:
    """Stand-in for the ``sentry_sdk`` module-level functions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def install(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def capture_message(message: str, **kwargs: Any) -> str:
            self.calls.append(("capture_message", (message,), kwargs))
            return "sentry-message-id"

        def capture_exception(error: BaseException, **kwargs: Any) -> str:
            self.calls.append(("capture_exception", (error,), kwargs))
            return "sentry-error-id"

        def flush(timeout: float | None = None, callback: Any = None) -> None:
            self.calls.append(("flush", (), {"timeout": timeout}))

        def init(*args: Any, **kwargs: Any) -> None:
            self.calls.append(("init", args, kwargs))

        monkeypatch.setattr(sentry_sdk, "capture_message", capture_message)
        monkeypatch.setattr(sentry_sdk, "capture_exception", capture_exception)
        monkeypatch.setattr(sentry_sdk, "flush", flush)
        monkeypatch.setattr(sentry_sdk, "init", init)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def blocking_reporter() -> RecordingReporter:
    return RecordingReporter(block_waits=True)


@pytest.fixture
def sentry_calls(monkeypatch: pytest.MonkeyPatch) -> SentryCalls:
    calls = SentryCalls()
    calls.install(monkeypatch)
    return calls


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch: pytest.MonkeyPatch):
    """Start every test without runtime state or Sentry environment overrides."""

    for name in (
        _settings.ENV_DSN,
        _settings.ENV_ENVIRONMENT,
        _settings.ENV_ASYNC_LEVELS,
        _settings.ENV_SYNC_LEVELS,
        _settings.ENV_FLUSH_TIMEOUT,
        _settings.ENV_QUEUE,
        _settings.ENV_QUEUE_MAXSIZE,
    ):
        monkeypatch.delenv(name, raising=False)
    _state.clear_runtime()
    _state.clear_default_reporter()
    yield
    if _state.is_initialised():
        runtime = _state.current_runtime()
        runtime.logger.removeHandler(runtime.handler)
        if runtime.queue is not None:
            runtime.queue.stop(drain=False)
    _state.clear_runtime()
    _state.clear_default_reporter()
