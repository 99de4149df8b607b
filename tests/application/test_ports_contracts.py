from __future__ import annotations

import dataclasses

import pytest

from lib_log_sentry.adapters.queue import QueuedReporter
from lib_log_sentry.adapters.sentry import SentrySdkReporter
from lib_log_sentry.application.ports.reporter import MessageContext, ReporterPort


class _MissingWaitVariants:
    def capture_message(self, message, tags, *contexts) -> str:
        return ""

    def capture_error(self, error, tags, *contexts) -> str:
        return ""


def test_recording_fake_satisfies_reporter_port(reporter) -> None:
    assert isinstance(reporter, ReporterPort)


def test_concrete_reporters_satisfy_reporter_port() -> None:
    sdk = SentrySdkReporter()
    assert isinstance(sdk, ReporterPort)
    assert isinstance(QueuedReporter(sdk), ReporterPort)


def test_incomplete_reporter_is_rejected() -> None:
    assert not isinstance(_MissingWaitVariants(), ReporterPort)


def test_message_context_is_immutable() -> None:
    context = MessageContext(message="hello")
    with pytest.raises(dataclasses.FrozenInstanceError):
        context.message = "changed"  # type: ignore[misc]
