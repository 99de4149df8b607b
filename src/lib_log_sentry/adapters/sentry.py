"""Sentry SDK adapter implementing :class:`ReporterPort`.

Purpose
-------
Translate the hook's capture calls into ``sentry_sdk`` calls against the
process-global SDK client.

Contents
--------
* :func:`init_sentry` - initialise the SDK without its own logging integration.
* :class:`SentrySdkReporter` - concrete :class:`ReporterPort`.

System Role
-----------
Default reporter installed by :mod:`lib_log_sentry.runtime`. Non-blocking
captures hand the event to the SDK transport, which delivers it from its own
background worker; the ``*_and_wait`` variants additionally flush that worker.
Transport errors stay inside the SDK.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from lib_log_sentry.application.ports.reporter import MessageContext, ReporterPort

LOGGER = logging.getLogger(__name__)

CONTEXT_NAME = "log"
#: Key of the Sentry context that carries the log message of captured errors.

MESSAGE_LEVEL = "error"
#: Sentry level of captured messages; routing by severity happens before the reporter.


def init_sentry(dsn: str | None, *, environment: str | None = None, **options: Any) -> bool:
    """Initialise ``sentry_sdk`` for use behind the hook.

    The SDK's own logging integration is disabled so records are not reported
    twice (once by the SDK, once by :class:`SentryLoggingHandler`). An empty
    ``dsn`` skips initialisation and returns ``False``.
    """
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[LoggingIntegration(event_level=None, level=None)],
        **options,
    )
    LOGGER.debug("Sentry SDK initialised (environment=%s)", environment)
    return True


class SentrySdkReporter(ReporterPort):
    """Report through the global ``sentry_sdk`` client.

    Parameters
    ----------
    flush_timeout:
        Seconds the blocking variants wait for the transport to drain.
        ``None`` uses the SDK's configured shutdown timeout.
    """

    def __init__(self, *, flush_timeout: float | None = 2.0) -> None:
        self._flush_timeout = flush_timeout

    @property
    def flush_timeout(self) -> float | None:
        return self._flush_timeout

    def capture_message(self, message: str, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        event_id = sentry_sdk.capture_message(
            message, level=MESSAGE_LEVEL, tags=dict(tags), contexts=_contexts(contexts)
        )
        return event_id or ""

    def capture_error(self, error: BaseException, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        event_id = sentry_sdk.capture_exception(error, tags=dict(tags), contexts=_contexts(contexts))
        return event_id or ""

    def capture_message_and_wait(self, message: str, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        event_id = self.capture_message(message, tags, *contexts)
        self.flush()
        return event_id

    def capture_error_and_wait(self, error: BaseException, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        event_id = self.capture_error(error, tags, *contexts)
        self.flush()
        return event_id

    def flush(self, timeout: float | None = None) -> None:
        """Block until queued events are sent or ``timeout`` elapses."""
        sentry_sdk.flush(timeout=timeout if timeout is not None else self._flush_timeout)


def _contexts(contexts: tuple[MessageContext, ...]) -> dict[str, dict[str, Any]]:
    """Fold message contexts into Sentry's ``contexts`` mapping.

    Examples
    --------
    >>> _contexts((MessageContext("disk full"),))
    {'log': {'message': 'disk full'}}
    >>> _contexts(())
    {}
    """
    if not contexts:
        return {}
    messages = [context.message for context in contexts]
    message = messages[0] if len(messages) == 1 else "\n".join(messages)
    return {CONTEXT_NAME: {"message": message}}


__all__ = ["CONTEXT_NAME", "MESSAGE_LEVEL", "SentrySdkReporter", "init_sentry"]
