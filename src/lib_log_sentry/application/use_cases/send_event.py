"""Use case turning one routed log event into a reporter call.

Purpose
-------
Share the send logic between the asynchronous and synchronous delivery paths;
the two differ only in which pair of reporter methods is invoked.

Contents
--------
* :func:`create_send_event` factory returning the per-mode send callable.

System Role
-----------
Application-layer step invoked by :meth:`SentryHook.fire` after the routing
table picked a :class:`DeliveryMode`.
"""

from __future__ import annotations

from collections.abc import Callable

from lib_log_sentry.application.ports.reporter import MessageContext, ReporterPort
from lib_log_sentry.domain import DeliveryMode, LogEvent, make_tags

SendCallable = Callable[[LogEvent], str]


def create_send_event(reporter: ReporterPort, mode: DeliveryMode) -> SendCallable:
    """Build the send callable for ``mode`` bound to ``reporter``.

    Events carrying an exception under the reserved error key are reported
    through the error capture method, with the log message attached as a
    :class:`MessageContext`; all other events go through the message capture
    method.

    Examples
    --------
    >>> from lib_log_sentry.domain import LogLevel
    >>> class EchoReporter:
    ...     def capture_message(self, message, tags, *contexts):
    ...         return f"message:{message}:{sorted(tags.items())}"
    ...     def capture_error(self, error, tags, *contexts):
    ...         return f"error:{error!r}:{contexts[0].message}"
    ...     capture_message_and_wait = capture_message
    ...     capture_error_and_wait = capture_error
    >>> send = create_send_event(EchoReporter(), DeliveryMode.ASYNC)
    >>> send(LogEvent(LogLevel.ERROR, "hi", {"user": 7}))
    "message:hi:[('user', '7')]"
    >>> send(LogEvent(LogLevel.ERROR, "hi").with_error(KeyError("k")))
    "error:KeyError('k'):hi"
    """

    if mode is DeliveryMode.ASYNC:
        capture_message = reporter.capture_message
        capture_error = reporter.capture_error
    else:
        capture_message = reporter.capture_message_and_wait
        capture_error = reporter.capture_error_and_wait

    def send(event: LogEvent) -> str:
        tags = make_tags(event.fields)
        error = event.error
        if error is None:
            return capture_message(event.message, tags)
        return capture_error(error, tags, MessageContext(message=event.message))

    return send


__all__ = ["SendCallable", "create_send_event"]
