"""Port describing the error-tracking client the hook reports through.

Purpose
-------
Pin the four capture capabilities the hook depends on so any backend (the
Sentry SDK adapter, a queued wrapper, a test fake) can be plugged in.

Contents
--------
* :class:`MessageContext` - auxiliary payload carrying the log message when an
  error is captured.
* :class:`ReporterPort` - runtime-checkable protocol with the capture methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol, runtime_checkable


@dataclass(slots=True, frozen=True)
class MessageContext:
    """Log message attached to a captured error."""

    message: str


@runtime_checkable
class ReporterPort(Protocol):
    """Send messages and errors to an error-tracking service.

    The plain variants return as soon as the capture is issued; the
    ``*_and_wait`` variants block until the backend acknowledges delivery.
    Every method returns the backend's event identifier (empty when the
    backend has none yet).
    """

    def capture_message(self, message: str, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        """Report ``message`` without blocking."""

    def capture_error(self, error: BaseException, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        """Report ``error`` without blocking."""

    def capture_message_and_wait(self, message: str, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        """Report ``message`` and wait for delivery."""

    def capture_error_and_wait(self, error: BaseException, tags: Mapping[str, str], *contexts: MessageContext) -> str:
        """Report ``error`` and wait for delivery."""


__all__ = ["MessageContext", "ReporterPort"]
