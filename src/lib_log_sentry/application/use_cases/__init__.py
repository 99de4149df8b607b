"""Use cases executed by the hook for routed events."""

from __future__ import annotations

from .send_event import SendCallable, create_send_event

__all__ = ["SendCallable", "create_send_event"]
