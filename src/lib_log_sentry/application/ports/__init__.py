"""Protocols the application layer depends on."""

from __future__ import annotations

from .reporter import MessageContext, ReporterPort

__all__ = ["MessageContext", "ReporterPort"]
