"""Domain event describing one structured log message bound for Sentry.

Purpose
-------
Provide an immutable representation of what the logging facility hands to the
hook: a level, a rendered message, arbitrary structured fields and, under the
reserved :data:`ERROR_KEY`, optionally the error being logged.

Contents
--------
* :data:`ERROR_KEY` - field name reserved for the attached error.
* :class:`LogEvent` dataclass with copy helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from .levels import LogLevel


ERROR_KEY = "error"
#: Field name whose value, when it is an exception, is reported as the error.


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event delivered to :meth:`SentryHook.fire`.

    Attributes
    ----------
    level:
        :class:`LogLevel` used as the routing key.
    message:
        Rendered message passed by the caller.
    fields:
        Read-only copy of the caller-supplied key/value pairs.
    logger_name:
        Logical logger emitting the event, empty when unknown.
    """

    level: LogLevel
    message: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    logger_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def error(self) -> BaseException | None:
        """Return the attached error, or ``None`` when absent or not an exception.

        Examples
        --------
        >>> LogEvent(LogLevel.ERROR, "boom", {"error": "text"}).error is None
        True
        >>> LogEvent(LogLevel.ERROR, "boom", {"error": KeyError("k")}).error
        KeyError('k')
        """
        value = self.fields.get(ERROR_KEY)
        if isinstance(value, BaseException):
            return value
        return None

    def with_fields(self, **fields: Any) -> "LogEvent":
        """Return a copy with ``fields`` merged over the existing ones."""

        return replace(self, fields={**self.fields, **fields})

    def with_error(self, error: BaseException) -> "LogEvent":
        """Return a copy carrying ``error`` under :data:`ERROR_KEY`."""

        return self.with_fields(**{ERROR_KEY: error})


__all__ = ["ERROR_KEY", "LogEvent"]
