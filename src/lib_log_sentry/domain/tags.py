"""Translate event fields into the flat tag map Sentry expects."""

from __future__ import annotations

from typing import Any, Mapping

from .events import ERROR_KEY


def make_tags(fields: Mapping[str, Any], *, error_key: str = ERROR_KEY) -> dict[str, str]:
    """Render every field except ``error_key`` as a string tag.

    Values go through :func:`str` unchanged; nothing is escaped or truncated.

    Examples
    --------
    >>> make_tags({"AAA": 123, "error": ValueError("x"), "BBB": {"aaa": 123}})
    {'AAA': '123', 'BBB': "{'aaa': 123}"}
    """
    return {str(key): str(value) for key, value in fields.items() if key != error_key}


__all__ = ["make_tags"]
