"""Resolve hook settings from keyword arguments and environment variables.

Explicit arguments always win; environment variables fill the gaps; the
module constants supply the remaining defaults. Parsing failures raise
:class:`ValueError` naming the offending variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Mapping

from lib_log_sentry.domain import LogLevel


ENV_DSN = "SENTRY_DSN"
ENV_ASYNC_LEVELS = "LOG_SENTRY_ASYNC_LEVELS"
ENV_SYNC_LEVELS = "LOG_SENTRY_SYNC_LEVELS"
ENV_FLUSH_TIMEOUT = "LOG_SENTRY_FLUSH_TIMEOUT"
ENV_QUEUE = "LOG_SENTRY_QUEUE"
ENV_QUEUE_MAXSIZE = "LOG_SENTRY_QUEUE_MAXSIZE"
ENV_ENVIRONMENT = "LOG_SENTRY_ENVIRONMENT"

DEFAULT_ASYNC_LEVELS: tuple[LogLevel, ...] = (LogLevel.ERROR, LogLevel.CRITICAL)
DEFAULT_FLUSH_TIMEOUT = 2.0
DEFAULT_QUEUE_MAXSIZE = 1024

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

LevelsInput = Iterable[LogLevel | str] | str


@dataclass(slots=True, frozen=True)
class HookSettings:
    """Fully resolved configuration consumed by :func:`build_runtime`."""

    dsn: str | None
    environment: str | None
    async_levels: tuple[LogLevel, ...]
    sync_levels: tuple[LogLevel, ...]
    flush_timeout: float
    queue_enabled: bool
    queue_maxsize: int


def build_hook_settings(
    *,
    dsn: str | None = None,
    environment: str | None = None,
    async_levels: LevelsInput | None = None,
    sync_levels: LevelsInput | None = None,
    flush_timeout: float | None = None,
    queue_enabled: bool | None = None,
    queue_maxsize: int | None = None,
    environ: Mapping[str, str] | None = None,
) -> HookSettings:
    """Merge call arguments with environment overrides into :class:`HookSettings`.

    Examples
    --------
    >>> settings = build_hook_settings(sync_levels="critical", environ={"LOG_SENTRY_ASYNC_LEVELS": "warn, error"})
    >>> [level.name for level in settings.async_levels], [level.name for level in settings.sync_levels]
    (['WARNING', 'ERROR'], ['CRITICAL'])

    The default async levels leave out anything configured as sync:

    >>> [level.name for level in build_hook_settings(sync_levels="critical", environ={}).async_levels]
    ['ERROR']
    """
    env = os.environ if environ is None else environ

    resolved_sync = (
        parse_levels(sync_levels, source="sync_levels") if sync_levels is not None else _levels_from_env(env, ENV_SYNC_LEVELS, ())
    )
    if async_levels is not None:
        resolved_async = parse_levels(async_levels, source="async_levels")
    elif env.get(ENV_ASYNC_LEVELS) is not None:
        resolved_async = parse_levels(env[ENV_ASYNC_LEVELS], source=ENV_ASYNC_LEVELS)
    else:
        # Defaults yield to levels configured for sync delivery.
        resolved_async = tuple(level for level in DEFAULT_ASYNC_LEVELS if level not in resolved_sync)

    return HookSettings(
        dsn=dsn if dsn is not None else (env.get(ENV_DSN) or None),
        environment=environment if environment is not None else (env.get(ENV_ENVIRONMENT) or None),
        async_levels=resolved_async,
        sync_levels=resolved_sync,
        flush_timeout=_positive_float(flush_timeout, source="flush_timeout")
        if flush_timeout is not None
        else _float_from_env(env, ENV_FLUSH_TIMEOUT, DEFAULT_FLUSH_TIMEOUT),
        queue_enabled=queue_enabled if queue_enabled is not None else _bool_from_env(env, ENV_QUEUE, False),
        queue_maxsize=_positive_int(queue_maxsize, source="queue_maxsize")
        if queue_maxsize is not None
        else _int_from_env(env, ENV_QUEUE_MAXSIZE, DEFAULT_QUEUE_MAXSIZE),
    )


def parse_levels(value: LevelsInput, *, source: str) -> tuple[LogLevel, ...]:
    """Normalise a comma separated string or an iterable of names/levels.

    Duplicates are removed while keeping first-seen order.
    """
    items: Iterable[LogLevel | str] = value.split(",") if isinstance(value, str) else value
    levels: list[LogLevel] = []
    for item in items:
        if isinstance(item, str):
            if not item.strip():
                continue
            try:
                level = LogLevel.from_name(item)
            except ValueError as exc:
                raise ValueError(f"{source}: {exc}") from exc
        else:
            level = item
        if level not in levels:
            levels.append(level)
    return tuple(levels)


def _levels_from_env(env: Mapping[str, str], name: str, default: tuple[LogLevel, ...]) -> tuple[LogLevel, ...]:
    raw = env.get(name)
    if raw is None:
        return default
    return parse_levels(raw, source=name)


def _float_from_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    return _positive_float(value, source=name)


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    return _positive_int(value, source=name)


def _bool_from_env(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _positive_float(value: float, *, source: str) -> float:
    if value <= 0:
        raise ValueError(f"{source} must be positive")
    return float(value)


def _positive_int(value: int, *, source: str) -> int:
    if value <= 0:
        raise ValueError(f"{source} must be positive")
    return int(value)


__all__ = [
    "DEFAULT_ASYNC_LEVELS",
    "ENV_ASYNC_LEVELS",
    "ENV_DSN",
    "ENV_ENVIRONMENT",
    "ENV_FLUSH_TIMEOUT",
    "ENV_QUEUE",
    "ENV_QUEUE_MAXSIZE",
    "ENV_SYNC_LEVELS",
    "HookSettings",
    "build_hook_settings",
    "parse_levels",
]
