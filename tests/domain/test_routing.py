from __future__ import annotations

import pytest

from lib_log_sentry.domain.levels import LogLevel
from lib_log_sentry.domain.routing import DeliveryMode, LevelConflictError, LevelRouting


def test_new_routing_is_empty() -> None:
    routing = LevelRouting()
    assert routing.levels() == []
    assert routing.async_levels == frozenset()
    assert routing.sync_levels == frozenset()


def test_set_async_then_sync_conflicts() -> None:
    routing = LevelRouting()
    routing.set_async(LogLevel.ERROR)

    with pytest.raises(LevelConflictError, match="Log level error already in async levels") as info:
        routing.set_sync(LogLevel.ERROR)

    assert info.value.level is LogLevel.ERROR
    assert info.value.registered_as is DeliveryMode.ASYNC
    assert routing.sync_levels == frozenset()


def test_set_sync_then_async_conflicts() -> None:
    routing = LevelRouting()
    routing.set_sync(LogLevel.CRITICAL)

    with pytest.raises(LevelConflictError, match="Log level critical already in sync levels"):
        routing.set_async(LogLevel.CRITICAL)

    assert routing.async_levels == frozenset()


def test_conflict_error_is_a_value_error() -> None:
    assert issubclass(LevelConflictError, ValueError)


def test_conflict_keeps_levels_applied_earlier_in_the_same_call() -> None:
    routing = LevelRouting()
    routing.set_sync(LogLevel.WARNING)

    with pytest.raises(LevelConflictError):
        routing.set_async(LogLevel.INFO, LogLevel.WARNING, LogLevel.ERROR)

    assert routing.async_levels == frozenset({LogLevel.INFO})
    assert routing.sync_levels == frozenset({LogLevel.WARNING})


def test_registering_twice_is_idempotent() -> None:
    routing = LevelRouting()
    routing.set_async(LogLevel.ERROR)
    routing.set_async(LogLevel.ERROR, LogLevel.ERROR)

    assert routing.async_levels == frozenset({LogLevel.ERROR})
    assert routing.levels() == [LogLevel.ERROR]


@pytest.mark.parametrize("level", LogLevel)
def test_every_level_conflicts_both_ways(level: LogLevel) -> None:
    async_first = LevelRouting()
    async_first.set_async(level)
    with pytest.raises(LevelConflictError):
        async_first.set_sync(level)

    sync_first = LevelRouting()
    sync_first.set_sync(level)
    with pytest.raises(LevelConflictError):
        sync_first.set_async(level)


def test_levels_returns_union_in_any_order() -> None:
    routing = LevelRouting()
    routing.set_async(LogLevel.ERROR, LogLevel.CRITICAL)
    routing.set_sync(LogLevel.INFO)

    assert sorted(routing.levels(), key=lambda level: level.value) == [LogLevel.INFO, LogLevel.ERROR, LogLevel.CRITICAL]


def test_mode_for_each_set() -> None:
    routing = LevelRouting()
    routing.set_async(LogLevel.ERROR)
    routing.set_sync(LogLevel.INFO)

    assert routing.mode_for(LogLevel.ERROR) is DeliveryMode.ASYNC
    assert routing.mode_for(LogLevel.INFO) is DeliveryMode.SYNC
    assert routing.mode_for(LogLevel.WARNING) is None
