"""Tests for the async GameSession event serializer."""

from __future__ import annotations

import asyncio

import pytest

from snake_core.config import EngineConfig
from snake_core.engine import GameEngine, GameState
from snake_core.geometry import Direction
from snake_core.session import GameSession
from snake_core.snake import Snake

# Long enough that the timer never fires during a manually driven test.
_MANUAL = 60_000


def _engine() -> GameEngine:
    engine = GameEngine(EngineConfig(seed=0))
    engine.state = GameState(snake=Snake.initial(), apple=0)
    return engine


class TestSessionOrdering:
    @pytest.mark.asyncio
    async def test_events_applied_in_order(self):
        session = GameSession(_engine(), tick_interval_ms=_MANUAL)
        async with session:
            session.request_direction(Direction.UP)
            session.request_tick()
            session.request_direction(Direction.LEFT)
            await session.drain()
        snake = session.engine.snake
        assert snake.positions == (51, 52, 64, 76)
        assert snake.direction == Direction.LEFT
        assert session.engine.state.tick == 3

    @pytest.mark.asyncio
    async def test_listeners_see_each_commit(self):
        seen = []
        session = GameSession(_engine(), tick_interval_ms=_MANUAL)
        session.add_listener(lambda snap: seen.append(snap.cells_of(1)))
        async with session:
            session.request_tick()
            # A reversal commits nothing and is not broadcast.
            session.request_direction(Direction.LEFT)
            session.request_direction(Direction.DOWN)
            await session.drain()
        assert seen == [[74, 75, 76, 77], [75, 76, 77, 89]]
        assert session.latest.cells_of(1) == [75, 76, 77, 89]

    @pytest.mark.asyncio
    async def test_removed_listener_not_called(self):
        seen = []
        session = GameSession(_engine(), tick_interval_ms=_MANUAL)
        session.add_listener(seen.append)
        session.remove_listener(seen.append)
        async with session:
            session.request_tick()
            await session.drain()
        assert seen == []

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_worker(self):
        def boom(_snapshot):
            raise RuntimeError("listener failure")

        session = GameSession(_engine(), tick_interval_ms=_MANUAL)
        session.add_listener(boom)
        async with session:
            session.request_tick()
            session.request_tick()
            await session.drain()
            assert session.running
        assert session.engine.state.tick == 2


class TestSessionTimer:
    @pytest.mark.asyncio
    async def test_timer_ticks_until_lost(self):
        session = GameSession(_engine(), tick_interval_ms=5)
        async with session:
            await asyncio.wait_for(session.finished.wait(), timeout=5.0)
        assert session.engine.lost
        assert session.engine.snake.head.position == 83
        assert session.latest.lost

    @pytest.mark.asyncio
    async def test_interval_defaults_to_config(self):
        engine = GameEngine(EngineConfig(tick_interval_ms=250, seed=0))
        session = GameSession(engine)
        assert session.tick_interval_ms == 250

    @pytest.mark.asyncio
    async def test_invalid_interval(self):
        with pytest.raises(ValueError, match="tick_interval_ms"):
            GameSession(_engine(), tick_interval_ms=0)


class TestSessionLifecycle:
    @pytest.mark.asyncio
    async def test_stop_cancels_tasks(self):
        session = GameSession(_engine(), tick_interval_ms=_MANUAL)
        session.start()
        assert session.running
        await session.stop()
        assert not session.running

    @pytest.mark.asyncio
    async def test_double_start_rejected(self):
        session = GameSession(_engine(), tick_interval_ms=_MANUAL)
        session.start()
        try:
            with pytest.raises(RuntimeError, match="already started"):
                session.start()
        finally:
            await session.stop()

    @pytest.mark.asyncio
    async def test_events_after_loss_ignored(self):
        engine = _engine()
        engine.state = GameState(
            snake=Snake.from_positions([83, 82, 81, 80]), apple=0,
        )
        session = GameSession(engine, tick_interval_ms=_MANUAL)
        async with session:
            session.request_tick()
            await session.drain()
            assert session.finished.is_set()
            lost_state = engine.state
            session.request_direction(Direction.UP)
            session.request_tick()
            await session.drain()
        assert engine.state is lost_state
        assert engine.snake.positions == (83, 82, 81, 80)

    @pytest.mark.asyncio
    async def test_start_on_lost_engine_is_finished(self):
        engine = _engine()
        engine.state = GameState(snake=Snake.initial(), apple=0, lost=True)
        session = GameSession(engine, tick_interval_ms=_MANUAL)
        async with session:
            assert session.finished.is_set()


class TestSessionErrors:
    @pytest.mark.asyncio
    async def test_direction_names_accepted(self):
        session = GameSession(_engine(), tick_interval_ms=_MANUAL)
        async with session:
            session.request_direction("up")
            session.request_tick()
            await session.drain()
        assert session.engine.snake.positions == (52, 64, 76, 75)

    @pytest.mark.asyncio
    async def test_invalid_direction_rejected_at_caller(self):
        session = GameSession(_engine(), tick_interval_ms=_MANUAL)
        with pytest.raises(ValueError, match="Unknown direction"):
            session.request_direction("sideways")
        with pytest.raises(TypeError, match="Expected a Direction"):
            session.request_direction(42)

    @pytest.mark.asyncio
    async def test_worker_survives_failing_event(self, monkeypatch):
        engine = _engine()
        calls = []
        original = engine.advance_tick

        def flaky_tick():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("engine failure")
            return original()

        monkeypatch.setattr(engine, "advance_tick", flaky_tick)
        session = GameSession(engine, tick_interval_ms=_MANUAL)
        async with session:
            session.request_tick()
            session.request_tick()
            await asyncio.wait_for(session.drain(), timeout=5.0)
            assert session.running
        assert engine.state.tick == 1
        assert engine.snake.positions == (77, 76, 75, 74)
