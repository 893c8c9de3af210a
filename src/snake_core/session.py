"""Async session that serializes input and timer events into one queue."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from snake_core.board import BoardSnapshot
from snake_core.engine import GameEngine
from snake_core.geometry import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectionEvent:
    """The player asked the head to turn."""

    direction: Direction


@dataclass(frozen=True)
class TickEvent:
    """The periodic timer fired."""


Listener = Callable[[BoardSnapshot], None]


class GameSession:
    """Owns a :class:`GameEngine` and feeds it events strictly in order.

    Direction requests and timer ticks go through a single FIFO queue
    drained by one worker task, so every event is applied to the state
    produced by the event before it. Listeners are called with a snapshot
    after each committed transition and never see a partial update.
    """

    def __init__(
        self,
        engine: GameEngine | None = None,
        tick_interval_ms: int | None = None,
    ) -> None:
        self.engine = engine if engine is not None else GameEngine()
        self.tick_interval_ms = (
            tick_interval_ms
            if tick_interval_ms is not None
            else self.engine.config.tick_interval_ms
        )
        if self.tick_interval_ms < 1:
            raise ValueError("tick_interval_ms must be at least 1.")
        self.finished = asyncio.Event()
        self._events: asyncio.Queue[DirectionEvent | TickEvent] = (
            asyncio.Queue()
        )
        self._listeners: list[Listener] = []
        self._latest = self.engine.snapshot()
        self._worker: asyncio.Task | None = None
        self._ticker: asyncio.Task | None = None

    async def __aenter__(self) -> GameSession:
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    @property
    def latest(self) -> BoardSnapshot:
        """The most recently committed snapshot."""
        return self._latest

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def request_direction(self, direction: Direction | str) -> None:
        """Queue a direction change behind any events already pending.

        Accepts a :class:`Direction` or its name, such as ``"up"``.
        """
        if isinstance(direction, str):
            direction = Direction.from_str(direction)
        elif not isinstance(direction, Direction):
            raise TypeError(f"Expected a Direction, got {direction!r}.")
        self._events.put_nowait(DirectionEvent(direction))

    def request_tick(self) -> None:
        """Queue a tick outside the timer's cadence."""
        self._events.put_nowait(TickEvent())

    def start(self) -> None:
        """Start the worker and the tick timer. Needs a running event loop."""
        if self._worker is not None:
            raise RuntimeError("Session already started.")
        if self.engine.lost:
            self.finished.set()
        self._worker = asyncio.create_task(self._run_events())
        self._ticker = asyncio.create_task(self._run_ticker())
        logger.info(
            "Session started (tick every %d ms).", self.tick_interval_ms,
        )

    async def drain(self) -> None:
        """Wait until every queued event has been applied."""
        await self._events.join()

    async def stop(self) -> None:
        """Cancel the timer and worker and wait for both to exit."""
        tasks = [
            t for t in (self._ticker, self._worker)
            if t is not None and not t.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Session stopped at tick %d.", self.engine.state.tick)

    async def _run_ticker(self) -> None:
        interval = self.tick_interval_ms / 1000.0
        try:
            while not self.finished.is_set():
                await asyncio.sleep(interval)
                if self.finished.is_set():
                    break
                self._events.put_nowait(TickEvent())
        except asyncio.CancelledError:
            logger.debug("Tick timer cancelled.")

    async def _run_events(self) -> None:
        try:
            while True:
                event = await self._events.get()
                try:
                    self._apply(event)
                except Exception:
                    logger.exception("Failed applying %r.", event)
                finally:
                    self._events.task_done()
        except asyncio.CancelledError:
            logger.debug("Event worker cancelled.")

    def _apply(self, event: DirectionEvent | TickEvent) -> None:
        engine = self.engine
        if engine.lost:
            return

        before = engine.state
        if isinstance(event, DirectionEvent):
            engine.request_direction_change(event.direction)
        else:
            engine.advance_tick()
        if engine.state is before:
            return

        self._latest = engine.snapshot()
        self._notify(self._latest)
        if engine.lost:
            self.finished.set()

    def _notify(self, snapshot: BoardSnapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed.", listener)
