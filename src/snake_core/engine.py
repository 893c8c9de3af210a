"""Tick/turn controller composing the body model, apples and collisions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import numpy as np

from snake_core.apple import place_apple
from snake_core.board import BoardSnapshot
from snake_core.collision import would_collide
from snake_core.config import EngineConfig
from snake_core.geometry import Direction, successor_cell
from snake_core.snake import Snake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """One committed state of the game.

    ``tick`` counts committed moves and ``apples_eaten`` counts growths;
    neither feeds back into the simulation.
    """

    snake: Snake
    apple: int
    lost: bool = False
    tick: int = 0
    apples_eaten: int = 0


class GameEngine:
    """Single-snake game driven by direction requests and ticks.

    The engine exclusively owns its :class:`GameState` and replaces it as a
    whole on every transition, so a reader holding ``engine.state`` always
    sees a committed state. Once ``lost`` is set both entry points are
    no-ops until :meth:`reset`.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config if config is not None else EngineConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.state = self._initial_state()

    @property
    def lost(self) -> bool:
        return self.state.lost

    @property
    def snake(self) -> Snake:
        return self.state.snake

    def reset(self, seed: int | None = None) -> GameState:
        """Start a new game, optionally reseeding the apple RNG."""
        if seed is not None:
            self.rng = np.random.default_rng(seed)
        self.state = self._initial_state()
        return self.state

    def request_direction_change(self, direction: Direction) -> GameState:
        """Turn the head towards *direction* and move immediately.

        Reversing straight into the body is ignored. A turn that would hit
        a wall or the body ends the game without moving.
        """
        if self.state.lost:
            return self.state

        if direction == self.state.snake.direction.opposite:
            logger.debug("Ignoring reversal to %s.", direction.name)
            return self.state

        return self._step(direction)

    def advance_tick(self) -> GameState:
        """Move one cell along the head's current direction."""
        if self.state.lost:
            return self.state
        return self._step(self.state.snake.direction)

    def snapshot(self) -> BoardSnapshot:
        """Return a read-only board view of the committed state."""
        return BoardSnapshot.from_state(self.state)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        state = self.state
        return {
            "tick": state.tick,
            "lost": state.lost,
            "apple": state.apple,
            "apples_eaten": state.apples_eaten,
            "snake": state.snake.to_dict(),
        }

    def _initial_state(self) -> GameState:
        snake = Snake.initial(
            self.config.board_size, self.config.initial_length,
        )
        apple = place_apple(snake, self.rng, self.config.board_size)
        return GameState(snake=snake, apple=apple)

    def _step(self, direction: Direction) -> GameState:
        state = self.state
        if would_collide(state.snake, direction):
            self.state = replace(state, lost=True)
            logger.info(
                "Snake collided at tick %d with length %d.",
                state.tick, len(state.snake),
            )
            return self.state

        eats = state.apple == successor_cell(
            direction, state.snake.head.position, self.config.board_size,
        )
        snake = state.snake.move(direction, grow=eats)
        apple = state.apple
        eaten = state.apples_eaten
        if eats:
            apple = place_apple(snake, self.rng, self.config.board_size)
            eaten += 1
            logger.debug(
                "Apple eaten at tick %d; length now %d.",
                state.tick + 1, len(snake),
            )

        self.state = GameState(
            snake=snake, apple=apple, tick=state.tick + 1, apples_eaten=eaten,
        )
        return self.state
