"""Headless simulation helpers and throughput benchmarking."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from snake_core.config import EngineConfig
from snake_core.engine import GameEngine, GameState
from snake_core.geometry import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, "
            f"{self.total_ticks} ticks in {self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def play_random_game(
    engine: GameEngine,
    rng: np.random.Generator,
    *,
    max_ticks: int = 500,
    turn_probability: float = 0.2,
) -> GameState:
    """Drive *engine* until it is lost or *max_ticks* events have run.

    Each event is a direction request with probability *turn_probability*
    and a plain tick otherwise.
    """
    for _ in range(max_ticks):
        if engine.lost:
            break
        if rng.random() < turn_probability:
            direction = _DIRECTIONS[int(rng.integers(len(_DIRECTIONS)))]
            engine.request_direction_change(direction)
        else:
            engine.advance_tick()
    return engine.state


def benchmark_throughput(
    *,
    num_games: int = 100,
    max_ticks: int = 500,
    board_size: int = 12,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw engine throughput with a random turning policy."""
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    rng = np.random.default_rng(seed)
    engine = GameEngine(EngineConfig(board_size=board_size, seed=seed))

    total_ticks = 0
    start = time.perf_counter()
    for _ in range(num_games):
        engine.reset(seed=int(rng.integers(2**31)))
        state = play_random_game(engine, rng, max_ticks=max_ticks)
        # A losing event does not count as a move, so add it back.
        total_ticks += state.tick + int(state.lost)

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
