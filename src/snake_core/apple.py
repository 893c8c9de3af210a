"""Apple placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from snake_core.config import BOARD_SIZE

if TYPE_CHECKING:
    from snake_core.snake import Snake

logger = logging.getLogger(__name__)


def place_apple(
    snake: Snake,
    rng: np.random.Generator | None = None,
    board_size: int = BOARD_SIZE,
) -> int:
    """Return a uniformly random cell not occupied by *snake*.

    Draws cells until a free one comes up. The snake must leave at least
    one cell free; a snake filling the whole board never returns.
    """
    rng = rng if rng is not None else np.random.default_rng()
    occupied = set(snake.positions)
    cell_count = board_size * board_size

    draws = 1
    cell = int(rng.integers(cell_count))
    while cell in occupied:
        draws += 1
        cell = int(rng.integers(cell_count))

    logger.debug("Apple placed at %d after %d draw(s).", cell, draws)
    return cell
