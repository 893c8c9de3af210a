"""Look-ahead collision checks for the snake's next head position."""

from __future__ import annotations

from typing import TYPE_CHECKING

from snake_core.geometry import crosses_edge, successor_cell

if TYPE_CHECKING:
    from snake_core.geometry import Direction
    from snake_core.snake import Snake


def would_collide(snake: Snake, direction: Direction | None = None) -> bool:
    """Check whether moving the head one step would end the game.

    Uses *direction* when given, otherwise the head's own direction. The
    step collides when it leaves the board through any edge or lands on a
    cell any segment currently occupies. The tail's cell counts as
    occupied even though the tail would vacate it on the same step.
    """
    head = snake.head
    heading = direction if direction is not None else head.direction
    if crosses_edge(heading, head.position, snake.board_size):
        return True
    nxt = successor_cell(heading, head.position, snake.board_size)
    return snake.occupies(nxt)
