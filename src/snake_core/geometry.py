"""Cell indexing and single-step movement on a square board.

Cells are plain integers in ``[0, board_size ** 2)`` laid out row-major:
``row = cell // board_size`` and ``col = cell % board_size``. Step
functions never clamp or wrap, so a step off the top or bottom edge yields
an index outside that range; use :func:`crosses_edge` to detect steps off
the left and right edges, which land on a valid index in the wrong row.
"""

from __future__ import annotations

import enum

from snake_core.config import BOARD_SIZE


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_str(cls, name: str) -> Direction:
        """Parse a case-insensitive direction name such as ``"up"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {name!r}") from exc


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def cell_to_coords(cell: int, board_size: int = BOARD_SIZE) -> tuple[int, int]:
    """Return the ``(row, col)`` of a cell index."""
    return cell // board_size, cell % board_size


def coords_to_cell(row: int, col: int, board_size: int = BOARD_SIZE) -> int:
    """Return the cell index of a ``(row, col)`` coordinate."""
    return row * board_size + col


def successor_cell(
    direction: Direction, cell: int, board_size: int = BOARD_SIZE,
) -> int:
    """Return the cell one step from *cell* along *direction*."""
    dr, dc = direction.value
    return cell + dr * board_size + dc


def predecessor_cell(
    direction: Direction, cell: int, board_size: int = BOARD_SIZE,
) -> int:
    """Return the cell one step behind *cell* when travelling *direction*."""
    return successor_cell(direction.opposite, cell, board_size)


def crosses_edge(
    direction: Direction, cell: int, board_size: int = BOARD_SIZE,
) -> bool:
    """Check whether one step from *cell* along *direction* leaves the board."""
    nxt = successor_cell(direction, cell, board_size)
    if nxt < 0 or nxt >= board_size * board_size:
        return True
    col = cell % board_size
    if direction == Direction.RIGHT:
        return col == board_size - 1
    if direction == Direction.LEFT:
        return col == 0
    return False
