"""Read-only board snapshots for renderers."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

import numpy as np

from snake_core.geometry import cell_to_coords

if TYPE_CHECKING:
    from snake_core.engine import GameState


class CellType(enum.IntEnum):
    """Integer codes stored in the snapshot array."""

    EMPTY = 0
    SNAKE = 1
    APPLE = 2


_GLYPHS = {
    CellType.EMPTY: ".",
    CellType.SNAKE: "#",
    CellType.APPLE: "@",
}


class BoardSnapshot:
    """NumPy-backed view of one committed game state.

    ``cells`` has shape ``(board_size, board_size)`` with (row, col)
    ordering consistent with NumPy indexing, and is marked read-only.
    """

    def __init__(self, cells: np.ndarray, lost: bool) -> None:
        self.cells = np.array(cells, dtype=np.int8)
        self.cells.flags.writeable = False
        self.lost = lost

    @classmethod
    def from_state(cls, state: GameState) -> BoardSnapshot:
        """Paint the snake and apple of *state* onto a fresh array."""
        size = state.snake.board_size
        cells = np.zeros((size, size), dtype=np.int8)
        row, col = cell_to_coords(state.apple, size)
        cells[row, col] = CellType.APPLE
        for position in state.snake.positions:
            row, col = cell_to_coords(position, size)
            cells[row, col] = CellType.SNAKE
        return cls(cells, state.lost)

    @property
    def board_size(self) -> int:
        return self.cells.shape[0]

    def cell(self, index: int) -> CellType:
        """Return the cell type at a linear cell index."""
        row, col = cell_to_coords(index, self.board_size)
        return CellType(self.cells[row, col])

    def cells_of(self, cell_type: CellType) -> list[int]:
        """Return the linear indices holding *cell_type*, in ascending order."""
        return np.flatnonzero(self.cells == cell_type).tolist()

    def render_text(self) -> str:
        """Render the board as rows of ``.``, ``#`` and ``@`` characters."""
        lines = [
            "".join(_GLYPHS[CellType(v)] for v in row)
            for row in self.cells.tolist()
        ]
        lines.append("Lost" if self.lost else "Not lost")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Serialize the snapshot to a dictionary."""
        return {
            "board_size": self.board_size,
            "lost": self.lost,
            "cells": self.cells.tolist(),
        }
