"""Snake body model and turn propagation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from snake_core.config import BOARD_SIZE, INITIAL_LENGTH
from snake_core.geometry import Direction, coords_to_cell, successor_cell


@dataclass(frozen=True)
class TurnMarker:
    """A turn the head made: where it happened and the direction taken."""

    direction: Direction
    cell: int


@dataclass(frozen=True)
class Segment:
    """One body cell with its own heading and the turns still ahead of it."""

    direction: Direction
    position: int
    pending_turns: tuple[TurnMarker, ...] = field(default=())

    def step(self, board_size: int) -> int:
        return successor_cell(self.direction, self.position, board_size)


class Snake:
    """An immutable, head-first sequence of :class:`Segment`.

    Only the head is steered directly. When it turns, the cell it turned
    at is handed to every following segment as a :class:`TurnMarker`, and
    each segment adopts the new direction once it reaches that cell. With
    one-cell spacing this makes the i-th segment turn i ticks after the
    head, at the same cell.
    """

    def __init__(self, segments, board_size: int = BOARD_SIZE) -> None:
        segments = tuple(segments)
        if not segments:
            raise ValueError("Snake must have at least 1 segment.")
        self.segments: tuple[Segment, ...] = segments
        self.board_size = board_size

    @classmethod
    def initial(
        cls, board_size: int = BOARD_SIZE, length: int = INITIAL_LENGTH,
    ) -> Snake:
        """Build the straight starting snake, head in column 4 heading right."""
        head = coords_to_cell(board_size // 2, 4, board_size)
        return cls(
            (Segment(Direction.RIGHT, head - i) for i in range(length)),
            board_size,
        )

    @classmethod
    def from_positions(
        cls,
        positions,
        direction: Direction = Direction.RIGHT,
        board_size: int = BOARD_SIZE,
    ) -> Snake:
        """Build a snake whose segments all share *direction*."""
        return cls((Segment(direction, p) for p in positions), board_size)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snake):
            return NotImplemented
        return (
            self.segments == other.segments
            and self.board_size == other.board_size
        )

    def __hash__(self) -> int:
        return hash((self.segments, self.board_size))

    def __repr__(self) -> str:
        return f"Snake({list(self.positions)!r}, {self.direction.name})"

    @property
    def head(self) -> Segment:
        return self.segments[0]

    @property
    def tail(self) -> Segment:
        return self.segments[-1]

    @property
    def direction(self) -> Direction:
        """Direction of the head."""
        return self.head.direction

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(seg.position for seg in self.segments)

    def occupies(self, cell: int) -> bool:
        """Check whether any segment sits on *cell*."""
        return any(seg.position == cell for seg in self.segments)

    def move(self, direction: Direction, grow: bool = False) -> Snake:
        """Return the snake after one step with the head heading *direction*.

        With *grow* the snake keeps a new last segment on the cell the tail
        vacated, carrying the tail's heading and pending turns so it
        traces the same path one tick later.

        Bounds and self-collision are not checked here; consult
        :func:`snake_core.collision.would_collide` first.
        """
        size = self.board_size
        head = self.head
        marker: TurnMarker | None = None
        if direction != head.direction:
            marker = TurnMarker(direction, head.position)
            new_head = Segment(
                direction, successor_cell(direction, head.position, size),
            )
        else:
            new_head = replace(head, position=head.step(size))

        moved = [new_head]
        trailing = Segment(direction, head.position)
        for seg in self.segments[1:]:
            position = seg.step(size)
            pending = seg.pending_turns
            if marker is not None:
                pending = (*pending, marker)
            trailing = Segment(seg.direction, seg.position, pending)

            for i, turn in enumerate(pending):
                if turn.cell == position:
                    moved.append(
                        Segment(
                            turn.direction,
                            position,
                            pending[:i] + pending[i + 1:],
                        ),
                    )
                    break
            else:
                moved.append(Segment(seg.direction, position, pending))

        if grow:
            moved.append(trailing)
        return Snake(moved, size)

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": list(self.positions),
            "direction": self.direction.name.lower(),
            "segments": [
                {
                    "position": seg.position,
                    "direction": seg.direction.name.lower(),
                    "pending_turns": [
                        [t.direction.name.lower(), t.cell]
                        for t in seg.pending_turns
                    ],
                }
                for seg in self.segments
            ],
        }
