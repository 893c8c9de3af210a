"""Tests for the collision oracle."""

from snake_core.collision import would_collide
from snake_core.geometry import Direction, cell_to_coords
from snake_core.snake import Snake


class TestWallCollision:
    def test_initial_snake_is_safe(self):
        snake = Snake.initial()
        assert not would_collide(snake)
        assert not would_collide(snake, Direction.UP)
        assert not would_collide(snake, Direction.DOWN)

    def test_off_right_edge(self):
        snake = Snake.from_positions([83, 82, 81, 80])
        assert would_collide(snake)
        assert not would_collide(snake, Direction.UP)

    def test_off_right_edge_top_corner(self):
        # One step right from cell 11 lands on cell 12, which is on the
        # board but in the next row.
        snake = Snake.from_positions([11, 10])
        assert would_collide(snake)

    def test_off_left_edge(self):
        snake = Snake.from_positions([72, 73, 74], Direction.LEFT)
        assert would_collide(snake)
        assert would_collide(Snake.from_positions([12], Direction.LEFT))

    def test_off_top(self):
        snake = Snake.from_positions([4, 16, 28], Direction.UP)
        assert would_collide(snake)

    def test_off_bottom(self):
        snake = Snake.from_positions([136, 124, 112], Direction.DOWN)
        assert would_collide(snake)

    def test_every_off_board_step_flagged(self):
        size = 12
        for cell in range(size * size):
            row, col = cell_to_coords(cell, size)
            for direction in Direction:
                dr, dc = direction.value
                off = not (0 <= row + dr < size and 0 <= col + dc < size)
                snake = Snake.from_positions([cell], direction)
                assert would_collide(snake) == off


class TestSelfCollision:
    def test_reversal_hits_neck(self):
        assert would_collide(Snake.initial(), Direction.LEFT)

    def test_tail_cell_counts_as_occupied(self):
        # Head at 76 with the body curling round to the tail at 88.
        snake = Snake.from_positions([76, 77, 89, 88], Direction.LEFT)
        assert would_collide(snake, Direction.DOWN)

    def test_free_cell_next_to_body(self):
        snake = Snake.from_positions([76, 77, 89, 88], Direction.LEFT)
        assert not would_collide(snake)
        assert not would_collide(snake, Direction.UP)

    def test_does_not_mutate(self):
        snake = Snake.initial()
        would_collide(snake, Direction.UP)
        assert snake.positions == (76, 75, 74, 73)
