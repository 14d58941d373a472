"""Tests for the collision checks."""

from grid_snake.collision import Collision, Outcome, check, detect
from grid_snake.grid import Grid


class TestDetect:
    def test_clear_cell(self):
        grid = Grid()
        assert detect((5, 8), [(4, 8)], grid) is Collision.NONE

    def test_wall(self):
        grid = Grid()
        assert detect((15, 8), [(14, 8)], grid) is Collision.WALL
        assert detect((4, 0), [(4, 1)], grid) is Collision.WALL

    def test_outside_grid_counts_as_wall(self):
        grid = Grid()
        assert detect((-1, 8), [], grid) is Collision.WALL

    def test_body(self):
        grid = Grid()
        body = [(6, 8), (6, 9), (5, 9), (5, 8)]
        assert detect((5, 8), body, grid) is Collision.BODY

    def test_wall_reported_before_body(self):
        grid = Grid()
        assert detect((0, 5), [(0, 5)], grid) is Collision.WALL


class TestCheck:
    def test_continue(self):
        assert check((5, 5), [(4, 5)], Grid()) is Outcome.CONTINUE

    def test_terminal_on_wall(self):
        assert check((0, 5), [(1, 5)], Grid()) is Outcome.TERMINAL

    def test_terminal_on_body(self):
        assert check((5, 5), [(5, 6), (5, 5)], Grid()) is Outcome.TERMINAL
