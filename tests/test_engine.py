"""Tests for the GameEngine module."""

import json

import numpy as np

from grid_snake.collision import Outcome
from grid_snake.config import GameConfig
from grid_snake.engine import EntityKind, GameEngine
from grid_snake.snake import Direction, Segment, SegmentKind


def _engine(**kwargs) -> GameEngine:
    engine = GameEngine(GameConfig(seed=0, **kwargs))
    # Keep the food out of the way unless a test places it.
    engine.food.place((12, 2))
    return engine


class TestEngineInit:
    def test_default_init(self):
        engine = GameEngine(GameConfig(seed=0))
        assert engine.score == 0
        assert engine.tick == 0
        assert not engine.game_over
        assert engine.end_reason is None

    def test_snake_starts_left_of_center(self):
        engine = GameEngine(GameConfig(seed=0))
        assert engine.snake.head == (4, 8)
        assert engine.snake.body_positions == [(3, 8)]
        assert engine.snake.direction == Direction.RIGHT

    def test_food_spawned_on_init(self):
        engine = GameEngine(GameConfig(seed=0))
        assert engine.food.position is not None
        assert engine.grid.is_interior(engine.food.position)
        assert not engine.snake.occupies(engine.food.position)


class TestEngineMovement:
    def test_reference_scenario(self):
        engine = _engine()
        assert engine.step() is Outcome.CONTINUE
        assert engine.snake.head == (5, 8)
        assert engine.snake.body_positions == [(4, 8)]
        engine.step()
        assert engine.snake.head == (6, 8)
        assert engine.snake.body_positions == [(5, 8)]

    def test_direction_change(self):
        engine = _engine()
        engine.enqueue_direction(Direction.UP)
        engine.step()
        assert engine.snake.head == (4, 9)
        assert engine.snake.body_positions == [(4, 8)]

    def test_reversal_rejected_and_discarded(self):
        engine = _engine()
        engine.enqueue_direction(Direction.LEFT)
        engine.step()
        assert engine.snake.direction == Direction.RIGHT
        assert engine.snake.head == (5, 8)
        assert engine.directions.pending is None
        engine.step()
        assert engine.snake.head == (6, 8)

    def test_latest_input_wins(self):
        engine = _engine()
        engine.enqueue_direction("up")
        engine.enqueue_direction("down")
        engine.step()
        assert engine.snake.direction == Direction.DOWN
        assert engine.snake.head == (4, 7)

    def test_unknown_input_ignored(self):
        engine = _engine()
        assert not engine.enqueue_direction("sideways")
        assert engine.directions.pending is None

    def test_game_over_stops_ticks(self):
        engine = _engine()
        engine.game_over = True
        assert engine.step() is Outcome.TERMINAL
        assert engine.tick == 0


class TestEngineGrowth:
    def test_growth_lags_consumption_by_one_tick(self):
        engine = _engine()
        engine.step()
        engine.food.place((6, 8))
        length_before = len(engine.snake)

        engine.step()
        assert engine.snake.head == (6, 8)
        assert engine.score == 1
        assert engine.food.position is None
        assert len(engine.snake) == length_before
        assert engine.growth

        engine.step()
        assert len(engine.snake) == length_before + 1
        assert engine.snake.positions == [(7, 8), (6, 8), (5, 8)]
        assert not engine.growth

    def test_food_respawns_on_next_tick(self):
        engine = _engine()
        engine.food.place((5, 8))
        engine.step()
        assert engine.food.position is None
        engine.step()
        assert engine.food.position is not None
        assert not engine.snake.occupies(engine.food.position)


class TestEngineCollision:
    def test_death_on_wall_hit(self):
        engine = _engine()
        for _ in range(20):
            if engine.step() is Outcome.TERMINAL:
                break
        assert engine.game_over
        assert engine.end_reason == "wall"
        assert engine.tick == 11
        assert engine.snake.head == (15, 8)

    def test_dies_on_body_collision(self):
        engine = _engine(start_col=6, initial_body_length=4)
        engine.enqueue_direction(Direction.UP)
        assert engine.step() is Outcome.CONTINUE
        engine.enqueue_direction(Direction.LEFT)
        assert engine.step() is Outcome.CONTINUE
        engine.enqueue_direction(Direction.DOWN)
        assert engine.step() is Outcome.TERMINAL
        assert engine.end_reason == "body"
        assert engine.tick == 3

    def test_moving_into_vacated_tail_is_safe(self):
        engine = _engine()
        engine.snake.direction = Direction.DOWN
        engine.snake.segments = [
            Segment((2, 3), SegmentKind.HEAD),
            Segment((3, 3), SegmentKind.BODY),
            Segment((3, 2), SegmentKind.BODY),
            Segment((2, 2), SegmentKind.BODY),
        ]
        assert engine.step() is Outcome.CONTINUE
        assert engine.snake.head == (2, 2)

    def test_full_board_ends_game(self):
        engine = GameEngine(
            GameConfig(grid_width=4, grid_height=4, start_col=2, start_row=1, seed=0),
        )
        engine.food.place((2, 2))
        for direction in ("up", "left", "down", "right"):
            engine.enqueue_direction(direction)
            outcome = engine.step()
        assert outcome is Outcome.TERMINAL
        assert engine.end_reason == "board_full"
        assert engine.score == 2
        assert len(engine.snake) == 4


class TestEngineInvariants:
    def test_no_overlap_and_valid_food(self):
        names = ["up", "left", "down", "right"]
        for seed in range(10):
            engine = GameEngine(GameConfig(seed=seed))
            moves = np.random.default_rng(seed + 100)
            for _ in range(200):
                engine.enqueue_direction(names[int(moves.integers(4))])
                if engine.step() is Outcome.TERMINAL:
                    break
                positions = engine.snake.positions
                assert len(set(positions)) == len(positions)
                assert not any(engine.grid.is_wall(p) for p in positions)
                food = engine.food.position
                if food is not None:
                    assert engine.grid.is_interior(food)
                    assert not engine.snake.occupies(food)


class TestEngineEntities:
    def test_entities(self):
        engine = _engine()
        entities = engine.entities()
        kinds = [e.kind for e in entities]
        assert kinds.count(EntityKind.WALL) == 60
        assert kinds.count(EntityKind.HEAD) == 1
        assert kinds.count(EntityKind.BODY) == 1
        assert kinds.count(EntityKind.FOOD) == 1
        assert (engine.snake.head, EntityKind.HEAD) in entities
        assert ((12, 2), EntityKind.FOOD) in entities


class TestEngineSerialization:
    def test_state_is_json_serializable(self):
        engine = GameEngine(GameConfig(seed=42))
        engine.step()
        serialized = json.dumps(engine.get_state())
        assert isinstance(serialized, str)

    def test_state_structure(self):
        state = _engine().get_state()
        assert state["tick"] == 0
        assert state["snake"]["head"] == [4, 8]
        assert state["food"]["position"] == [12, 2]
        assert state["grid"] == {"width": 16, "height": 16}
        assert state["end_reason"] is None


class TestEngineDeterminism:
    def test_same_seed_same_outcome(self):
        moves = ["up", "right", "right", "down", "down", "left"]
        assert self._run(123, moves) == self._run(123, moves)

    @staticmethod
    def _run(seed: int, moves: list[str]) -> dict:
        engine = GameEngine(GameConfig(seed=seed))
        for move in moves:
            engine.enqueue_direction(move)
            engine.step()
        return engine.get_state()
