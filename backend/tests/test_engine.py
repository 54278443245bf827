"""
Tests for engine.py - the snake simulation engine.
"""

import random
import sys
import os
from unittest.mock import Mock

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_access.memory import InMemoryHighScoreStore
from domain.constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, opposite
from domain.snake import Snake
from engine import SnakeEngine
from scheduler import ManualTicker


def make_engine(tile_count=20, wall_mode=False, store=None, ticker=None, seed=0, **callbacks):
    return SnakeEngine(
        tile_count=tile_count,
        high_score_store=store or InMemoryHighScoreStore(),
        ticker=ticker,
        rng=random.Random(seed),
        wall_mode=wall_mode,
        **callbacks
    )


def place(engine, positions, direction, food=(0, 0)):
    """Start the engine and put the snake where the test needs it."""
    engine.start()
    engine.snake = Snake(positions)
    engine.direction = direction
    engine.food = food


class TestInitialState:
    """Tests for construction and reset."""

    def test_fresh_engine(self):
        """A new engine has one segment at the center, score 0 and speed 150ms."""
        engine = make_engine()

        assert list(engine.snake.positions) == [(10, 10)]
        assert engine.score == 0
        assert engine.speed == 150
        assert engine.direction is None
        assert engine.running is False
        assert engine.paused is False
        assert engine.game_over is False

    def test_food_starts_off_the_snake(self):
        engine = make_engine()
        assert engine.food is not None
        assert engine.food != (10, 10)

    def test_high_score_loaded_from_store(self):
        engine = make_engine(store=InMemoryHighScoreStore(high_score=42))
        assert engine.high_score == 42

    def test_invalid_tile_count_rejected(self):
        with pytest.raises(ValueError):
            make_engine(tile_count=0)

    def test_reset_then_start_matches_fresh_engine(self):
        """reset() + start() reproduces the initial state apart from food."""
        fresh = make_engine()
        fresh.start()

        engine = make_engine()
        place(engine, [(3, 3), (2, 3), (1, 3)], UP)
        engine.score = 7
        engine.speed = 140
        engine.reset()
        engine.start()

        fresh_state = fresh.get_state().to_dict()
        reset_state = engine.get_state().to_dict()
        fresh_state.pop("food")
        reset_state.pop("food")
        assert reset_state == fresh_state
        assert reset_state["direction"] == RIGHT

    def test_reset_leaves_engine_stopped(self):
        engine = make_engine()
        engine.start()
        engine.reset()

        assert engine.running is False
        assert engine.direction is None
        assert engine.step() is None

    def test_restart_resets_and_starts(self):
        engine = make_engine()
        place(engine, [(19, 10)], RIGHT)
        engine.toggle_walls()
        engine.step()
        assert engine.game_over is True

        engine.restart()

        assert engine.running is True
        assert engine.game_over is False
        assert list(engine.snake.positions) == [(10, 10)]

    def test_wall_mode_survives_reset(self):
        engine = make_engine()
        engine.toggle_walls()
        engine.reset()
        assert engine.wall_mode is True


class TestDirection:
    """Tests for set_direction()."""

    @pytest.mark.parametrize("current", sorted(VALID_MOVES))
    def test_reversal_is_ignored(self, current):
        engine = make_engine()
        engine.start()
        engine.direction = current

        assert engine.set_direction(opposite(current)) is False
        assert engine.direction == current

    def test_perpendicular_turn_applies(self):
        engine = make_engine()
        engine.start()

        assert engine.set_direction(UP) is True
        assert engine.direction == UP

    def test_ignored_when_not_running(self):
        engine = make_engine()
        assert engine.set_direction(UP) is False
        assert engine.direction is None

    def test_ignored_while_paused(self):
        engine = make_engine()
        engine.start()
        engine.toggle_pause()

        assert engine.set_direction(UP) is False
        assert engine.direction == RIGHT

    def test_unknown_direction_raises(self):
        engine = make_engine()
        engine.start()
        with pytest.raises(ValueError):
            engine.set_direction("NORTH")


class TestMovement:
    """Tests for step() without collisions."""

    def test_non_eating_move_keeps_length(self):
        engine = make_engine()
        place(engine, [(5, 5), (4, 5), (3, 5)], RIGHT)

        assert engine.step() == "moved"
        assert list(engine.snake.positions) == [(6, 5), (5, 5), (4, 5)]
        assert engine.snake.occupies((3, 5)) is False

    def test_eating_grows_and_scores(self):
        engine = make_engine()
        place(engine, [(5, 5), (4, 5)], RIGHT, food=(6, 5))

        assert engine.step() == "ate"
        assert engine.score == 1
        assert list(engine.snake.positions) == [(6, 5), (5, 5), (4, 5)]
        assert engine.food is not None
        assert engine.food not in engine.snake.positions

    def test_step_counts_ticks(self):
        engine = make_engine()
        place(engine, [(5, 5)], RIGHT)
        engine.step()
        engine.step()
        assert engine.tick_count == 2

    def test_step_is_noop_when_stopped(self):
        engine = make_engine()
        before = engine.get_state().to_dict()

        assert engine.step() is None
        assert engine.get_state().to_dict() == before


class TestBoundaries:
    """Tests for wrap-around and solid walls."""

    def test_wrap_left_edge(self):
        engine = make_engine()
        place(engine, [(0, 5)], LEFT)

        assert engine.step() == "moved"
        assert engine.snake.head == (19, 5)
        assert engine.running is True

    def test_wrap_right_edge(self):
        engine = make_engine()
        place(engine, [(19, 5)], RIGHT)

        engine.step()
        assert engine.snake.head == (0, 5)

    def test_wrap_top_and_bottom(self):
        engine = make_engine()
        place(engine, [(4, 0)], UP)
        engine.step()
        assert engine.snake.head == (4, 19)

        engine.direction = DOWN
        engine.step()
        assert engine.snake.head == (4, 0)

    @pytest.mark.parametrize("start,direction", [
        ((0, 5), LEFT),
        ((19, 5), RIGHT),
        ((5, 0), UP),
        ((5, 19), DOWN),
    ])
    def test_solid_wall_ends_game(self, start, direction):
        engine = make_engine(wall_mode=True)
        place(engine, [start], direction)

        assert engine.step() == "wall"
        assert engine.running is False
        assert engine.game_over is True
        assert engine.snake.death_reason == "wall"
        assert list(engine.snake.positions) == [start]


class TestSelfCollision:
    """Tests for the snake running into itself."""

    def test_curl_into_body(self):
        engine = make_engine()
        place(engine, [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)], RIGHT)
        engine.direction = DOWN

        assert engine.step() == "self"
        assert engine.running is False
        assert engine.snake.death_reason == "self"

    def test_tail_cell_still_counts_as_occupied(self):
        """The tail has not moved yet when the head arrives, so it is a collision."""
        engine = make_engine()
        place(engine, [(5, 5), (6, 5), (6, 6), (5, 6)], RIGHT)
        engine.direction = DOWN

        assert engine.step() == "self"

    def test_loop_of_moves_ends_game(self):
        """Grow a snake to length 5, then turn it back onto itself."""
        engine = make_engine()
        place(engine, [(5, 5)], RIGHT, food=(6, 5))
        for x in (7, 8, 9):
            engine.step()
            engine.food = (x, 5)
        engine.step()
        engine.food = (0, 0)
        assert len(engine.snake) == 5

        engine.set_direction(DOWN)
        assert engine.step() == "moved"
        engine.set_direction(LEFT)
        assert engine.step() == "moved"
        engine.set_direction(UP)
        assert engine.step() == "self"


class TestSpeed:
    """Tests for speed progression."""

    def test_speeds_up_every_five_points_until_floor(self):
        engine = make_engine(tile_count=50)
        place(engine, [(25, 25)], RIGHT)

        speeds = {}
        for _ in range(40):
            hx, hy = engine.snake.head
            engine.food = ((hx + 1) % 50, hy)
            assert engine.step() == "ate"
            speeds[engine.score] = engine.speed

        assert speeds[4] == 150
        assert speeds[5] == 140
        assert speeds[9] == 140
        assert speeds[10] == 130
        assert speeds[30] == 90
        assert speeds[35] == 80
        assert speeds[40] == 80

    def test_speed_only_changes_when_eating(self):
        engine = make_engine()
        place(engine, [(5, 5)], RIGHT)
        engine.score = 5
        engine.step()
        assert engine.speed == 150


class TestGameOver:
    """Tests for high score handling and callbacks."""

    def test_new_high_score_saved(self):
        store = InMemoryHighScoreStore(high_score=3)
        engine = make_engine(wall_mode=True, store=store)
        place(engine, [(19, 5)], RIGHT)
        engine.score = 5

        engine.step()

        assert store.saves == [5]
        assert engine.high_score == 5

    def test_lower_score_not_saved(self):
        store = InMemoryHighScoreStore(high_score=3)
        engine = make_engine(wall_mode=True, store=store)
        place(engine, [(19, 5)], RIGHT)
        engine.score = 2

        engine.step()

        assert store.saves == []
        assert engine.high_score == 3

    def test_callbacks(self):
        on_render = Mock()
        on_food_eaten = Mock()
        on_game_over = Mock()
        engine = make_engine(
            wall_mode=True,
            on_render=on_render,
            on_food_eaten=on_food_eaten,
            on_game_over=on_game_over
        )
        place(engine, [(18, 5)], RIGHT, food=(19, 5))

        engine.step()
        on_food_eaten.assert_called_once()
        assert on_food_eaten.call_args[0][0].score == 1
        assert on_render.call_count == 1

        engine.step()
        on_game_over.assert_called_once()
        final_state = on_game_over.call_args[0][0]
        assert final_state.game_over is True
        assert final_state.death_reason == "wall"
        assert on_render.call_count == 2


class TestFoodPlacement:
    """Tests for generate_food()."""

    def test_food_never_on_snake(self):
        engine = make_engine(tile_count=5)
        engine.snake = Snake([(x, y) for y in range(5) for x in range(5) if (x, y) != (2, 2)][:20])
        for _ in range(50):
            cell = engine.generate_food()
            assert cell not in engine.snake.positions

    def test_only_free_cell_is_found(self):
        engine = make_engine(tile_count=3)
        engine.snake = Snake([(x, y) for y in range(3) for x in range(3) if (x, y) != (1, 2)])

        assert engine.generate_food() == (1, 2)

    def test_full_board_clears_food(self):
        engine = make_engine(tile_count=2)
        engine.snake = Snake([(0, 0), (1, 0), (1, 1), (0, 1)])

        assert engine.generate_food() is None
        assert engine.food is None

    def test_same_seed_same_food(self):
        assert make_engine(seed=11).food == make_engine(seed=11).food


class TestScheduling:
    """Tests for the engine driving itself through a ticker."""

    def test_start_schedules_first_tick(self):
        ticker = ManualTicker()
        engine = make_engine(ticker=ticker)
        engine.food = (0, 0)
        engine.start()

        assert ticker.pending == 1
        assert ticker.advance(149) == 0
        assert ticker.advance(1) == 1
        assert engine.snake.head == (11, 10)
        assert ticker.pending == 1

    def test_second_start_does_not_double_ticks(self):
        ticker = ManualTicker()
        engine = make_engine(ticker=ticker)
        engine.start()

        assert engine.start() is False
        assert ticker.pending == 1

    def test_pause_stops_ticks(self):
        ticker = ManualTicker()
        engine = make_engine(ticker=ticker)
        engine.food = (0, 0)
        engine.start()
        engine.toggle_pause()
        before = engine.get_state().to_dict()

        assert ticker.advance(1000) == 0
        assert engine.step() is None
        assert engine.get_state().to_dict() == before

    def test_pause_twice_resumes_with_single_tick(self):
        ticker = ManualTicker()
        engine = make_engine(ticker=ticker)
        engine.food = (0, 0)
        engine.start()

        engine.toggle_pause()
        engine.toggle_pause()

        assert engine.paused is False
        assert ticker.pending == 1
        assert ticker.advance(150) == 1
        assert engine.tick_count == 1

    def test_start_after_game_over_is_refused(self):
        """A dead session stays dead until reset; start() does not revive it."""
        ticker = ManualTicker()
        engine = make_engine(wall_mode=True, ticker=ticker)
        engine.food = (0, 0)
        engine.start()
        engine.snake = Snake([(19, 10)])
        ticker.advance(150)
        assert engine.game_over is True

        assert engine.start() is False
        assert engine.running is False
        assert engine.snake.death_reason == "wall"
        assert ticker.pending == 0

        engine.reset()
        assert engine.start() is True
        assert engine.running is True
        assert engine.game_over is False
        assert list(engine.snake.positions) == [(10, 10)]

    def test_toggle_pause_ignored_when_stopped(self):
        engine = make_engine()
        assert engine.toggle_pause() is False
        assert engine.paused is False

    def test_game_over_stops_ticking(self):
        ticker = ManualTicker()
        engine = make_engine(wall_mode=True, ticker=ticker)
        engine.food = (0, 0)
        engine.start()
        engine.snake = Snake([(19, 10)])

        ticker.advance(150)

        assert engine.game_over is True
        assert ticker.pending == 0

    def test_next_tick_uses_new_speed(self):
        ticker = ManualTicker()
        engine = make_engine(ticker=ticker)
        engine.start()
        engine.score = 4
        engine.food = (11, 10)

        ticker.advance(150)
        assert engine.speed == 140

        assert ticker.advance(139) == 0
        assert ticker.advance(1) == 1
