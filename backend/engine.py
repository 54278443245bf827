"""
Snake simulation engine.

A deterministic step function over a small discrete state: one snake,
one food cell, a square grid and two boundary policies (solid walls or
wrap-around). The engine owns no rendering, input or timer code. It is
driven by `step()` (usually through a ticker) and by direction / pause
requests, and it reports back through three optional callbacks:

 - on_render(state): after every processed step and after reset
 - on_food_eaten(state): when the snake eats
 - on_game_over(state): when the snake hits a wall or itself

High scores go through an injected store exposing
`load_high_score() -> int` and `save_high_score(score)`.
"""

import logging
import random
from typing import Callable, List, Optional, Tuple

from domain.constants import (
    RIGHT,
    INITIAL_SPEED_MS,
    MIN_SPEED_MS,
    SPEED_STEP_MS,
    SPEED_UP_EVERY,
    delta,
    opposite,
)
from domain.game_state import GameState
from domain.snake import Snake

logger = logging.getLogger(__name__)

StateCallback = Callable[[GameState], None]


class SnakeEngine:
    """
    Manages:
      - Board (tile_count x tile_count)
      - Snake, direction and food
      - Score, high score and speed progression
      - Lifecycle flags (running, paused, game over)
      - At most one pending tick on the ticker
    """

    def __init__(
        self,
        tile_count: int,
        high_score_store,
        ticker=None,
        rng: Optional[random.Random] = None,
        wall_mode: bool = False,
        on_render: Optional[StateCallback] = None,
        on_food_eaten: Optional[StateCallback] = None,
        on_game_over: Optional[StateCallback] = None
    ):
        if tile_count < 1:
            raise ValueError(f"tile_count must be positive, got {tile_count}")

        self.tile_count = tile_count
        self.store = high_score_store
        self.ticker = ticker
        self.rng = rng or random.Random()
        self.wall_mode = wall_mode

        self.on_render = on_render
        self.on_food_eaten = on_food_eaten
        self.on_game_over = on_game_over

        self.start_position: Tuple[int, int] = (tile_count // 2, tile_count // 2)
        self.high_score = self.store.load_high_score()
        self._pending = None

        self._init_session()

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    def _init_session(self) -> None:
        self.snake = Snake([self.start_position])
        self.direction: Optional[str] = None
        self.food: Optional[Tuple[int, int]] = None
        self.score = 0
        self.speed = INITIAL_SPEED_MS
        self.running = False
        self.paused = False
        self.game_over = False
        self.tick_count = 0
        self.generate_food()

    def get_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick=self.tick_count,
            snake_positions=list(self.snake.positions),
            direction=self.direction,
            food=self.food,
            score=self.score,
            high_score=self.high_score,
            speed=self.speed,
            tile_count=self.tile_count,
            wall_mode=self.wall_mode,
            running=self.running,
            paused=self.paused,
            game_over=self.game_over,
            death_reason=self.snake.death_reason
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_direction(self, requested: str) -> bool:
        """
        Change direction unless paused, stopped, or asked to reverse.

        Returns True when the direction was applied.
        """
        delta(requested)  # unknown names are a caller bug
        if not self.running or self.paused:
            return False
        if self.direction is not None and requested == opposite(self.direction):
            return False
        self.direction = requested
        return True

    def start(self) -> bool:
        """Start a fresh session. A finished game must be reset first (see restart())."""
        if self.running or self.game_over:
            return False

        self.running = True
        self.paused = False
        self.direction = RIGHT
        logger.info(f"Game started on a {self.tile_count}x{self.tile_count} board (walls={'on' if self.wall_mode else 'off'})")
        self._schedule_next()
        return True

    def toggle_pause(self) -> bool:
        """Flip paused while running. Returns False when there is no game to pause."""
        if not self.running:
            return False

        self.paused = not self.paused
        if self.paused:
            self._cancel_pending()
        else:
            self._schedule_next()
        return True

    def toggle_walls(self) -> bool:
        self.wall_mode = not self.wall_mode
        return self.wall_mode

    def reset(self) -> None:
        """
        Restore a fresh session: one segment at the start cell, no movement,
        score 0, initial speed. The engine is left stopped; call start() next.
        """
        self._cancel_pending()
        self._init_session()
        self._emit(self.on_render)

    def restart(self) -> None:
        self.reset()
        self.start()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def step(self) -> Optional[str]:
        """
        Advance the game by one tick.

        Returns:
            'moved' or 'ate' for a normal move, 'wall' or 'self' when the
            game ended on this tick, None when nothing happened because the
            engine is stopped or paused.
        """
        if not self.running or self.paused:
            return None

        self.tick_count += 1
        hx, hy = self.snake.head
        dx, dy = delta(self.direction)
        head = (hx + dx, hy + dy)

        if self.wall_mode:
            if not self._in_bounds(head):
                return self._end_game("wall")
        else:
            head = (head[0] % self.tile_count, head[1] % self.tile_count)

        # The tail has not moved yet, so it still counts as occupied
        if self.snake.occupies(head):
            return self._end_game("self")

        self.snake.positions.appendleft(head)

        if head == self.food:
            self.score += 1
            self.generate_food()
            self.increase_speed()
            logger.debug(f"Food eaten at {head}, score {self.score}, speed {self.speed}ms")
            self._emit(self.on_food_eaten)
            outcome = "ate"
        else:
            self.snake.positions.pop()
            outcome = "moved"

        self._emit(self.on_render)
        return outcome

    def increase_speed(self) -> None:
        if self.score % SPEED_UP_EVERY == 0 and self.speed > MIN_SPEED_MS:
            self.speed -= SPEED_STEP_MS

    def generate_food(self) -> Optional[Tuple[int, int]]:
        """
        Place food on a random cell not occupied by the snake.

        Draws uniformly at random until a free cell comes up. After
        tile_count**2 misses it picks from the enumerated free cells
        instead; on a full board the food is cleared.
        """
        for _ in range(self.tile_count * self.tile_count):
            cell = (self.rng.randrange(self.tile_count), self.rng.randrange(self.tile_count))
            if not self.snake.occupies(cell):
                self.food = cell
                return cell

        free_cells = self._free_cells()
        if not free_cells:
            logger.warning("No free cell left for food; the board is full")
            self.food = None
            return None

        self.food = self.rng.choice(free_cells)
        return self.food

    def _free_cells(self) -> List[Tuple[int, int]]:
        occupied = set(self.snake.positions)
        return [
            (x, y)
            for y in range(self.tile_count)
            for x in range(self.tile_count)
            if (x, y) not in occupied
        ]

    def _in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.tile_count and 0 <= y < self.tile_count

    def _end_game(self, reason: str) -> str:
        self.running = False
        self.game_over = True
        self.snake.death_reason = reason
        self._cancel_pending()

        if self.score > self.high_score:
            self.high_score = self.score
            self.store.save_high_score(self.high_score)

        logger.info(f"Game Over ({reason}): score {self.score}, high score {self.high_score}")
        self._emit(self.on_game_over)
        self._emit(self.on_render)
        return reason

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _schedule_next(self) -> None:
        if self.ticker is None or self._pending is not None:
            return
        if not self.running or self.paused:
            return
        self._pending = self.ticker.call_later(self.speed, self._on_tick)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _on_tick(self) -> None:
        self._pending = None
        if not self.running or self.paused:
            return
        self.step()
        self._schedule_next()

    def _emit(self, callback: Optional[StateCallback]) -> None:
        if callback is not None:
            callback(self.get_state())
