"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Tuple, Optional


class GameState:
    """
    A snapshot of the engine at a specific tick.

    Attributes:
        tick: number of processed steps since the last reset
        snake_positions: list of (x, y), head first
        direction: current direction name, or None before the game starts
        food: (x, y) of the food, or None when the board is full
        score, high_score: current and best score
        speed: tick interval in milliseconds
        tile_count: board is tile_count x tile_count
        wall_mode: True when the boundary is solid
        running, paused, game_over: lifecycle flags
        death_reason: 'wall' or 'self' after a game over
    """

    def __init__(
        self,
        tick: int,
        snake_positions: List[Tuple[int, int]],
        direction: Optional[str],
        food: Optional[Tuple[int, int]],
        score: int,
        high_score: int,
        speed: int,
        tile_count: int,
        wall_mode: bool,
        running: bool,
        paused: bool,
        game_over: bool = False,
        death_reason: Optional[str] = None
    ):
        self.tick = tick
        self.snake_positions = snake_positions
        self.direction = direction
        self.food = food
        self.score = score
        self.high_score = high_score
        self.speed = speed
        self.tile_count = tile_count
        self.wall_mode = wall_mode
        self.running = running
        self.paused = paused
        self.game_over = game_over
        self.death_reason = death_reason

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake_positions[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        (0,0) is the top-left cell, matching the engine's screen coordinates.
        """
        board = [['.' for _ in range(self.tile_count)] for _ in range(self.tile_count)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake_positions):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = [f"{y:2d} {' '.join(row)}" for y, row in enumerate(board)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.tile_count)))
        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; tuples become [x, y] lists."""
        return {
            "tick": self.tick,
            "snake": [list(pos) for pos in self.snake_positions],
            "direction": self.direction,
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "high_score": self.high_score,
            "speed": self.speed,
            "tile_count": self.tile_count,
            "wall_mode": self.wall_mode,
            "running": self.running,
            "paused": self.paused,
            "game_over": self.game_over,
            "death_reason": self.death_reason,
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, score={self.score}, food={self.food}, "
            f"length={len(self.snake_positions)}, running={self.running}>"
        )
