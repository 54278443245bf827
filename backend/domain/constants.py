"""
Game constants for the snake engine.
"""

from typing import Dict, Tuple

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Unit deltas in screen coordinates: (0, 0) is the top-left cell
DELTAS: Dict[str, Tuple[int, int]] = {
    UP:    (0, -1),
    DOWN:  (0, 1),
    LEFT:  (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES: Dict[str, str] = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Game settings
INITIAL_SPEED_MS = 150
MIN_SPEED_MS = 80
SPEED_STEP_MS = 10
SPEED_UP_EVERY = 5

DEFAULT_CELL_SIZE = 20
DEFAULT_CANVAS_SIZE = 400

MIN_SWIPE_DISTANCE = 30


def _check(direction: str) -> str:
    if direction not in VALID_MOVES:
        raise ValueError(f"Unknown direction: {direction!r}")
    return direction


def opposite(direction: str) -> str:
    """Return the direction that reverses `direction`."""
    return OPPOSITES[_check(direction)]


def delta(direction: str) -> Tuple[int, int]:
    """Return the (dx, dy) unit step for `direction`."""
    return DELTAS[_check(direction)]

