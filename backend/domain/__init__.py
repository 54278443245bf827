"""
Domain entities for the snake engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, timers).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
    INITIAL_SPEED_MS, MIN_SPEED_MS, SPEED_STEP_MS, SPEED_UP_EVERY,
    opposite, delta,
)
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'INITIAL_SPEED_MS', 'MIN_SPEED_MS', 'SPEED_STEP_MS', 'SPEED_UP_EVERY',
    'opposite', 'delta',
    'Snake',
    'GameState',
]
