"""
Base player interface for the game engine.
"""

from typing import List, Tuple

from domain.constants import DELTAS, OPPOSITES
from domain.game_state import GameState


class Player:
    """
    Base class/interface for autopilot logic.

    A player looks at a GameState snapshot and returns the direction to
    request for the next tick.
    """

    def get_move(self, game_state: GameState) -> str:
        """
        Return a move direction given the current game state.

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError


def next_cell(game_state: GameState, move: str) -> Tuple[int, int]:
    """Where the head lands after `move`, after wrapping when walls are off."""
    head_x, head_y = game_state.head
    dx, dy = DELTAS[move]
    new_x, new_y = head_x + dx, head_y + dy
    if not game_state.wall_mode:
        new_x %= game_state.tile_count
        new_y %= game_state.tile_count
    return new_x, new_y


def safe_moves(game_state: GameState) -> List[str]:
    """
    Moves that survive the next tick.

    Filters out moves that:
    1. Reverse the current direction (the engine would ignore them)
    2. Leave the board in wall mode
    3. Hit the body, tail included, since it has not moved yet
    """
    reverse = OPPOSITES.get(game_state.direction)
    moves = []
    for move in DELTAS:
        if move == reverse:
            continue
        new_x, new_y = next_cell(game_state, move)
        if not (0 <= new_x < game_state.tile_count and 0 <= new_y < game_state.tile_count):
            continue
        if (new_x, new_y) in game_state.snake_positions:
            continue
        moves.append(move)
    return moves
