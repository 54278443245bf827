"""
Random player implementation - picks random safe moves.
"""

import random
from typing import Optional

from domain.constants import VALID_MOVES
from domain.game_state import GameState
from .base import Player, safe_moves


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids walls, reversals and self-collisions.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> str:
        valid_moves = safe_moves(game_state)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return game_state.direction or self.rng.choice(sorted(VALID_MOVES))

        return self.rng.choice(valid_moves)
