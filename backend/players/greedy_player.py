"""
Greedy player implementation - heads for the food along safe moves.
"""

import random
from typing import Optional

from domain.game_state import GameState
from .base import Player, next_cell, safe_moves


class GreedyPlayer(Player):
    """
    Picks the safe move that brings the head closest to the food.

    Distance is measured on the torus when walls are off. Ties are broken
    at random so the snake does not trace the same path every game.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _distance(self, game_state: GameState, cell) -> int:
        fx, fy = game_state.food
        dx = abs(cell[0] - fx)
        dy = abs(cell[1] - fy)
        if not game_state.wall_mode:
            dx = min(dx, game_state.tile_count - dx)
            dy = min(dy, game_state.tile_count - dy)
        return dx + dy

    def get_move(self, game_state: GameState) -> str:
        moves = safe_moves(game_state)
        if not moves:
            return game_state.direction
        if game_state.food is None:
            return self.rng.choice(moves)

        scored = [(self._distance(game_state, next_cell(game_state, m)), m) for m in moves]
        best = min(score for score, _ in scored)
        return self.rng.choice([m for score, m in scored if score == best])
