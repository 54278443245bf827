"""
Registry for autopilot players.

Maps player keys (e.g., 'random', 'greedy') to player classes so the CLI
can select one by name.
"""

from typing import Dict, List, Type

from .base import Player
from .greedy_player import GreedyPlayer
from .random_player import RandomPlayer


PLAYER_VARIANTS: Dict[str, Type[Player]] = {
    "random": RandomPlayer,
    "greedy": GreedyPlayer,
}

AVAILABLE_VARIANTS = list(PLAYER_VARIANTS.keys())


def get_player_class(variant: str) -> Type[Player]:
    """
    Get the player class for a given key.

    Raises:
        ValueError: if the key is unknown
    """
    try:
        return PLAYER_VARIANTS[variant]
    except KeyError:
        raise ValueError(
            f"Unknown player '{variant}'. Available: {', '.join(AVAILABLE_VARIANTS)}"
        )


def list_variants() -> List[str]:
    return list(AVAILABLE_VARIANTS)
