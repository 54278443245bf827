"""
Headless snake runner.

Plays one game with an autopilot player on a virtual clock, so a full
game finishes instantly while still going through the same tick
scheduling as the live app.

Example:
    python main.py --player greedy --walls --seed 7 --show-board
"""

import argparse
import json
import logging
import random
from typing import Any, Dict

from config import LOG_FORMAT, load_settings
from data_access import HighScoreRepository, InMemoryHighScoreStore
from domain.game_state import GameState
from engine import SnakeEngine
from players import get_player_class, list_variants
from scheduler import ManualTicker

logger = logging.getLogger(__name__)


def run_simulation(game_params: argparse.Namespace) -> Dict[str, Any]:
    """
    Runs a single game with an autopilot player.

    Args:
        game_params: An object (like argparse.Namespace) with tile_count,
                     walls, player, seed, max_ticks, show_board, no_persist.

    Returns:
        A dictionary summarizing the game (final_score, high_score, ticks,
        death_reason, speed_ms, elapsed_ms).
    """
    seed = getattr(game_params, 'seed', None)
    show_board = getattr(game_params, 'show_board', False)

    if getattr(game_params, 'no_persist', False):
        store = InMemoryHighScoreStore()
    else:
        store = HighScoreRepository()

    def render(state: GameState) -> None:
        if show_board:
            print(f"\nTick {state.tick} | score {state.score} | speed {state.speed}ms")
            print(state.print_board())

    ticker = ManualTicker()
    engine = SnakeEngine(
        tile_count=game_params.tile_count,
        high_score_store=store,
        ticker=ticker,
        rng=random.Random(seed),
        wall_mode=game_params.walls,
        on_render=render
    )
    player = get_player_class(game_params.player)(rng=random.Random(seed))

    engine.start()
    while engine.running and engine.tick_count < game_params.max_ticks:
        engine.set_direction(player.get_move(engine.get_state()))
        if not ticker.run_next():
            break

    state = engine.get_state()
    if engine.running:
        logger.info(f"Stopped after {state.tick} ticks without a game over")

    return {
        "final_score": state.score,
        "high_score": state.high_score,
        "ticks": state.tick,
        "game_over": state.game_over,
        "death_reason": state.death_reason,
        "speed_ms": state.speed,
        "length": len(state.snake_positions),
        "elapsed_ms": ticker.now_ms,
    }


def main():
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Run a headless snake game with an autopilot player."
    )
    parser.add_argument("--player", type=str, default="greedy", choices=list_variants(),
                        help="Autopilot that picks the moves")
    parser.add_argument("--tile-count", dest="tile_count", type=int, default=settings.tile_count,
                        help="Board edge in cells (defaults to canvas size / cell size)")
    parser.add_argument("--walls", action="store_true", default=settings.wall_mode,
                        help="Solid walls instead of wrap-around edges")
    parser.add_argument("--max-ticks", dest="max_ticks", type=int, default=5000,
                        help="Stop after this many ticks")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement and the player")
    parser.add_argument("--show-board", dest="show_board", action="store_true",
                        help="Print the board after every tick")
    parser.add_argument("--no-persist", dest="no_persist", action="store_true",
                        help="Keep the high score in memory only")

    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    result = run_simulation(args)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
