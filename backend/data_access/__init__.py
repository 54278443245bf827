"""
Data access layer for the snake engine.

Holds the high score stores the engine persists its best score through:
a SQLite-backed repository and an in-memory stand-in.
"""

from .repositories import HighScoreRepository
from .memory import InMemoryHighScoreStore

__all__ = [
    'HighScoreRepository',
    'InMemoryHighScoreStore',
]
