"""
High score repository - the engine's persistence collaborator.
"""

import logging
import sqlite3

from database import init_database
from .base import BaseRepository

logger = logging.getLogger(__name__)


class HighScoreRepository(BaseRepository):
    """
    Stores the single best score in the high_scores table.

    Storage problems never reach the engine: reads fall back to 0 and
    failed writes are logged and skipped.
    """

    def __init__(self, init_schema: bool = True):
        if init_schema:
            try:
                init_database()
            except sqlite3.Error as e:
                logger.error(f"Could not initialize high score table: {e}")

    def load_high_score(self) -> int:
        """Return the stored high score, or 0 if none is stored or storage is unavailable."""
        try:
            with self.read_connection() as (conn, cursor):
                cursor.execute("SELECT score FROM high_scores WHERE id = 1")
                row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Could not load high score, defaulting to 0: {e}")
            return 0

        if row is None:
            return 0
        return int(row["score"])

    def save_high_score(self, score: int) -> None:
        if score < 0:
            raise ValueError(f"High score cannot be negative: {score}")
        try:
            with self.transaction() as (conn, cursor):
                cursor.execute(
                    """
                    INSERT INTO high_scores (id, score, updated_at)
                    VALUES (1, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(id) DO UPDATE SET
                        score = excluded.score,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (score,)
                )
        except sqlite3.Error as e:
            logger.error(f"Could not save high score {score}: {e}")
            return
        logger.info(f"Saved new high score: {score}")
