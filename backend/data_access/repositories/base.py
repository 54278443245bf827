"""
Base repository: SQLite connections scoped to a `with` block.
"""

import sqlite3
from contextlib import contextmanager
from typing import Generator, Tuple

from database import get_connection


class BaseRepository:
    """
    Parent for repositories; hands out (connection, cursor) pairs that are
    always closed on exit.
    """

    @contextmanager
    def transaction(self) -> Generator[Tuple[sqlite3.Connection, sqlite3.Cursor], None, None]:
        """Commit when the block finishes, roll back if it raises."""
        with self.read_connection() as (conn, cursor):
            try:
                yield conn, cursor
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    @contextmanager
    def read_connection(self) -> Generator[Tuple[sqlite3.Connection, sqlite3.Cursor], None, None]:
        conn = get_connection()
        cursor = conn.cursor()
        try:
            yield conn, cursor
        finally:
            cursor.close()
            conn.close()
