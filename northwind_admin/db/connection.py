# northwind_admin/db/connection.py

"""
SQLite connection handler
"""

import sqlite3
from pathlib import Path
from typing import Any, Dict

from simple_logger import Slogger

MEMORY = ":memory:"


class SQLiteConnection:
    """
    Handles basic connection to SQLite
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize SQLite connection

        Args:
            config: Configuration dictionary containing SQLite settings
        """
        db_path = config["sqlite"]["db_path"]
        self.db_path = db_path

        if db_path != MEMORY:
            parent = Path(db_path).parent
            if not parent.exists():
                Slogger.info(f"Creating database directory: {parent}")
                parent.mkdir(parents=True, exist_ok=True)

        Slogger.debug(f"SQLiteConnection: connecting to {db_path}")
        self.conn = sqlite3.connect(db_path)
        self.conn.execute("PRAGMA foreign_keys = ON")
        # Return rows as dictionaries
        self.conn.row_factory = sqlite3.Row

    def cursor(self) -> sqlite3.Cursor:
        """
        Get a cursor for database operations

        Returns:
            SQLite cursor
        """
        return self.conn.cursor()

    def commit(self):
        """Commit the current transaction"""
        self.conn.commit()

    def rollback(self):
        """Discard the current transaction"""
        self.conn.rollback()

    def executescript(self, script: str) -> None:
        self.conn.executescript(script)

    def close(self):
        """Close the connection"""
        self.conn.close()
