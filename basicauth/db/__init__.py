"""Database module for BasicAuth.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to user operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Core is always used as a context manager: commit on success,
  rollback on exception, connection closed on exit
- The database location is passed in explicitly; nothing here reads settings

    with get_core(database_path) as core:
        user_id = core.user.create(...)
    # Committed before the with-block returns

ID GENERATION POLICY:
All user IDs are auto-generated UUIDs inside the database layer.
Callers never pass ids into create().
"""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .user import UserOperations


SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


class Core:
    """
    Database Core with user operations.

    Maintains its own connection and transaction state.
    Provides access to user operations through properties.
    """

    def __init__(self, connection: sqlite3.Connection):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = connection
        self._user_ops = None

    @property
    def user(self) -> "UserOperations":
        """User operations.

        Lazy-loaded to avoid circular import issues.
        Operations are created on first access and cached.
        """
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    def __enter__(self) -> "Core":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()


def _create_connection(database_path: str) -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
    """
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


def get_core(database_path: str) -> Core:
    """
    Get a database Core instance.

    Args:
        database_path: Filesystem path of the SQLite database

    Returns:
        Core instance with user operations; use it as a context manager

    Example:
        >>> with get_core("./data/users.db") as core:
        ...     rows = core.user.list()
    """
    return Core(_create_connection(database_path))


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def apply_schema(conn: sqlite3.Connection) -> None:
    """Run schema.sql against an open connection."""
    with open(SCHEMA_PATH, "r") as f:
        schema_sql = f.read()
    conn.executescript(schema_sql)
    conn.commit()


def init_db(database_path: str) -> None:
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        apply_schema(conn)
    finally:
        conn.close()


def get_schema_version(conn: sqlite3.Connection) -> str:
    """
    Get current schema version from _schema_metadata table.

    Returns:
        Schema version string (e.g., '20250101')
    """
    row = conn.execute(
        "SELECT value FROM _schema_metadata WHERE key = 'version'"
    ).fetchone()
    return row[0] if row else "unknown"
