"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from catalog.config import DATABASE_PATH
from catalog.utils import casefold_text, collate_names

NAME_COLLATION = "CATALOG_NAME"


def init_database() -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        cursor = conn.cursor()

        # parent_id has no foreign key: deleting a folder without cascade
        # leaves its children pointing at a missing parent
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS nodes (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                type TEXT NOT NULL CHECK (type IN ('FILE', 'FOLDER')),
                parent_id TEXT,
                size INTEGER,
                mime_type TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_nodes_parent_id ON nodes(parent_id)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_nodes_type ON nodes(type)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_nodes_name ON nodes(name)
        """)

        conn.commit()


def _register_functions(conn: sqlite3.Connection) -> None:
    conn.create_collation(NAME_COLLATION, collate_names)
    conn.create_function("casefold", 1, casefold_text, deterministic=True)


@contextmanager
def get_db_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    _register_functions(conn)
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction() -> Generator[sqlite3.Connection, None, None]:
    """
    Open a connection holding the write lock for a check-then-write sequence.

    Commits on success, rolls back on any exception.
    """
    with get_db_connection() as conn:
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise


def get_row_value(row: sqlite3.Row, column: str, default: Any = None) -> Any:
    """
    Read a column from a row, returning default when missing or NULL.
    """
    if column not in row.keys():
        return default
    value = row[column]
    return default if value is None else value


def clear_database() -> None:
    """
    Remove every node. Used by the seed command.
    """
    with get_db_connection() as conn:
        conn.execute("DELETE FROM nodes")
        conn.commit()
