"""Schema validation tests to prevent SQL query mismatches."""

import sqlite3
from pathlib import Path

from catalog.repositories.node_repository import NODE_COLUMNS, UPDATABLE_COLUMNS


def get_table_columns(db_path: Path, table_name: str) -> set:
    """
    Get all column names for a table from the database schema.
    """
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute(f"PRAGMA table_info({table_name})")
    columns = {row[1] for row in cursor.fetchall()}
    conn.close()
    return columns


def get_index_names(db_path: Path, table_name: str) -> set:
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute(f"PRAGMA index_list({table_name})")
    names = {row[1] for row in cursor.fetchall()}
    conn.close()
    return names


class TestNodesSchema:
    """Validate NodeRepository column lists against the nodes table."""

    def test_nodes_table_columns(self, test_db):
        assert get_table_columns(test_db, "nodes") == {
            "id",
            "name",
            "type",
            "parent_id",
            "size",
            "mime_type",
            "created_at",
            "updated_at",
        }

    def test_select_columns_exist(self, test_db):
        table_columns = get_table_columns(test_db, "nodes")

        for column in NODE_COLUMNS.split(","):
            assert column.strip() in table_columns, f"Column {column} not in nodes table schema"

    def test_updatable_columns_exist(self, test_db):
        table_columns = get_table_columns(test_db, "nodes")

        assert set(UPDATABLE_COLUMNS) <= table_columns
        assert "id" not in UPDATABLE_COLUMNS
        assert "created_at" not in UPDATABLE_COLUMNS

    def test_lookup_indexes_exist(self, test_db):
        assert {"idx_nodes_parent_id", "idx_nodes_type", "idx_nodes_name"} <= get_index_names(test_db, "nodes")

    def test_init_database_is_idempotent(self, test_db):
        from catalog.database import init_database

        init_database()

        assert "nodes" in {
            row[0] for row in sqlite3.connect(test_db).execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )
        }
