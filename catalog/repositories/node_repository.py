"""Node repository for database operations."""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from common.logging_config import get_logger
from common.types import NodeType
from catalog import database
from catalog.database import NAME_COLLATION, get_db_connection, get_row_value
from catalog.repositories.base import NodeGateway
from catalog.types import Node
from catalog.utils import generate_uuid, get_current_timestamp

logger = get_logger(__name__)

NODE_COLUMNS = "id, name, type, parent_id, size, mime_type, created_at, updated_at"

LISTING_ORDER = (
    f"CASE type WHEN '{NodeType.FOLDER.value}' THEN 0 ELSE 1 END, "
    f"name COLLATE {NAME_COLLATION}"
)

UPDATABLE_COLUMNS = ("name", "type", "parent_id", "size", "mime_type")


def _row_to_node(row: sqlite3.Row) -> Node:
    return Node(
        id=row["id"],
        name=row["name"],
        type=row["type"],
        parent_id=get_row_value(row, "parent_id"),
        size=get_row_value(row, "size"),
        mime_type=get_row_value(row, "mime_type"),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class NodeRepository(NodeGateway):
    """SQLite-backed node gateway."""

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        with database.transaction() as conn:
            yield conn

    def find_all(self, conn=None) -> List[Node]:
        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute(f"SELECT {NODE_COLUMNS} FROM nodes ORDER BY {LISTING_ORDER}")
            return [_row_to_node(row) for row in cursor.fetchall()]

    def find_by_id(self, node_id: str, conn=None) -> Optional[Node]:
        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute(f"SELECT {NODE_COLUMNS} FROM nodes WHERE id = ?", (node_id,))
            row = cursor.fetchone()

            if row is None:
                return None

            return _row_to_node(row)

    def find_by_parent_id(
        self,
        parent_id: Optional[str],
        limit: int,
        offset: int,
        conn=None
    ) -> List[Node]:
        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute(
                f"""
                SELECT {NODE_COLUMNS} FROM nodes
                WHERE parent_id IS ?
                ORDER BY {LISTING_ORDER}
                LIMIT ? OFFSET ?
                """,
                (parent_id, limit, offset)
            )
            return [_row_to_node(row) for row in cursor.fetchall()]

    def find_folders(self, conn=None) -> List[Node]:
        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute(
                f"SELECT {NODE_COLUMNS} FROM nodes WHERE type = ? ORDER BY name COLLATE {NAME_COLLATION}",
                (NodeType.FOLDER.value,)
            )
            return [_row_to_node(row) for row in cursor.fetchall()]

    def search(self, text: str, limit: int, conn=None) -> List[Node]:
        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute(
                f"""
                SELECT {NODE_COLUMNS} FROM nodes
                WHERE instr(casefold(name), ?) > 0
                ORDER BY {LISTING_ORDER}
                LIMIT ?
                """,
                (text.casefold(), limit)
            )
            return [_row_to_node(row) for row in cursor.fetchall()]

    def count_by_parent_id(self, parent_id: Optional[str], conn=None) -> int:
        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute("SELECT COUNT(*) AS total FROM nodes WHERE parent_id IS ?", (parent_id,))
            return cursor.fetchone()["total"]

    def find_descendant_ids(self, node_id: str, conn=None) -> List[str]:
        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute(
                """
                WITH RECURSIVE descendants(id) AS (
                    SELECT id FROM nodes WHERE parent_id = ?
                    UNION
                    SELECT n.id FROM nodes n
                    JOIN descendants d ON n.parent_id = d.id
                )
                SELECT id FROM descendants WHERE id != ?
                """,
                (node_id, node_id)
            )
            return [row["id"] for row in cursor.fetchall()]

    def create(self, fields: Dict[str, Any], conn=None) -> Node:
        node_id = generate_uuid()
        now = get_current_timestamp()

        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute(
                """
                INSERT INTO nodes (id, name, type, parent_id, size, mime_type, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    node_id,
                    fields["name"],
                    fields["type"],
                    fields.get("parent_id"),
                    fields.get("size"),
                    fields.get("mime_type"),
                    now.isoformat(),
                    now.isoformat(),
                )
            )

        logger.debug(f"Inserted node [id={node_id}]")

        return Node(
            id=node_id,
            name=fields["name"],
            type=fields["type"],
            parent_id=fields.get("parent_id"),
            size=fields.get("size"),
            mime_type=fields.get("mime_type"),
            created_at=now,
            updated_at=now,
        )

    def update(self, node_id: str, changes: Dict[str, Any], conn=None) -> Node:
        unknown = set(changes) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")

        columns = [column for column in UPDATABLE_COLUMNS if column in changes]
        assignments = ", ".join(f"{column} = ?" for column in columns + ["updated_at"])
        values = [changes[column] for column in columns]
        values.append(get_current_timestamp().isoformat())

        with self._connection(conn) as c:
            cursor = c.cursor()
            cursor.execute(
                f"UPDATE nodes SET {assignments} WHERE id = ?",
                values + [node_id]
            )
            cursor.execute(f"SELECT {NODE_COLUMNS} FROM nodes WHERE id = ?", (node_id,))
            row = cursor.fetchone()

        if row is None:
            raise LookupError(f"Node {node_id} vanished during update")

        return _row_to_node(row)

    def delete(self, node_id: str, conn=None) -> None:
        with self._connection(conn) as c:
            c.execute("DELETE FROM nodes WHERE id = ?", (node_id,))

    @contextmanager
    def _connection(self, conn=None) -> Iterator[sqlite3.Connection]:
        """
        Reuse a caller's connection, or open one and commit on success.
        """
        if conn is not None:
            yield conn
            return

        with get_db_connection() as own:
            try:
                yield own
                own.commit()
            except Exception as e:
                own.rollback()
                logger.error(f"Node query failed: {e}", exc_info=True)
                raise
