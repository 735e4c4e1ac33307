"""In-process node gateway backed by a dict."""

import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Dict, Iterator, List, Optional

from common.types import NodeType, name_sort_key, type_rank
from catalog.repositories.base import NodeGateway
from catalog.repositories.node_repository import UPDATABLE_COLUMNS
from catalog.types import Node
from catalog.utils import generate_uuid, get_current_timestamp


def _listing_key(node: Node):
    return (type_rank(node.type), name_sort_key(node.name))


class InMemoryNodeRepository(NodeGateway):
    """
    Node gateway kept in process memory.

    Same ordering and filtering semantics as the SQLite repository.
    Contents are lost when the process exits.
    """

    def __init__(self, nodes: Optional[List[Node]] = None):
        self._nodes: Dict[str, Node] = {node.id: node for node in nodes or []}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield None

    def find_all(self, conn=None) -> List[Node]:
        with self._lock:
            return sorted(self._nodes.values(), key=_listing_key)

    def find_by_id(self, node_id: str, conn=None) -> Optional[Node]:
        with self._lock:
            return self._nodes.get(node_id)

    def find_by_parent_id(
        self,
        parent_id: Optional[str],
        limit: int,
        offset: int,
        conn=None
    ) -> List[Node]:
        with self._lock:
            matches = [node for node in self._nodes.values() if node.parent_id == parent_id]
        return sorted(matches, key=_listing_key)[offset:offset + limit]

    def find_folders(self, conn=None) -> List[Node]:
        with self._lock:
            folders = [node for node in self._nodes.values() if node.type == NodeType.FOLDER.value]
        return sorted(folders, key=lambda node: name_sort_key(node.name))

    def search(self, text: str, limit: int, conn=None) -> List[Node]:
        needle = text.casefold()
        with self._lock:
            matches = [node for node in self._nodes.values() if needle in node.name.casefold()]
        return sorted(matches, key=_listing_key)[:limit]

    def count_by_parent_id(self, parent_id: Optional[str], conn=None) -> int:
        with self._lock:
            return sum(1 for node in self._nodes.values() if node.parent_id == parent_id)

    def find_descendant_ids(self, node_id: str, conn=None) -> List[str]:
        with self._lock:
            found: List[str] = []
            seen = {node_id}
            frontier = [node_id]
            while frontier:
                current = frontier.pop(0)
                for node in self._nodes.values():
                    if node.parent_id == current and node.id not in seen:
                        seen.add(node.id)
                        found.append(node.id)
                        frontier.append(node.id)
            return found

    def create(self, fields: Dict[str, Any], conn=None) -> Node:
        now = get_current_timestamp()
        node = Node(
            id=generate_uuid(),
            name=fields["name"],
            type=fields["type"],
            parent_id=fields.get("parent_id"),
            size=fields.get("size"),
            mime_type=fields.get("mime_type"),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._nodes[node.id] = node
        return node

    def update(self, node_id: str, changes: Dict[str, Any], conn=None) -> Node:
        unknown = set(changes) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")

        with self._lock:
            if node_id not in self._nodes:
                raise LookupError(f"Node {node_id} vanished during update")
            updated = replace(self._nodes[node_id], updated_at=get_current_timestamp(), **changes)
            self._nodes[node_id] = updated
            return updated

    def delete(self, node_id: str, conn=None) -> None:
        with self._lock:
            self._nodes.pop(node_id, None)
