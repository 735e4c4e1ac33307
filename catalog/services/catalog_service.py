"""Catalog service for business logic."""

from typing import Any, Dict, List, Optional

from common.constants import MAX_NODE_SIZE
from common.logging_config import get_logger
from common.types import NodeType
from catalog import config
from catalog.exceptions import (
    InvalidInputError,
    InvalidStructureError,
    NodeNotFoundError,
    ParentNotFoundError,
)
from catalog.repositories.base import NodeGateway
from catalog.repositories.memory_repository import InMemoryNodeRepository
from catalog.repositories.node_repository import NodeRepository, UPDATABLE_COLUMNS
from catalog.services.tree import build_tree
from catalog.types import ChildrenPage, Node, NodeTree

logger = get_logger(__name__)

NODE_TYPES = tuple(node_type.value for node_type in NodeType)


def create_default_repository() -> NodeGateway:
    """
    Build the gateway selected by CATALOG_STORAGE.
    """
    if config.STORAGE_BACKEND == "memory":
        return InMemoryNodeRepository()
    if config.STORAGE_BACKEND == "sqlite":
        return NodeRepository()
    raise ValueError(f"Unknown storage backend: {config.STORAGE_BACKEND}")


class CatalogService:
    def __init__(
        self,
        repository: Optional[NodeGateway] = None,
        strict_tree: Optional[bool] = None,
        validate_parent_on_update: Optional[bool] = None,
        cascade_delete: Optional[bool] = None,
    ):
        self.node_repo = repository if repository is not None else create_default_repository()
        self.strict_tree = config.STRICT_TREE if strict_tree is None else strict_tree
        self.validate_parent_on_update = (
            config.VALIDATE_PARENT_ON_UPDATE
            if validate_parent_on_update is None
            else validate_parent_on_update
        )
        self.cascade_delete = config.CASCADE_DELETE if cascade_delete is None else cascade_delete

    def get_all(self) -> List[Node]:
        return self.node_repo.find_all()

    def get_folder_tree(self) -> List[NodeTree]:
        folders = self.node_repo.find_folders()
        return build_tree(folders, strict=self.strict_tree)

    def get_by_id(self, node_id: str) -> Optional[Node]:
        return self.node_repo.find_by_id(node_id)

    def get_children(
        self,
        parent_id: Optional[str],
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> ChildrenPage:
        """
        List the direct children of a folder, or the root level when
        parent_id is None.

        ``total`` comes from a separate count query, so under concurrent
        writes it may disagree with the returned page.
        """
        limit = config.CHILDREN_LIMIT if limit is None else limit
        offset = 0 if offset is None else offset

        if limit < 1:
            raise InvalidInputError("limit must be a positive integer")
        if offset < 0:
            raise InvalidInputError("offset must not be negative")

        nodes = self.node_repo.find_by_parent_id(parent_id, limit, offset)
        total = self.node_repo.count_by_parent_id(parent_id)

        return ChildrenPage(
            nodes=nodes,
            total=total,
            has_more=offset + len(nodes) < total,
        )

    def search(self, query: str, limit: Optional[int] = None) -> List[Node]:
        limit = config.SEARCH_LIMIT if limit is None else limit

        text = (query or "").strip()
        if not text:
            return []

        if limit < 1:
            raise InvalidInputError("limit must be a positive integer")

        return self.node_repo.search(text, limit)

    def create_node(
        self,
        name: str,
        node_type: str,
        parent_id: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
    ) -> Node:
        """
        Create a node under an existing folder, or at root level.

        The parent lookup and the insert share one storage transaction.

        Raises:
            InvalidInputError: Missing name/type, unknown type or bad size
            ParentNotFoundError: parent_id does not exist
            InvalidStructureError: parent is not a folder
        """
        if not name or not node_type:
            raise InvalidInputError("Name and type are required")
        _check_type(node_type)
        _check_size(size)

        fields = {
            "name": name,
            "type": NodeType(node_type).value,
            "parent_id": parent_id or None,
            "size": size,
            "mime_type": mime_type or None,
        }

        with self.node_repo.transaction() as conn:
            if fields["parent_id"]:
                self._require_folder(fields["parent_id"], conn=conn)

            node = self.node_repo.create(fields, conn=conn)

        logger.info(f"Created {node.type} node [id={node.id}] [parent_id={node.parent_id}]")
        return node

    def update_node(self, node_id: str, changes: Dict[str, Any]) -> Node:
        """
        Apply a partial update to an existing node.

        Only keys present in ``changes`` are written. A changed parent_id is
        checked only when validate_parent_on_update is enabled.

        Raises:
            NodeNotFoundError: node_id does not exist
            InvalidInputError: unknown field or invalid value
            InvalidStructureError: (validating) the move would break the hierarchy
        """
        unknown = set(changes) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise InvalidInputError(f"Unknown fields: {', '.join(sorted(unknown))}")
        if "name" in changes and not changes["name"]:
            raise InvalidInputError("Name must not be empty")
        if "type" in changes:
            _check_type(changes["type"])
            changes = {**changes, "type": NodeType(changes["type"]).value}
        if "size" in changes:
            _check_size(changes["size"])

        with self.node_repo.transaction() as conn:
            existing = self.node_repo.find_by_id(node_id, conn=conn)
            if existing is None:
                raise NodeNotFoundError("Node not found")

            if self.validate_parent_on_update:
                self._check_move(existing, changes, conn=conn)

            node = self.node_repo.update(node_id, changes, conn=conn)

        logger.info(f"Updated node [id={node_id}] fields={sorted(changes)}")
        return node

    def delete_node(self, node_id: str) -> None:
        """
        Delete a node. Descendants are removed too only when cascade_delete
        is enabled; otherwise they keep a parent_id that no longer resolves.

        Raises:
            NodeNotFoundError: node_id does not exist
        """
        with self.node_repo.transaction() as conn:
            existing = self.node_repo.find_by_id(node_id, conn=conn)
            if existing is None:
                raise NodeNotFoundError("Node not found")

            removed = [node_id]
            if self.cascade_delete:
                removed.extend(self.node_repo.find_descendant_ids(node_id, conn=conn))

            for target_id in reversed(removed):
                self.node_repo.delete(target_id, conn=conn)

        logger.info(f"Deleted node [id={node_id}] removed={len(removed)}")

    def _require_folder(self, parent_id: str, conn=None) -> Node:
        parent = self.node_repo.find_by_id(parent_id, conn=conn)
        if parent is None:
            raise ParentNotFoundError("Parent node not found")
        if parent.type != NodeType.FOLDER.value:
            raise InvalidStructureError("Parent must be a folder")
        return parent

    def _check_move(self, existing: Node, changes: Dict[str, Any], conn=None) -> None:
        new_type = changes.get("type", existing.type)
        if existing.type == NodeType.FOLDER.value and new_type != NodeType.FOLDER.value:
            if self.node_repo.count_by_parent_id(existing.id, conn=conn) > 0:
                raise InvalidStructureError("Folder with children cannot change type")

        if "parent_id" not in changes or not changes["parent_id"]:
            return

        parent_id = changes["parent_id"]
        if parent_id == existing.id:
            raise InvalidStructureError("Node cannot be its own parent")

        self._require_folder(parent_id, conn=conn)

        if parent_id in self.node_repo.find_descendant_ids(existing.id, conn=conn):
            raise InvalidStructureError("Node cannot be moved into its own subtree")


def _check_type(node_type: Any) -> None:
    if node_type not in NODE_TYPES:
        raise InvalidInputError("Invalid node type")


def _check_size(size: Any) -> None:
    if size is None:
        return
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidInputError("Size must be an integer")
    if size < 0 or size > MAX_NODE_SIZE:
        raise InvalidInputError(f"Size must be between 0 and {MAX_NODE_SIZE}")
