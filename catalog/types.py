"""Catalog data type definitions."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class Node:
    """
    Metadata record for a file or folder.
    """
    id: str
    name: str
    type: str
    parent_id: Optional[str]
    size: Optional[int]
    mime_type: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass
class NodeTree:
    """
    A node together with its ordered children.
    """
    id: str
    name: str
    type: str
    parent_id: Optional[str]
    size: Optional[int]
    mime_type: Optional[str]
    created_at: datetime
    updated_at: datetime
    children: List["NodeTree"] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: Node) -> "NodeTree":
        return cls(
            id=node.id,
            name=node.name,
            type=node.type,
            parent_id=node.parent_id,
            size=node.size,
            mime_type=node.mime_type,
            created_at=node.created_at,
            updated_at=node.updated_at,
        )


@dataclass(frozen=True)
class ChildrenPage:
    """
    One page of a folder listing.
    """
    nodes: List[Node]
    total: int
    has_more: bool
