"""Pydantic schemas for node endpoints."""

from typing import List, Optional, Union

from pydantic import field_validator

from catalog.schemas.common import CamelModel, Envelope
from catalog.types import Node, NodeTree


def _parse_size(value):
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Size must be a non-negative integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.isascii() and text.isdigit():
            return int(text)
    raise ValueError("Size must be a non-negative integer")


class NodeResponse(CamelModel):
    """Node as sent to clients. Size travels as a decimal string."""
    id: str
    name: str
    type: str
    parent_id: Optional[str]
    size: Optional[str]
    mime_type: Optional[str]
    created_at: str
    updated_at: str

    @classmethod
    def from_node(cls, node: Union[Node, NodeTree]) -> "NodeResponse":
        return cls(
            id=node.id,
            name=node.name,
            type=node.type,
            parent_id=node.parent_id,
            size=None if node.size is None else str(node.size),
            mime_type=node.mime_type,
            created_at=node.created_at.isoformat(),
            updated_at=node.updated_at.isoformat(),
        )


class NodeTreeResponse(NodeResponse):
    """Folder with its nested sub-folders."""
    children: List["NodeTreeResponse"]

    @classmethod
    def from_tree(cls, tree: NodeTree) -> "NodeTreeResponse":
        base = NodeResponse.from_node(tree)
        return cls(
            **base.model_dump(),
            children=[cls.from_tree(child) for child in tree.children],
        )


NodeTreeResponse.model_rebuild()


class CreateNodeRequest(CamelModel):
    """Request model for node creation. name and type are checked by the service."""
    name: Optional[str] = None
    type: Optional[str] = None
    parent_id: Optional[str] = None
    size: Optional[int] = None
    mime_type: Optional[str] = None

    @field_validator("size", mode="before")
    @classmethod
    def parse_size(cls, value):
        return _parse_size(value)


class UpdateNodeRequest(CamelModel):
    """Request model for partial node updates. Only sent keys are applied."""
    name: Optional[str] = None
    type: Optional[str] = None
    parent_id: Optional[str] = None
    size: Optional[int] = None
    mime_type: Optional[str] = None

    @field_validator("size", mode="before")
    @classmethod
    def parse_size(cls, value):
        return _parse_size(value)


class ChildrenMeta(CamelModel):
    """Pagination details for a folder listing."""
    total: int
    limit: int
    offset: int
    has_more: bool


class SearchMeta(CamelModel):
    """Details of a search request."""
    query: str
    count: int


class NodeListResponse(Envelope):
    """Response model for flat node lists."""
    data: List[NodeResponse]


class NodeItemResponse(Envelope):
    """Response model for a single node."""
    data: NodeResponse


class NodeTreeListResponse(Envelope):
    """Response model for the folder tree."""
    data: List[NodeTreeResponse]


class ChildrenResponse(Envelope):
    """Response model for a page of children."""
    data: List[NodeResponse]
    meta: ChildrenMeta


class SearchResponse(Envelope):
    """Response model for search results."""
    data: List[NodeResponse]
    meta: SearchMeta


class DeleteNodeResponse(Envelope):
    """Response model for node deletion."""
    message: str
