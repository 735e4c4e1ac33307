"""Pydantic schemas for API requests and responses."""

from catalog.schemas.common import CamelModel, Envelope, ErrorResponse
from catalog.schemas.nodes import (
    ChildrenMeta,
    ChildrenResponse,
    CreateNodeRequest,
    DeleteNodeResponse,
    NodeItemResponse,
    NodeListResponse,
    NodeResponse,
    NodeTreeListResponse,
    NodeTreeResponse,
    SearchMeta,
    SearchResponse,
    UpdateNodeRequest,
)

__all__ = [
    "CamelModel",
    "Envelope",
    "ErrorResponse",
    "ChildrenMeta",
    "ChildrenResponse",
    "CreateNodeRequest",
    "DeleteNodeResponse",
    "NodeItemResponse",
    "NodeListResponse",
    "NodeResponse",
    "NodeTreeListResponse",
    "NodeTreeResponse",
    "SearchMeta",
    "SearchResponse",
    "UpdateNodeRequest",
]
