"""Node API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from common.constants import API_PREFIX, ROOT_SENTINEL
from catalog import config
from catalog.exceptions import NodeNotFoundError
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
from catalog.service_locator import get_catalog_service
from catalog.services.catalog_service import CatalogService

router = APIRouter(prefix=API_PREFIX, tags=["Nodes"])


@router.get("/nodes", response_model=NodeListResponse)
async def list_nodes(service: CatalogService = Depends(get_catalog_service)):
    """
    List every node, folders first, then by name.
    """
    nodes = service.get_all()
    return NodeListResponse(success=True, data=[NodeResponse.from_node(node) for node in nodes])


@router.get("/folders/tree", response_model=NodeTreeListResponse)
async def folder_tree(service: CatalogService = Depends(get_catalog_service)):
    """
    Nested folder hierarchy. Files are not included.
    """
    tree = service.get_folder_tree()
    return NodeTreeListResponse(success=True, data=[NodeTreeResponse.from_tree(root) for root in tree])


@router.get("/nodes/{node_id}", response_model=NodeItemResponse)
async def get_node(node_id: str, service: CatalogService = Depends(get_catalog_service)):
    """
    Fetch one node.

    Raises:
        - Node not found
    """
    node = service.get_by_id(node_id)
    if node is None:
        raise NodeNotFoundError("Node not found")

    return NodeItemResponse(success=True, data=NodeResponse.from_node(node))


@router.get("/nodes/{node_id}/children", response_model=ChildrenResponse)
async def list_children(
    node_id: str,
    limit: Optional[int] = Query(None, description="Page size (default 100)"),
    offset: Optional[int] = Query(None, description="Rows to skip (default 0)"),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Direct children of a folder. The id 'root' lists top-level nodes.

    Returns:
        - data: page of nodes, folders first
        - meta: total, limit, offset, hasMore
    """
    parent_id = None if node_id == ROOT_SENTINEL else node_id

    page = service.get_children(parent_id, limit=limit, offset=offset)

    return ChildrenResponse(
        success=True,
        data=[NodeResponse.from_node(node) for node in page.nodes],
        meta=ChildrenMeta(
            total=page.total,
            limit=limit if limit is not None else config.CHILDREN_LIMIT,
            offset=offset or 0,
            has_more=page.has_more,
        ),
    )


@router.get("/search", response_model=SearchResponse)
async def search_nodes(
    q: str = Query("", description="Case-insensitive substring of the node name"),
    limit: Optional[int] = Query(None, description="Maximum results (default 50)"),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Search nodes by name across the whole catalog.
    """
    nodes = service.search(q, limit=limit)

    return SearchResponse(
        success=True,
        data=[NodeResponse.from_node(node) for node in nodes],
        meta=SearchMeta(query=q, count=len(nodes)),
    )


@router.post("/nodes", response_model=NodeItemResponse)
async def create_node(
    request: CreateNodeRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Create a file or folder.

    Parameters:
        - name, type (FILE | FOLDER): required
        - parentId: folder to create the node in (omit for root level)
        - size: integer or decimal string
        - mimeType: free-form

    Raises:
        - Name and type are required / Invalid node type
        - Parent node not found
        - Parent must be a folder
    """
    node = service.create_node(
        name=request.name,
        node_type=request.type,
        parent_id=request.parent_id,
        size=request.size,
        mime_type=request.mime_type,
    )

    return NodeItemResponse(success=True, data=NodeResponse.from_node(node))


@router.put("/nodes/{node_id}", response_model=NodeItemResponse)
async def update_node(
    node_id: str,
    request: UpdateNodeRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Partially update a node. Only the keys present in the body change.

    Raises:
        - Node not found
    """
    node = service.update_node(node_id, request.model_dump(exclude_unset=True))

    return NodeItemResponse(success=True, data=NodeResponse.from_node(node))


@router.delete("/nodes/{node_id}", response_model=DeleteNodeResponse)
async def delete_node(node_id: str, service: CatalogService = Depends(get_catalog_service)):
    """
    Delete a node.

    Raises:
        - Node not found
    """
    service.delete_node(node_id)

    return DeleteNodeResponse(success=True, message="Node deleted successfully")
