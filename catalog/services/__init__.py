"""Service layer for business logic."""

from catalog.services.catalog_service import CatalogService
from catalog.services.tree import build_tree, sort_tree

__all__ = [
    "CatalogService",
    "build_tree",
    "sort_tree",
]
