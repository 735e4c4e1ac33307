"""Service locator for the catalog service instance."""

from typing import Optional

from catalog.services.catalog_service import CatalogService

_catalog_service: Optional[CatalogService] = None


def set_catalog_service(service: Optional[CatalogService]):
    """Set global catalog service instance"""
    global _catalog_service
    _catalog_service = service


def get_catalog_service() -> CatalogService:
    """Get global catalog service instance, creating the default one on first use"""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service
