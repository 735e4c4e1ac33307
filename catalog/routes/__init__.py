"""API routes package."""

from catalog.routes.node_routes import router as node_router

__all__ = ["node_router"]
