"""Repository layer for data access."""

from catalog.repositories.base import NodeGateway
from catalog.repositories.node_repository import NodeRepository
from catalog.repositories.memory_repository import InMemoryNodeRepository

__all__ = [
    "NodeGateway",
    "NodeRepository",
    "InMemoryNodeRepository",
]
