"""Storage gateway contract required by the catalog service."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from catalog.types import Node


class NodeGateway(ABC):
    """
    Persistence collaborator for nodes.

    Implementations execute equality and substring filters, ordering
    (folders first, then name), limit and offset. Business rules live in
    the service. Every method accepts an optional ``conn`` handle obtained
    from ``transaction()`` so several calls can share one atomic unit.
    """

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """Yield a handle for an atomic unit of work."""
        yield None

    @abstractmethod
    def find_all(self, conn=None) -> List[Node]:
        ...

    @abstractmethod
    def find_by_id(self, node_id: str, conn=None) -> Optional[Node]:
        ...

    @abstractmethod
    def find_by_parent_id(
        self,
        parent_id: Optional[str],
        limit: int,
        offset: int,
        conn=None
    ) -> List[Node]:
        ...

    @abstractmethod
    def find_folders(self, conn=None) -> List[Node]:
        ...

    @abstractmethod
    def search(self, text: str, limit: int, conn=None) -> List[Node]:
        ...

    @abstractmethod
    def count_by_parent_id(self, parent_id: Optional[str], conn=None) -> int:
        ...

    @abstractmethod
    def find_descendant_ids(self, node_id: str, conn=None) -> List[str]:
        """Ids of every node below node_id."""
        ...

    @abstractmethod
    def create(self, fields: Dict[str, Any], conn=None) -> Node:
        ...

    @abstractmethod
    def update(self, node_id: str, changes: Dict[str, Any], conn=None) -> Node:
        ...

    @abstractmethod
    def delete(self, node_id: str, conn=None) -> None:
        ...
