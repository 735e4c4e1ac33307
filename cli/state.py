"""Client-side view of the catalog: folder tree, selection and children."""

from typing import Any, Callable, Dict, List, Optional, Set

from common.logging_config import get_logger
from common.types import name_sort_key, type_rank
from cli.catalog_client import CatalogClient
from cli.models import RemoteNode

logger = get_logger(__name__)

Listener = Callable[[str], None]


def sort_listing(nodes: List[RemoteNode]) -> List[RemoteNode]:
    """
    Folders first, then by name.
    """
    return sorted(nodes, key=lambda node: (type_rank(node.type), name_sort_key(node.name)))


class Observable:
    """Minimal change notification: listeners receive the changed field name."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener. Returns a callable that removes it again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, field_name: str, value: Any) -> None:
        setattr(self, field_name, value)
        for listener in list(self._listeners):
            try:
                listener(field_name)
            except Exception as e:
                logger.error(f"State listener failed for {field_name}: {e}", exc_info=True)


class CatalogState(Observable):
    """
    Local copy of server state for one UI session.

    Every mutation is followed by a full reload of the folder tree and, when
    a folder is selected, of its children. Nothing is patched locally.
    """

    def __init__(self, client: CatalogClient, page_size: Optional[int] = None):
        super().__init__()
        self.client = client
        self.page_size = page_size if page_size is not None else client.config.get_page_size()

        self.folder_tree: List[RemoteNode] = []
        self.selected_node: Optional[RemoteNode] = None
        self.has_selection = False
        self.raw_children: List[RemoteNode] = []
        self.children_total = 0
        self.children_offset = 0
        self.has_more = False
        self.loading = False
        self.error: Optional[str] = None
        self.open_folders: Set[str] = set()

    @property
    def children(self) -> List[RemoteNode]:
        return sort_listing(self.raw_children)

    @property
    def current_parent_id(self) -> Optional[str]:
        return self.selected_node.id if self.selected_node is not None else None

    def load_folder_tree(self) -> None:
        self._set('loading', True)
        self._set('error', None)
        try:
            self._set('folder_tree', self.client.get_folder_tree())
        except Exception as e:
            self._set('error', str(e) or 'Failed to load folder tree')
            logger.error(f"Error loading folder tree: {e}")
        finally:
            self._set('loading', False)

    def select_node(self, node: Optional[RemoteNode], offset: int = 0) -> None:
        """
        Select a folder (None selects the root level) and load a page of its children.
        """
        self._set('selected_node', node)
        self.has_selection = True
        self._set('loading', True)
        self._set('error', None)
        try:
            result = self.client.get_children(
                node.id if node is not None else None,
                limit=self.page_size,
                offset=offset
            )
            self.children_total = result.total
            self.children_offset = offset
            self.has_more = result.has_more
            self._set('raw_children', result.nodes)
        except Exception as e:
            self._set('error', str(e) or 'Failed to load children')
            logger.error(f"Error loading children: {e}")
            self.children_total = 0
            self.has_more = False
            self._set('raw_children', [])
        finally:
            self._set('loading', False)

    def toggle_folder(self, node_id: str) -> bool:
        """
        Flip the expanded flag of a folder in the tree.

        Returns:
            False when the id is not part of the loaded tree
        """
        if find_in_tree(self.folder_tree, node_id) is None:
            return False

        open_folders = set(self.open_folders)
        open_folders.symmetric_difference_update({node_id})
        self._set('open_folders', open_folders)
        return True

    def is_open(self, node_id: str) -> bool:
        return node_id in self.open_folders

    def create_node(
        self,
        name: str,
        node_type: str,
        parent_id: Optional[str] = None,
        size: Optional[int] = None,
        mime_type: Optional[str] = None
    ) -> RemoteNode:
        return self._mutate(
            'Failed to create node',
            lambda: self.client.create_node(name, node_type, parent_id=parent_id, size=size, mime_type=mime_type)
        )

    def update_node(self, node_id: str, changes: Dict[str, Any]) -> RemoteNode:
        return self._mutate('Failed to update node', lambda: self.client.update_node(node_id, changes))

    def delete_node(self, node_id: str) -> None:
        self._mutate('Failed to delete node', lambda: self.client.delete_node(node_id))
        if node_id in self.open_folders:
            self._set('open_folders', self.open_folders - {node_id})

    def _mutate(self, failure_message: str, action: Callable[[], Any]) -> Any:
        self._set('loading', True)
        self._set('error', None)
        try:
            result = action()
            self.load_folder_tree()
            if self.has_selection:
                self.select_node(self.selected_node)
            return result
        except Exception as e:
            self._set('error', str(e) or failure_message)
            logger.error(f"{failure_message}: {e}")
            raise
        finally:
            self._set('loading', False)


def find_in_tree(nodes: List[RemoteNode], node_id: str) -> Optional[RemoteNode]:
    """
    Depth-first lookup of a node in a loaded tree.
    """
    for node in nodes:
        if node.id == node_id:
            return node
        found = find_in_tree(node.children, node_id)
        if found is not None:
            return found
    return None
