"""Assembly of flat node lists into a sorted forest."""

from typing import Dict, List, Sequence

from common.logging_config import get_logger
from common.types import name_sort_key
from catalog.exceptions import DanglingReferenceError
from catalog.types import Node, NodeTree

logger = get_logger(__name__)


def build_tree(nodes: Sequence[Node], strict: bool = False) -> List[NodeTree]:
    """
    Convert a flat list of nodes into a forest ordered by name at every level.

    A node whose parent_id is not among ``nodes`` is dropped from the
    result, unless ``strict`` is set, in which case it is an error.

    Args:
        nodes: Flat node list, in any order
        strict: Raise instead of dropping nodes with a missing parent

    Returns:
        Root-level tree nodes

    Raises:
        DanglingReferenceError: strict mode and a parent is missing
    """
    by_id: Dict[str, NodeTree] = {node.id: NodeTree.from_node(node) for node in nodes}
    roots: List[NodeTree] = []

    for node in nodes:
        tree_node = by_id[node.id]

        if node.parent_id is None:
            roots.append(tree_node)
            continue

        parent = by_id.get(node.parent_id)
        if parent is not None:
            parent.children.append(tree_node)
        elif strict:
            raise DanglingReferenceError(
                f"Node {node.id} references missing parent {node.parent_id}"
            )
        else:
            logger.debug(f"Dropping node with missing parent [id={node.id}] [parent_id={node.parent_id}]")

    sort_tree(roots)
    return roots


def sort_tree(nodes: List[NodeTree]) -> None:
    """
    Sort a forest in place by name, depth-first.
    """
    nodes.sort(key=lambda node: name_sort_key(node.name))
    for node in nodes:
        if node.children:
            sort_tree(node.children)
