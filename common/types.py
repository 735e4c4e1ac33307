"""Shared data type definitions (NodeType, name ordering)."""

import unicodedata
from enum import Enum
from typing import Tuple


class NodeType(str, Enum):
    """
    Kind of catalog node.
    """
    FILE = "FILE"
    FOLDER = "FOLDER"


def name_sort_key(name: str) -> Tuple[str, str, str, str]:
    """
    Build a locale-independent collation key for node names.

    Accents and case are ignored on the primary level, so "éclair" sorts
    next to "eclair" and "Beta" next to "beta". Ties are broken by accents,
    then by case with lowercase first ("a" before "A"), then by the raw
    name to keep the order total.

    Args:
        name: Node display name

    Returns:
        Tuple usable as a sort key
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name.casefold(), name.swapcase(), name)


def compare_names(left: str, right: str) -> int:
    """
    Three-way comparison of two names using name_sort_key.

    Returns:
        Negative, zero or positive like a C-style comparator
    """
    left_key = name_sort_key(left)
    right_key = name_sort_key(right)
    return (left_key > right_key) - (left_key < right_key)


def type_rank(node_type: str) -> int:
    """
    Rank used to list folders before files.
    """
    return 0 if node_type == NodeType.FOLDER.value else 1
