"""Utility helper functions for the catalog."""

import uuid
from datetime import datetime, timezone

from common.types import compare_names


def generate_uuid() -> str:
    """
    Generate a new UUID4 string.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def get_current_timestamp() -> datetime:
    """
    Get the current UTC time.

    Returns:
        Timezone-aware datetime
    """
    return datetime.now(timezone.utc)


def collate_names(left: str, right: str) -> int:
    """
    SQLite collation callback ordering names like the tree sort does.
    """
    return compare_names(left, right)


def casefold_text(value):
    """
    SQLite scalar function used for case-insensitive substring search.
    """
    if value is None:
        return None
    return value.casefold()
