"""Utility functions for CLI output."""

from typing import List

from cli.constants import FOLDER_MARK, RESET
from cli.models import RemoteNode


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def format_entry(node: RemoteNode) -> str:
    """One listing line: folder marker or size and MIME type."""
    if node.is_folder:
        return f"{FOLDER_MARK}{node.name}/{RESET}"

    details = []
    if node.size is not None:
        details.append(format_file_size(node.size))
    if node.mime_type:
        details.append(node.mime_type)

    suffix = f"  ({', '.join(details)})" if details else ""
    return f"{node.name}{suffix}"


def render_tree(nodes: List[RemoteNode], prefix: str = "") -> List[str]:
    """
    Render a folder tree with box-drawing connectors.
    """
    lines = []
    for index, node in enumerate(nodes):
        last = index == len(nodes) - 1
        connector = "└── " if last else "├── "
        lines.append(f"{prefix}{connector}{node.name}")
        lines.extend(render_tree(node.children, prefix + ("    " if last else "│   ")))
    return lines
