"""Command handler functions for CLI operations."""

from typing import List, Optional

from common.constants import ROOT_SENTINEL
from common.logging_config import get_logger
from common.types import NodeType
from cli.catalog_client import CatalogClientError
from cli.models import (
    ChangeDirCommand,
    FindCommand,
    InfoCommand,
    ListCommand,
    MakeDirCommand,
    MoveCommand,
    RemoteNode,
    RemoveCommand,
    RenameCommand,
    TouchCommand,
    TreeCommand,
)
from cli.search import SearchState
from cli.state import CatalogState
from cli.utils import format_entry, format_file_size, render_tree

logger = get_logger(__name__)


class ResolveError(Exception):
    """Raised when a name does not identify exactly one entry."""

    pass


def resolve_child(state: CatalogState, name: str) -> RemoteNode:
    """
    Find an entry of the current folder listing by id or name.

    Exact name matches win over case-insensitive ones. Sibling names are
    not unique, so an ambiguous name is an error.
    """
    children = state.children

    for node in children:
        if node.id == name:
            return node

    matches = [node for node in children if node.name == name]
    if not matches:
        matches = [node for node in children if node.name.casefold() == name.casefold()]

    if not matches:
        raise ResolveError(f"No entry named '{name}' in this folder")
    if len(matches) > 1:
        ids = ", ".join(node.id for node in matches)
        raise ResolveError(f"'{name}' is ambiguous, use one of the ids: {ids}")
    return matches[0]


def current_path(state: CatalogState) -> str:
    """
    Slash-separated path of the selected folder, built from the loaded tree.
    """
    node = state.selected_node
    if node is None:
        return "/"

    names = []
    lookup = _tree_index(state.folder_tree)
    seen = set()
    while node is not None and node.id not in seen:
        seen.add(node.id)
        names.append(node.name)
        node = lookup.get(node.parent_id) if node.parent_id else None

    return "/" + "/".join(reversed(names))


def _tree_index(nodes: List[RemoteNode]) -> dict:
    index = {}
    for node in nodes:
        index[node.id] = node
        index.update(_tree_index(node.children))
    return index


def _failure(state: CatalogState, fallback: Exception) -> str:
    return f"Error: {state.error or fallback}"


def handle_tree(cmd: TreeCommand, state: CatalogState) -> str:
    """
    Handle 'tree' command.

    Returns:
        Rendered folder tree or error message
    """
    state.load_folder_tree()
    if state.error:
        return f"Error: {state.error}"
    if not state.folder_tree:
        return "(no folders)"
    return "\n".join(["/"] + render_tree(state.folder_tree))


def handle_ls(cmd: ListCommand, state: CatalogState) -> str:
    """
    Handle 'ls' command.

    Returns:
        Listing of the requested page of the current folder
    """
    offset = (cmd.page - 1) * state.page_size
    state.select_node(state.selected_node, offset=offset)
    if state.error:
        return f"Error: {state.error}"

    children = state.children
    if not children:
        return "(empty)" if cmd.page == 1 else f"(no entries on page {cmd.page})"

    lines = [format_entry(node) for node in children]
    shown_to = offset + len(children)
    footer = f"{offset + 1}-{shown_to} of {state.children_total}"
    if state.has_more:
        footer += f" (ls {cmd.page + 1} for more)"
    lines.append(footer)
    return "\n".join(lines)


def handle_cd(cmd: ChangeDirCommand, state: CatalogState) -> str:
    """
    Handle 'cd' command.

    Returns:
        New location or error message
    """
    target = cmd.target

    try:
        if target in ("/", ROOT_SENTINEL):
            destination = None
        elif target == "..":
            destination = _parent_of(state)
        else:
            destination = resolve_child(state, target)
            if not destination.is_folder:
                return f"Error: '{destination.name}' is not a folder"
    except ResolveError as e:
        return f"Error: {e}"
    except (CatalogClientError, ConnectionError) as e:
        return f"Error: {e}"

    state.select_node(destination)
    if state.error:
        return f"Error: {state.error}"
    return current_path(state)


def _parent_of(state: CatalogState) -> Optional[RemoteNode]:
    node = state.selected_node
    if node is None or node.parent_id is None:
        return None

    parent = _tree_index(state.folder_tree).get(node.parent_id)
    if parent is None:
        parent = state.client.get_node(node.parent_id)
    return parent


def handle_find(cmd: FindCommand, search: SearchState) -> str:
    """
    Handle 'find' command.

    Returns:
        Matching entries or a note that nothing matched
    """
    results = search.search_now(cmd.query)
    if search.error:
        return f"Error: {search.error}"
    if not results:
        return f"No entries match '{cmd.query.strip()}'"
    return "\n".join(f"{format_entry(node)}  [{node.id}]" for node in results)


def handle_mkdir(cmd: MakeDirCommand, state: CatalogState) -> str:
    """
    Handle 'mkdir' command.

    Returns:
        Success or error message
    """
    try:
        node = state.create_node(cmd.name, NodeType.FOLDER.value, parent_id=state.current_parent_id)
    except (CatalogClientError, ConnectionError) as e:
        return _failure(state, e)
    return f"Created folder {node.name} [{node.id}]"


def handle_touch(cmd: TouchCommand, state: CatalogState) -> str:
    """
    Handle 'touch' command.

    Returns:
        Success or error message
    """
    try:
        node = state.create_node(
            cmd.name,
            NodeType.FILE.value,
            parent_id=state.current_parent_id,
            size=cmd.size,
            mime_type=cmd.mime_type,
        )
    except (CatalogClientError, ConnectionError) as e:
        return _failure(state, e)

    size = f", {format_file_size(node.size)}" if node.size is not None else ""
    return f"Created file {node.name} [{node.id}{size}]"


def handle_rename(cmd: RenameCommand, state: CatalogState) -> str:
    """
    Handle 'rename' command.

    Returns:
        Success or error message
    """
    try:
        node = resolve_child(state, cmd.target)
        updated = state.update_node(node.id, {'name': cmd.new_name})
    except ResolveError as e:
        return f"Error: {e}"
    except (CatalogClientError, ConnectionError) as e:
        return _failure(state, e)
    return f"Renamed {node.name} to {updated.name}"


def handle_mv(cmd: MoveCommand, state: CatalogState) -> str:
    """
    Handle 'mv' command.

    Returns:
        Success or error message
    """
    try:
        node = resolve_child(state, cmd.target)
        if cmd.destination in ("/", ROOT_SENTINEL):
            destination_id = None
        elif cmd.destination == "..":
            parent = _parent_of(state)
            destination_id = parent.id if parent is not None else None
        else:
            folder = resolve_child(state, cmd.destination)
            if not folder.is_folder:
                return f"Error: '{folder.name}' is not a folder"
            destination_id = folder.id
        state.update_node(node.id, {'parentId': destination_id})
    except ResolveError as e:
        return f"Error: {e}"
    except (CatalogClientError, ConnectionError) as e:
        return _failure(state, e)
    return f"Moved {node.name} to {cmd.destination}"


def handle_rm(cmd: RemoveCommand, state: CatalogState) -> str:
    """
    Handle 'rm' command.

    Returns:
        Success or error message
    """
    try:
        node = resolve_child(state, cmd.target)
        state.delete_node(node.id)
    except ResolveError as e:
        return f"Error: {e}"
    except (CatalogClientError, ConnectionError) as e:
        return _failure(state, e)

    logger.info(f"Removed node {node.id}")
    return f"Deleted {node.name}"


def handle_info(cmd: InfoCommand, state: CatalogState) -> str:
    """
    Handle 'info' command.

    Returns:
        Metadata lines or error message
    """
    try:
        node = state.client.get_node(resolve_child(state, cmd.target).id)
    except ResolveError as e:
        return f"Error: {e}"
    except (CatalogClientError, ConnectionError) as e:
        return f"Error: {e}"

    lines = [
        f"Name:     {node.name}",
        f"ID:       {node.id}",
        f"Type:     {node.type}",
        f"Parent:   {node.parent_id or '(root)'}",
    ]
    if node.size is not None:
        lines.append(f"Size:     {format_file_size(node.size)} ({node.size} bytes)")
    if node.mime_type:
        lines.append(f"MIME:     {node.mime_type}")
    lines.append(f"Created:  {node.created_at}")
    lines.append(f"Updated:  {node.updated_at}")
    return "\n".join(lines)
