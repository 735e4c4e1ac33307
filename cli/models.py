"""Client-side node types and command data types for the CLI."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from common.types import NodeType


@dataclass
class RemoteNode:
    """Node as received from the catalog API."""

    id: str
    name: str
    type: str
    parent_id: Optional[str] = None
    size: Optional[int] = None
    mime_type: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    children: List["RemoteNode"] = field(default_factory=list)

    @property
    def is_folder(self) -> bool:
        return self.type == NodeType.FOLDER.value

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RemoteNode":
        """
        Build a node from its JSON form. Size arrives as a decimal string.
        """
        size = data.get("size")
        return cls(
            id=data["id"],
            name=data["name"],
            type=data["type"],
            parent_id=data.get("parentId"),
            size=int(size) if size not in (None, "") else None,
            mime_type=data.get("mimeType"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            children=[cls.from_api(child) for child in data.get("children") or []],
        )


@dataclass(frozen=True)
class ChildrenResult:
    """One page of children plus paging info."""

    nodes: List[RemoteNode]
    total: int
    has_more: bool


@dataclass(frozen=True)
class TreeCommand:
    """Print the folder tree."""

    command: Literal["tree"] = "tree"


@dataclass(frozen=True)
class ListCommand:
    """List the current folder."""

    page: int = 1
    command: Literal["ls"] = "ls"


@dataclass(frozen=True)
class ChangeDirCommand:
    """Select another folder ('..' for parent, '/' for root)."""

    target: str
    command: Literal["cd"] = "cd"


@dataclass(frozen=True)
class FindCommand:
    """Search names across the catalog."""

    query: str
    command: Literal["find"] = "find"


@dataclass(frozen=True)
class MakeDirCommand:
    """Create a folder in the current folder."""

    name: str
    command: Literal["mkdir"] = "mkdir"


@dataclass(frozen=True)
class TouchCommand:
    """Create a file entry in the current folder."""

    name: str
    size: Optional[int] = None
    mime_type: Optional[str] = None
    command: Literal["touch"] = "touch"


@dataclass(frozen=True)
class RenameCommand:
    """Rename an entry of the current folder."""

    target: str
    new_name: str
    command: Literal["rename"] = "rename"


@dataclass(frozen=True)
class MoveCommand:
    """Move an entry of the current folder into another folder."""

    target: str
    destination: str
    command: Literal["mv"] = "mv"


@dataclass(frozen=True)
class RemoveCommand:
    """Delete an entry of the current folder."""

    target: str
    command: Literal["rm"] = "rm"


@dataclass(frozen=True)
class InfoCommand:
    """Show the metadata of an entry."""

    target: str
    command: Literal["info"] = "info"


CommandRequest = Union[
    TreeCommand,
    ListCommand,
    ChangeDirCommand,
    FindCommand,
    MakeDirCommand,
    TouchCommand,
    RenameCommand,
    MoveCommand,
    RemoveCommand,
    InfoCommand,
]
