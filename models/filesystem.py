"""Virtual filesystem for the lab terminal.

The filesystem is an in-memory tree of FileSystemNode objects rooted at "/".
Nodes hold no parent references, so every lookup walks top-down from the
root. The VirtualFileSystem also owns the session's current directory.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from models.errors import PathNotFoundError, WrongTypeError

logger = logging.getLogger(__name__)

HOME_SEGMENTS: tuple[str, ...] = ("home", "operator")
DEFAULT_USER = "operator"

DIRECTORY_PERMISSIONS = "drwxr-xr-x"
FILE_PERMISSIONS = "-rw-r--r--"
DIRECTORY_SIZE = 4096

MISSION_NOTES = (
    "Mission Objective: Infiltrate the target system and retrieve the admin credentials."
)
PASSWD_CONTENT = (
    "root:x:0:0:root:/root:/bin/bash\n"
    "operator:x:1000:1000:operator:/home/operator:/bin/bash"
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class NodeType(str, Enum):
    """Kind of filesystem node."""

    FILE = "file"
    DIRECTORY = "directory"


class FileSystemNode(BaseModel):
    """A file or directory in the virtual filesystem.

    Permissions, owner and group are display metadata only; nothing in the
    engine enforces them.

    Args:
        name: Name of this node within its parent directory ("/" for the root).
        type: Whether this node is a file or a directory.
        content: File body (files only).
        children: Mapping from child name to node (directories only).
        permissions: ls-style permission string, e.g. "-rw-r--r--".
        owner: Owning user name.
        group: Owning group name.
        size: Size in bytes shown by ls.
        modified: Last modification time.
    """

    name: str = Field(description="Name of this node within its parent")
    type: NodeType = Field(description="File or directory")
    content: str = Field(default="", description="File body (files only)")
    children: Optional[dict[str, "FileSystemNode"]] = Field(
        default=None, description="Child nodes keyed by name (directories only)"
    )
    permissions: str = Field(default=FILE_PERMISSIONS, description="Display permissions")
    owner: str = Field(default="root", description="Owning user")
    group: str = Field(default="root", description="Owning group")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    modified: datetime = Field(default_factory=_now, description="Last modification time")

    @model_validator(mode="after")
    def check_children_match_type(self) -> "FileSystemNode":
        """Ensure directories carry a children mapping and files never do.

        Raises:
            ValueError: If a file node is given children.
        """
        if self.type == NodeType.DIRECTORY:
            if self.children is None:
                self.children = {}
        elif self.children is not None:
            raise ValueError(f"File node '{self.name}' cannot have children")
        return self

    @property
    def is_directory(self) -> bool:
        return self.type == NodeType.DIRECTORY

    def to_dict(self) -> dict[str, Any]:
        """Convert this node and its subtree to a JSON-friendly dictionary.

        Returns:
            Dictionary representation of the node. File bodies are omitted;
            only their size is reported.
        """
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "permissions": self.permissions,
            "owner": self.owner,
            "group": self.group,
            "size": self.size,
            "modified": self.modified.isoformat(),
        }
        if self.children is not None:
            result["children"] = [
                self.children[key].to_dict() for key in sorted(self.children)
            ]
        return result


FileSystemNode.model_rebuild()


def make_directory(
    name: str,
    children: Optional[list[FileSystemNode]] = None,
    owner: str = "root",
) -> FileSystemNode:
    """Create a directory node with standard display metadata."""
    return FileSystemNode(
        name=name,
        type=NodeType.DIRECTORY,
        children={child.name: child for child in children or []},
        permissions=DIRECTORY_PERMISSIONS,
        owner=owner,
        group=owner,
        size=DIRECTORY_SIZE,
    )


def make_file(name: str, content: str = "", owner: str = DEFAULT_USER) -> FileSystemNode:
    """Create a file node whose size matches its content."""
    return FileSystemNode(
        name=name,
        type=NodeType.FILE,
        content=content,
        permissions=FILE_PERMISSIONS,
        owner=owner,
        group=owner,
        size=len(content),
    )


def build_seed_tree() -> FileSystemNode:
    """Build the tree every new lab session starts with.

    Returns:
        Root directory node of a fresh filesystem.
    """
    operator_home = make_directory(
        "operator",
        [
            make_file("notes.txt", MISSION_NOTES),
            make_directory("tools", owner=DEFAULT_USER),
        ],
        owner=DEFAULT_USER,
    )
    return make_directory(
        "/",
        [
            make_directory("home", [operator_home]),
            make_directory("bin"),
            make_directory("etc", [make_file("passwd", PASSWD_CONTENT, owner="root")]),
        ],
    )


class VirtualFileSystem:
    """In-memory filesystem with a current working directory.

    Path handling mirrors a Unix shell: absolute paths start at the root,
    relative paths start at the current directory, "." is ignored, ".."
    moves up one level (and stays put at the root), and a leading "~"
    stands for the home directory.

    Attributes:
        root: Root directory node.
        current_path: Segments of the current directory, from the root down.
    """

    def __init__(self, root: Optional[FileSystemNode] = None) -> None:
        self.root = root if root is not None else build_seed_tree()
        self.current_path: list[str] = list(HOME_SEGMENTS)

    # ===== Path resolution =====

    def normalize(self, path: str) -> list[str]:
        """Turn a path string into absolute, normalized segments.

        The result never contains ".", ".." or empty segments, and popping
        past the root is a no-op, so its depth is never negative.

        Args:
            path: Absolute or relative path as typed.

        Returns:
            Segments from the root down to the target.
        """
        parts = [part for part in path.split("/") if part]

        if path.startswith("/"):
            segments: list[str] = []
        elif parts and parts[0] == "~":
            segments = list(HOME_SEGMENTS)
            parts = parts[1:]
        else:
            segments = list(self.current_path)

        for part in parts:
            if part == ".":
                continue
            if part == "..":
                if segments:
                    segments.pop()
            else:
                segments.append(part)
        return segments

    def _walk(self, segments: list[str]) -> Optional[FileSystemNode]:
        node = self.root
        for segment in segments:
            if node.children is None or segment not in node.children:
                return None
            node = node.children[segment]
        return node

    def resolve_path(self, path: str) -> Optional[FileSystemNode]:
        """Find the node a path refers to.

        Args:
            path: Absolute or relative path.

        Returns:
            The node, or None if any segment is missing or passes through a file.
        """
        if path == "/":
            return self.root
        return self._walk(self.normalize(path))

    # ===== Operations =====

    def list_directory(self, path: str = ".") -> list[FileSystemNode]:
        """Return the children of a directory.

        Args:
            path: Directory to list (defaults to the current directory).

        Returns:
            Child nodes in no particular order.

        Raises:
            PathNotFoundError: If the path is missing or is not a directory.
        """
        node = self.resolve_path(path)
        if node is None or node.children is None:
            raise PathNotFoundError(
                f"ls: cannot access '{path}': No such file or directory", path
            )
        return list(node.children.values())

    def change_directory(self, path: str) -> None:
        """Move the current directory.

        The segments used to resolve the target become the new current
        path, so the stored path is always normalized.

        Args:
            path: Target directory.

        Raises:
            PathNotFoundError: If the path does not exist.
            WrongTypeError: If the path is a file.
        """
        segments = self.normalize(path)
        node = self._walk(segments)
        if node is None:
            raise PathNotFoundError(f"cd: {path}: No such file or directory", path)
        if not node.is_directory:
            raise WrongTypeError(f"cd: {path}: Not a directory", path)

        self.current_path = segments
        logger.debug(f"Changed directory to {self.get_current_path()}")

    def read_file(self, path: str) -> str:
        """Return the content of a file.

        Raises:
            PathNotFoundError: If the path does not exist.
            WrongTypeError: If the path is a directory.
        """
        node = self.resolve_path(path)
        if node is None:
            raise PathNotFoundError(f"cat: {path}: No such file or directory", path)
        if node.is_directory:
            raise WrongTypeError(f"cat: {path}: Is a directory", path)
        return node.content

    def write_file(self, path: str, content: str) -> FileSystemNode:
        """Create or overwrite a file.

        The parent directory must already exist; missing intermediate
        directories are not created.

        Args:
            path: File path. "name" and "dir/name" are relative to the current
                directory, "/name" is created in the root.
            content: New file body.

        Returns:
            The newly written file node.

        Raises:
            PathNotFoundError: If the parent directory does not exist or the
                file name is empty.
            WrongTypeError: If the path names an existing directory, ".", ".."
                or the bare home shorthand "~".
        """
        dir_part, _, name = path.rpartition("/")
        if not dir_part:
            dir_part = "/" if path.startswith("/") else "."

        directory = self.resolve_path(dir_part)
        if directory is None or directory.children is None or not name:
            raise PathNotFoundError(
                f"touch: cannot touch '{path}': No such file or directory", path
            )

        existing = directory.children.get(name)
        # A bare "~" resolves to home on every read, so it can never name a file.
        if name in (".", "..") or path == "~" or (existing is not None and existing.is_directory):
            raise WrongTypeError(f"touch: cannot touch '{path}': Is a directory", path)

        node = make_file(name, content)
        directory.children[name] = node
        return node

    def get_current_path(self) -> str:
        """Render the current directory as an absolute path."""
        return "/" + "/".join(self.current_path)

    @property
    def home_path(self) -> str:
        return "/" + "/".join(HOME_SEGMENTS)

    # ===== Inspection =====

    def get_snapshot(self) -> dict[str, Any]:
        """Return the current directory and the whole tree for API responses."""
        return {
            "current_path": self.get_current_path(),
            "tree": self.root.to_dict(),
        }

    def validate_tree(self) -> list[str]:
        """Check tree consistency and return any issues.

        Checks for:
        - Directories without a children mapping, files with one
        - Child keys that differ from the child's own name
        - File sizes that differ from the content length

        Returns:
            List of validation error messages (empty list if valid).
        """
        issues: list[str] = []
        stack: list[tuple[str, FileSystemNode]] = [("/", self.root)]

        while stack:
            location, node = stack.pop()
            if node.is_directory and node.children is None:
                issues.append(f"Directory {location} has no children mapping")
            if not node.is_directory:
                if node.children is not None:
                    issues.append(f"File {location} has children")
                if node.size != len(node.content):
                    issues.append(
                        f"File {location} size {node.size} does not match content length {len(node.content)}"
                    )
            for key, child in (node.children or {}).items():
                child_location = location.rstrip("/") + "/" + key
                if child.name != key:
                    issues.append(
                        f"Node {child_location} is keyed as '{key}' but named '{child.name}'"
                    )
                stack.append((child_location, child))

        return issues
