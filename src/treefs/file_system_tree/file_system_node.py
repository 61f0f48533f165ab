"""Node representation for entries met during a walk."""

from typing import Any, Optional

from anytree import Node

from treefs.types import FileType


class FileSystemNode(Node):  # type: ignore
    """Node class representing an eligible file or directory in a walk.

    Extends anytree.Node with the entry kind and its canonical path relative to the
    walk root. Nodes only live for one traversal; the root node has an empty
    relative path.

    Attributes:
        name (str): The basename of the entry.
        kind (FileType): Whether the entry is a file or a directory.
        relative_path (str): Forward-slash path relative to the walk root.

    Example:
        >>> root = FileSystemNode("root", kind=FileType.DIRECTORY)
        >>> child = FileSystemNode("a.txt", parent=root, relative_path="a.txt")
        >>> root.is_dir, child.is_dir
        (True, False)
        >>> child.relative_path
        'a.txt'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        kind: FileType = FileType.FILE,
        relative_path: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.kind = kind
        self.relative_path = relative_path

    @property
    def is_dir(self) -> bool:
        return self.kind is FileType.DIRECTORY
