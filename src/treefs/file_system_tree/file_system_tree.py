"""Filtered tree representation of a directory.

This module provides the FileSystemTree class, which walks a directory applying a
FilterConfig and keeps the eligible entries as an anytree tree, together with the
``walk``/``walk_sync`` helpers that reduce a walk to the set of eligible file paths.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

import anyio
import anyio.to_thread
from anyio.abc import TaskGroup
from anytree import PostOrderIter, PreOrderIter

from treefs.concurrency import DEFAULT_CONCURRENCY, fail_fast_task_group
from treefs.file_system_tree.file_system_node import FileSystemNode
from treefs.path_filter import FilterConfig, is_included
from treefs.types import FileType, PathType

logger = logging.getLogger(__name__)


def _scan_directory(path: Path) -> List[Tuple[str, bool]]:
    with os.scandir(path) as entries:
        return [(entry.name, entry.is_dir(follow_symlinks=False)) for entry in entries]


class FileSystemTree:
    """A tree of the entries of a directory that pass a filter.

    Hidden directories (when ``ignore_hidden`` is set) are pruned before recursion:
    nothing below them is ever listed, so neither the ignore pattern nor the
    exclusion set is evaluated for paths beneath them. Directories are otherwise
    always descended into. Files appear in the tree only if they are eligible.
    Symbolic links are never followed and are recorded as files, whatever they
    point to.

    The tree can be built with blocking calls (``get_tree``, lazily on first access)
    or with ``build_async``, which lists sibling subtrees concurrently on worker
    threads bounded by a capacity limiter. Both produce the same tree; only the order
    of children may differ, which is why results are exposed as sets.

    Attributes:
        root_path (Path): The directory being walked.
        config (FilterConfig): Filter applied to every entry.
        concurrency (int): Maximum directory listings in flight for ``build_async``.

    Example:
        >>> tree = FileSystemTree("src")  # doctest: +SKIP
        >>> sorted(tree.get_file_set())  # doctest: +SKIP
        ['main.py', 'utils/helpers.py']
    """

    def __init__(
        self,
        root_path: PathType,
        config: Optional[FilterConfig] = None,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        self.root_path = Path(root_path)
        self.config = config if config is not None else FilterConfig()
        self.concurrency = concurrency
        self._tree: Optional[FileSystemNode] = None

    def get_tree(self) -> FileSystemNode:
        """Get the root node, building the tree with blocking calls if needed.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
        """
        if self._tree is None:
            self._check_root(self.root_path.exists(), self.root_path.is_dir())
            root = self._new_root()
            self._create_nodes(self.root_path, root)
            self._set_tree(root)
        assert self._tree is not None
        return self._tree

    async def build_async(self) -> FileSystemNode:
        """Build (or rebuild) the tree without blocking the event loop.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            OSError: The first listing failure; remaining listings are cancelled.
        """
        root_path = anyio.Path(self.root_path)
        self._check_root(await root_path.exists(), await root_path.is_dir())

        root = self._new_root()
        limiter = anyio.CapacityLimiter(self.concurrency)
        async with fail_fast_task_group() as task_group:
            task_group.start_soon(self._create_nodes_async, self.root_path, root, limiter, task_group)
        self._set_tree(root)
        return root

    def _check_root(self, exists: bool, is_dir: bool) -> None:
        if not exists:
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not is_dir:
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")

    def _new_root(self) -> FileSystemNode:
        logger.debug("Walking %s", self.root_path)
        return FileSystemNode(self.root_path.name, kind=FileType.DIRECTORY)

    def _set_tree(self, root: FileSystemNode) -> None:
        self._tree = root
        logger.debug(
            "Walked %s: %d file(s), %d director(ies)",
            self.root_path,
            self.get_file_count(),
            self.get_directory_count(),
        )

    def _add_child(self, parent: FileSystemNode, name: str, is_dir: bool) -> Optional[FileSystemNode]:
        relative_path = f"{parent.relative_path}/{name}" if parent.relative_path else name
        kind = FileType.DIRECTORY if is_dir else FileType.FILE
        if not is_included(relative_path, kind, self.config):
            return None
        return FileSystemNode(name, parent=parent, kind=kind, relative_path=relative_path)

    def _create_nodes(self, path: Path, parent: FileSystemNode) -> None:
        for name, is_dir in _scan_directory(path):
            node = self._add_child(parent, name, is_dir)
            if node is not None and node.is_dir:
                self._create_nodes(path / name, node)

    async def _create_nodes_async(
        self,
        path: Path,
        parent: FileSystemNode,
        limiter: anyio.CapacityLimiter,
        task_group: TaskGroup,
    ) -> None:
        entries = await anyio.to_thread.run_sync(_scan_directory, path, limiter=limiter)
        for name, is_dir in entries:
            node = self._add_child(parent, name, is_dir)
            if node is not None and node.is_dir:
                task_group.start_soon(self._create_nodes_async, path / name, node, limiter, task_group)

    def get_file_count(self) -> int:
        """Number of eligible files in the tree."""
        return sum(1 for _ in self.iterate_files())

    def get_directory_count(self) -> int:
        """Number of directories walked, excluding the root."""
        return sum(1 for node in PreOrderIter(self.get_tree()) if node.is_dir) - 1

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(absolute_path, relative_path)`` for every eligible file.

        Order is unspecified.
        """
        for node in PreOrderIter(self.get_tree()):
            if not node.is_dir:
                yield (str(self.root_path / node.relative_path), node.relative_path)

    def iterate_directories_bottom_up(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(absolute_path, relative_path)`` for walked directories, deepest first.

        The root itself is not included. Every directory is yielded after all of its
        subdirectories, which is the order needed to prune directories left empty.
        """
        for node in PostOrderIter(self.get_tree()):
            if node.is_dir and node.relative_path:
                yield (str(self.root_path / node.relative_path), node.relative_path)

    def get_file_set(self) -> Set[str]:
        """Return the relative paths of all eligible files."""
        return {relative_path for _, relative_path in self.iterate_files()}


async def walk(root: PathType, config: Optional[FilterConfig] = None) -> Set[str]:
    """Return the relative paths of every eligible file under ``root``.

    Raises:
        FileNotFoundError: If ``root`` doesn't exist.
        NotADirectoryError: If ``root`` isn't a directory.
    """
    tree = FileSystemTree(root, config)
    await tree.build_async()
    return tree.get_file_set()


def walk_sync(root: PathType, config: Optional[FilterConfig] = None) -> Set[str]:
    """Blocking counterpart of ``walk`` with identical results."""
    return FileSystemTree(root, config).get_file_set()
