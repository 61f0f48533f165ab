"""Filtered directory walking backed by an anytree tree of eligible entries."""

from .file_system_node import FileSystemNode
from .file_system_tree import FileSystemTree, walk, walk_sync

__all__ = ["FileSystemNode", "FileSystemTree", "walk", "walk_sync"]
