"""Filesystem utilities for mirroring, pruning and uniquely naming files in a tree.

The operations live in ``treefs.fs`` and are re-exported here. Each has an awaitable
form (``copy_dir``) and a blocking form (``copy_dir_sync``).
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from treefs.exceptions import ArgumentMissingError
from treefs.fs import (
    append_file,
    append_file_sync,
    copy_dir,
    copy_dir_sync,
    copy_file,
    copy_file_sync,
    empty_dir,
    empty_dir_sync,
    ensure_path,
    ensure_path_sync,
    ensure_write_stream,
    ensure_write_stream_sync,
    exists,
    exists_sync,
    list_dir,
    list_dir_sync,
    mkdirs,
    mkdirs_sync,
    read_file,
    read_file_sync,
    readdir,
    readdir_sync,
    rename,
    rename_sync,
    rmdir,
    rmdir_sync,
    stat,
    stat_sync,
    unlink,
    unlink_sync,
    watch,
    watch_sync,
    write_file,
    write_file_sync,
)
from treefs.path_filter import FilterConfig

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("treefs")
except PackageNotFoundError:
    __version__ = "unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ArgumentMissingError",
    "FilterConfig",
    "append_file",
    "append_file_sync",
    "copy_dir",
    "copy_dir_sync",
    "copy_file",
    "copy_file_sync",
    "empty_dir",
    "empty_dir_sync",
    "ensure_path",
    "ensure_path_sync",
    "ensure_write_stream",
    "ensure_write_stream_sync",
    "exists",
    "exists_sync",
    "list_dir",
    "list_dir_sync",
    "mkdirs",
    "mkdirs_sync",
    "read_file",
    "read_file_sync",
    "readdir",
    "readdir_sync",
    "rename",
    "rename_sync",
    "rmdir",
    "rmdir_sync",
    "stat",
    "stat_sync",
    "unlink",
    "unlink_sync",
    "watch",
    "watch_sync",
    "write_file",
    "write_file_sync",
]
