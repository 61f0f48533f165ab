"""Filesystem operations for mirroring, pruning and uniquely naming files.

Every operation comes in two forms. ``name_sync`` blocks and returns its result.
``name`` returns an awaitable, to be awaited under any anyio-supported event loop
(asyncio by default). Both forms check their required arguments immediately, so a
missing argument raises ArgumentMissingError at call time, before anything is
awaited and before the filesystem is touched.

The tree operations (``list_dir``, ``copy_dir``, ``empty_dir``) accept a FilterConfig,
a mapping of its field names, or None for the defaults.

Example:
    >>> import anyio
    >>> from treefs import fs
    >>> fs.list_dir_sync("project")  # doctest: +SKIP
    ['README.md', 'src/main.py']
    >>> anyio.run(fs.copy_dir, "project", "mirror", {"ignore_pattern": r"\\.pyc$"})  # doctest: +SKIP
    ['README.md', 'src/main.py']
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Any, Awaitable, List, Mapping, Optional, Union

import anyio
import anyio.to_thread

from treefs.concurrency import DEFAULT_CONCURRENCY, fail_fast_task_group
from treefs.exceptions import ArgumentMissingError
from treefs.file_system_tree import FileSystemTree, walk, walk_sync
from treefs.io import AsyncWriteStream, WriteStream, normalize_text, open_write_stream, open_write_stream_async
from treefs.path_filter import FilterConfig
from treefs.types import PathType
from treefs.unique_path import ensure_unique, ensure_unique_sync
from treefs.watcher import Watcher

logger = logging.getLogger(__name__)

FilterOptions = Union[FilterConfig, Mapping[str, Any], None]
Data = Union[str, bytes]


def _require(value: Optional[PathType], name: str) -> PathType:
    if value is None or (isinstance(value, str) and not value):
        raise ArgumentMissingError(name)
    return value


def _copy_bytes(src: PathType, dest: PathType) -> None:
    """Copy raw bytes from ``src`` to ``dest``, creating the parents of ``dest``.

    A symbolic link to a directory is recreated as a link at ``dest`` instead.
    """
    if os.path.islink(src) and os.path.isdir(src):
        _copy_link(src, dest)
        return
    with open(src, "rb") as source, open_write_stream(dest) as target:
        shutil.copyfileobj(source, target)  # type: ignore[arg-type]


def _copy_link(src: PathType, dest: PathType) -> None:
    Path(dest).parent.mkdir(parents=True, exist_ok=True)
    if os.path.lexists(dest):
        os.unlink(dest)
    os.symlink(os.readlink(src), dest, target_is_directory=True)


def _read(path: PathType, encoding: Optional[str], escape: bool) -> Union[str, bytes]:
    content = Path(path).read_bytes()
    if encoding is None:
        return content
    text = content.decode(encoding)
    return normalize_text(text) if escape else text


def _is_empty_sync(path: str) -> bool:
    with os.scandir(path) as entries:
        return next(entries, None) is None


# -- exists -------------------------------------------------------------------


def exists_sync(path: Optional[PathType] = None) -> bool:
    path = _require(path, "path")
    return os.path.exists(path)


def exists(path: Optional[PathType] = None) -> Awaitable[bool]:
    path = _require(path, "path")
    return anyio.Path(path).exists()


# -- mkdirs -------------------------------------------------------------------


def mkdirs_sync(path: Optional[PathType] = None) -> None:
    """Create ``path`` and any missing ancestors. Existing directories are fine."""
    path = _require(path, "path")
    Path(path).mkdir(parents=True, exist_ok=True)


def mkdirs(path: Optional[PathType] = None) -> Awaitable[None]:
    path = _require(path, "path")
    return anyio.Path(path).mkdir(parents=True, exist_ok=True)


# -- write / append -----------------------------------------------------------


def write_file_sync(path: Optional[PathType] = None, data: Data = "") -> None:
    """Write ``data`` to ``path``, creating parent directories and replacing any content.

    Text is stored as UTF-8 exactly as given; no line-ending conversion takes place.
    """
    path = _require(path, "path")
    with open_write_stream(path) as stream:
        stream.write(data)


def write_file(path: Optional[PathType] = None, data: Data = "") -> Awaitable[None]:
    path = _require(path, "path")
    return _write_file(path, data, append=False)


def append_file_sync(path: Optional[PathType] = None, data: Data = "") -> None:
    """Append ``data`` to ``path``, creating the file and its parents if needed."""
    path = _require(path, "path")
    with open_write_stream(path, append=True) as stream:
        stream.write(data)


def append_file(path: Optional[PathType] = None, data: Data = "") -> Awaitable[None]:
    path = _require(path, "path")
    return _write_file(path, data, append=True)


async def _write_file(path: PathType, data: Data, append: bool) -> None:
    async with await open_write_stream_async(path, append=append) as stream:
        await stream.write(data)


# -- read ---------------------------------------------------------------------


def read_file_sync(
    path: Optional[PathType] = None, encoding: Optional[str] = "utf-8", escape: bool = True
) -> Union[str, bytes]:
    """Read a file as text.

    Args:
        path: File to read.
        encoding: Text encoding. Pass None to get the raw bytes back, unmodified.
        escape: Strip a leading byte-order mark and convert CRLF to LF.

    Raises:
        ArgumentMissingError: If ``path`` is omitted.
        FileNotFoundError: If the file doesn't exist.
        UnicodeDecodeError: If the content isn't valid in ``encoding``.
    """
    path = _require(path, "path")
    return _read(path, encoding, escape)


def read_file(
    path: Optional[PathType] = None, encoding: Optional[str] = "utf-8", escape: bool = True
) -> Awaitable[Union[str, bytes]]:
    path = _require(path, "path")
    return anyio.to_thread.run_sync(_read, path, encoding, escape)


# -- copy_file ----------------------------------------------------------------


def copy_file_sync(src: Optional[PathType] = None, dest: Optional[PathType] = None) -> None:
    """Copy the bytes of ``src`` to ``dest``, creating the parents of ``dest``."""
    src = _require(src, "src")
    dest = _require(dest, "dest")
    _copy_bytes(src, dest)


def copy_file(src: Optional[PathType] = None, dest: Optional[PathType] = None) -> Awaitable[None]:
    src = _require(src, "src")
    dest = _require(dest, "dest")
    return anyio.to_thread.run_sync(_copy_bytes, src, dest)


# -- copy_dir -----------------------------------------------------------------


def copy_dir_sync(
    src: Optional[PathType] = None, dest: Optional[PathType] = None, options: FilterOptions = None
) -> List[str]:
    """Mirror the eligible files of ``src`` under ``dest``.

    Files are copied byte for byte and existing destination files are overwritten.

    Returns:
        The relative paths of the copied files, in no particular order.

    Raises:
        ArgumentMissingError: If ``src`` or ``dest`` is omitted.
        FileNotFoundError: If ``src`` doesn't exist.
    """
    src = _require(src, "src")
    dest = _require(dest, "dest")
    files = walk_sync(src, FilterConfig.coerce(options))
    for relative_path in files:
        logger.debug("Copying %s from %s to %s", relative_path, src, dest)
        _copy_bytes(os.path.join(src, relative_path), os.path.join(dest, relative_path))
    return list(files)


def copy_dir(
    src: Optional[PathType] = None, dest: Optional[PathType] = None, options: FilterOptions = None
) -> Awaitable[List[str]]:
    src = _require(src, "src")
    dest = _require(dest, "dest")
    return _copy_dir(src, dest, FilterConfig.coerce(options))


async def _copy_dir(src: PathType, dest: PathType, config: FilterConfig) -> List[str]:
    # the complete eligible set is known before the first copy starts
    files = await walk(src, config)
    limiter = anyio.CapacityLimiter(DEFAULT_CONCURRENCY)

    async def copy_one(relative_path: str) -> None:
        logger.debug("Copying %s from %s to %s", relative_path, src, dest)
        await anyio.to_thread.run_sync(
            _copy_bytes, os.path.join(src, relative_path), os.path.join(dest, relative_path), limiter=limiter
        )

    async with fail_fast_task_group() as task_group:
        for relative_path in files:
            task_group.start_soon(copy_one, relative_path)
    return list(files)


# -- list_dir -----------------------------------------------------------------


def list_dir_sync(path: Optional[PathType] = None, options: FilterOptions = None) -> List[str]:
    """Return the relative paths of the eligible files under ``path``.

    Raises:
        ArgumentMissingError: If ``path`` is omitted.
        FileNotFoundError: If ``path`` doesn't exist.
    """
    path = _require(path, "path")
    return list(walk_sync(path, FilterConfig.coerce(options)))


def list_dir(path: Optional[PathType] = None, options: FilterOptions = None) -> Awaitable[List[str]]:
    path = _require(path, "path")
    return _list_dir(path, FilterConfig.coerce(options))


async def _list_dir(path: PathType, config: FilterConfig) -> List[str]:
    return list(await walk(path, config))


# -- empty_dir ----------------------------------------------------------------


def empty_dir_sync(path: Optional[PathType] = None, options: FilterOptions = None) -> List[str]:
    """Delete the eligible files under ``path``, then prune directories left empty.

    Hidden, pattern-matched and explicitly excluded files stay, and so do the
    directories holding them. Symbolic links are deleted as links and their targets
    are left alone. ``path`` itself is never removed. A ``path`` that
    doesn't exist counts as already empty.

    Returns:
        The relative paths of the deleted files, in no particular order.

    Raises:
        ArgumentMissingError: If ``path`` is omitted.
        NotADirectoryError: If ``path`` is a file.
    """
    path = _require(path, "path")
    if not os.path.exists(path):
        return []

    tree = FileSystemTree(path, FilterConfig.coerce(options))
    files = list(tree.iterate_files())
    for absolute_path, _ in files:
        logger.debug("Deleting %s", absolute_path)
        os.unlink(absolute_path)

    for absolute_path, _ in tree.iterate_directories_bottom_up():
        if _is_empty_sync(absolute_path):
            logger.debug("Pruning empty directory %s", absolute_path)
            os.rmdir(absolute_path)
    return [relative_path for _, relative_path in files]


def empty_dir(path: Optional[PathType] = None, options: FilterOptions = None) -> Awaitable[List[str]]:
    path = _require(path, "path")
    return _empty_dir(path, FilterConfig.coerce(options))


async def _empty_dir(path: PathType, config: FilterConfig) -> List[str]:
    if not await anyio.Path(path).exists():
        return []

    tree = FileSystemTree(path, config)
    await tree.build_async()
    files = list(tree.iterate_files())
    limiter = anyio.CapacityLimiter(DEFAULT_CONCURRENCY)

    async def delete_one(absolute_path: str) -> None:
        logger.debug("Deleting %s", absolute_path)
        await anyio.to_thread.run_sync(os.unlink, absolute_path, limiter=limiter)

    async with fail_fast_task_group() as task_group:
        for absolute_path, _ in files:
            task_group.start_soon(delete_one, absolute_path)

    # pruning starts only once every deletion above has finished
    for absolute_path, _ in tree.iterate_directories_bottom_up():
        if await anyio.to_thread.run_sync(_is_empty_sync, absolute_path):
            logger.debug("Pruning empty directory %s", absolute_path)
            await anyio.Path(absolute_path).rmdir()
    return [relative_path for _, relative_path in files]


# -- rmdir / unlink / rename --------------------------------------------------


def rmdir_sync(path: Optional[PathType] = None) -> None:
    """Remove ``path`` and everything below it."""
    path = _require(path, "path")
    shutil.rmtree(path)


def rmdir(path: Optional[PathType] = None) -> Awaitable[None]:
    path = _require(path, "path")
    return anyio.to_thread.run_sync(shutil.rmtree, path)


def unlink_sync(path: PathType) -> None:
    os.unlink(path)


def unlink(path: PathType) -> Awaitable[None]:
    return anyio.Path(path).unlink()


def rename_sync(src: Optional[PathType] = None, dest: Optional[PathType] = None) -> None:
    src = _require(src, "src")
    dest = _require(dest, "dest")
    os.rename(src, dest)


def rename(src: Optional[PathType] = None, dest: Optional[PathType] = None) -> Awaitable[None]:
    src = _require(src, "src")
    dest = _require(dest, "dest")
    return anyio.to_thread.run_sync(os.rename, src, dest)


# -- stat / readdir -----------------------------------------------------------


def stat_sync(path: Optional[PathType] = None) -> os.stat_result:
    path = _require(path, "path")
    return os.stat(path)


def stat(path: Optional[PathType] = None) -> Awaitable[os.stat_result]:
    path = _require(path, "path")
    return anyio.Path(path).stat()


def readdir_sync(path: Optional[PathType] = None) -> List[str]:
    """Return the names of the direct entries of ``path``, unfiltered."""
    path = _require(path, "path")
    return os.listdir(path)


def readdir(path: Optional[PathType] = None) -> Awaitable[List[str]]:
    path = _require(path, "path")
    return anyio.to_thread.run_sync(os.listdir, path)


# -- ensure_path / ensure_write_stream ----------------------------------------


def ensure_path_sync(path: Optional[PathType] = None) -> str:
    """Return ``path`` if free, else the first free ``name-N.ext`` sibling."""
    path = _require(path, "path")
    return ensure_unique_sync(path)


def ensure_path(path: Optional[PathType] = None) -> Awaitable[str]:
    path = _require(path, "path")
    return ensure_unique(path)


def ensure_write_stream_sync(path: PathType, append: bool = False) -> WriteStream:
    """Create the parents of ``path`` and open it; the caller must close the stream."""
    return open_write_stream(path, append=append)


def ensure_write_stream(path: PathType, append: bool = False) -> Awaitable[AsyncWriteStream]:
    return open_write_stream_async(path, append=append)


# -- watch --------------------------------------------------------------------


def watch_sync(path: Optional[PathType] = None, recursive: bool = True) -> Watcher:
    """Start watching ``path`` for changes; close the returned watcher when done.

    Raises:
        ArgumentMissingError: If ``path`` is omitted.
        FileNotFoundError: If ``path`` doesn't exist.
    """
    path = _require(path, "path")
    return Watcher(path, recursive=recursive).start()


def watch(path: Optional[PathType] = None, recursive: bool = True) -> Awaitable[Watcher]:
    path = _require(path, "path")
    return anyio.to_thread.run_sync(Watcher(path, recursive=recursive).start)
