"""Collision-free file naming.

Given a wanted file path, ``ensure_unique`` returns it as-is when nothing occupies it,
otherwise the first free sibling obtained by inserting ``-1``, ``-2``, ... before the
final extension. Only names with the same extension are probed, so ``foo-2.md`` never
blocks ``foo-2.txt``.
"""

import logging
import os
from typing import Iterator, Tuple

import anyio

from treefs.types import PathType

logger = logging.getLogger(__name__)


def split_path(path: PathType) -> Tuple[str, str, str]:
    """Split a path into directory, base name and final extension.

    Example:
        >>> split_path("/tmp/out/foo.txt")
        ('/tmp/out', 'foo', '.txt')
        >>> split_path("/tmp/out/archive.tar.gz")
        ('/tmp/out', 'archive.tar', '.gz')
        >>> split_path("/tmp/out/README")
        ('/tmp/out', 'README', '')
    """
    directory, name = os.path.split(os.fspath(path))
    base, extension = os.path.splitext(name)
    return directory, base, extension


def iter_candidates(path: PathType) -> Iterator[str]:
    """Yield ``path`` followed by its numbered siblings, without end.

    Example:
        >>> from itertools import islice
        >>> list(islice(iter_candidates("out/foo.txt"), 3))
        ['out/foo.txt', 'out/foo-1.txt', 'out/foo-2.txt']
    """
    yield os.fspath(path)
    directory, base, extension = split_path(path)
    counter = 1
    while True:
        yield os.path.join(directory, f"{base}-{counter}{extension}")
        counter += 1


async def _occupied(candidate: str) -> bool:
    # a dangling symlink occupies its name
    path = anyio.Path(candidate)
    return await path.is_symlink() or await path.exists()


def ensure_unique_sync(path: PathType) -> str:
    """Return ``path`` if it is free, else its first free numbered sibling.

    Any directory entry takes a name, including a symbolic link whose target is missing.
    """
    for candidate in iter_candidates(path):
        if not os.path.lexists(candidate):
            if candidate != os.fspath(path):
                logger.debug("%s is taken, using %s", path, candidate)
            return candidate
    raise AssertionError("unreachable")


async def ensure_unique(path: PathType) -> str:
    """Asynchronous counterpart of ``ensure_unique_sync``."""
    for candidate in iter_candidates(path):
        if not await _occupied(candidate):
            if candidate != os.fspath(path):
                logger.debug("%s is taken, using %s", path, candidate)
            return candidate
    raise AssertionError("unreachable")
