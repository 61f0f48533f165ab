"""Write streams whose parent directories are created on open.

``open_write_stream`` and ``open_write_stream_async`` create every missing ancestor of
the target path (pre-existing directories are fine) and then open the file for
writing or appending. The returned stream stays open until the caller closes it;
used as a context manager it is closed on every exit path.
"""

import logging
import types
from pathlib import Path
from typing import BinaryIO, Optional, Type, Union

import anyio

from treefs.types import PathType

logger = logging.getLogger(__name__)

Data = Union[str, bytes]


def _encode(data: Data) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def _mode(append: bool) -> str:
    return "ab" if append else "wb"


class WriteStream:
    """Blocking write stream over a file opened in binary mode.

    Text is encoded as UTF-8 on write; no line-ending or BOM handling takes place.

    Attributes:
        path: The path the stream writes to, as given by the caller.
        append: Whether the file was opened for appending.
    """

    def __init__(self, path: PathType, append: bool = False):
        """Open ``path`` for writing. The parent directory must already exist.

        Args:
            path: File to write to.
            append: Append to the file instead of truncating it.

        Raises:
            OSError: If the file cannot be opened.
        """
        self.path = str(path)
        self.append = append
        self._file_obj: BinaryIO = Path(path).open(_mode(append))
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: Data) -> None:
        """Write text (encoded as UTF-8) or bytes.

        Raises:
            ValueError: If the stream has already been closed.
            OSError: If an I/O error occurs during writing.
        """
        if self._closed:
            raise ValueError("Cannot write to closed WriteStream")
        self._file_obj.write(_encode(data))

    def end(self, data: Optional[Data] = None) -> None:
        """Write an optional last chunk, then close the stream."""
        try:
            if data is not None:
                self.write(data)
        finally:
            self.close()

    def close(self) -> None:
        """Flush and close the underlying file. Closing twice is a no-op."""
        if self._closed:
            return
        # Mark closed first so a failing close is not retried on the next call
        self._closed = True
        self._file_obj.close()

    def __enter__(self) -> "WriteStream":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the stream.

        A failure while closing is only raised when the block itself succeeded,
        so the original exception takes priority.
        """
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise


class AsyncWriteStream:
    """Non-blocking write stream backed by an ``anyio.AsyncFile``.

    Obtain instances with ``open_write_stream_async``.

    Attributes:
        path: The path the stream writes to, as given by the caller.
        append: Whether the file was opened for appending.
    """

    def __init__(self, path: PathType, file: "anyio.AsyncFile[bytes]", append: bool = False):
        self.path = str(path)
        self.append = append
        self._file = file
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def write(self, data: Data) -> None:
        if self._closed:
            raise ValueError("Cannot write to closed AsyncWriteStream")
        await self._file.write(_encode(data))

    async def end(self, data: Optional[Data] = None) -> None:
        """Write an optional last chunk, then close the stream."""
        try:
            if data is not None:
                await self.write(data)
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._file.aclose()

    async def __aenter__(self) -> "AsyncWriteStream":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            await self.aclose()
        except OSError:
            if exc_type is None:
                raise


def open_write_stream(path: PathType, append: bool = False) -> WriteStream:
    """Create the parent directories of ``path`` and open it for writing.

    Raises:
        OSError: If a directory cannot be created or the file cannot be opened.
    """
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Opening %s for %s", path, "append" if append else "write")
    return WriteStream(path, append=append)


async def open_write_stream_async(path: PathType, append: bool = False) -> AsyncWriteStream:
    """Asynchronous counterpart of ``open_write_stream``."""
    await anyio.Path(path).parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Opening %s for %s", path, "append" if append else "write")
    file = await anyio.open_file(path, _mode(append))
    return AsyncWriteStream(path, file, append=append)
