"""Unit tests for the ensured-directory write streams."""

from unittest.mock import patch

import pytest

from treefs.io.write_stream import AsyncWriteStream, WriteStream, open_write_stream, open_write_stream_async


def test_open_write_stream_creates_parents(tmp_path):
    target = tmp_path / "foo" / "bar" / "baz.txt"

    stream = open_write_stream(target)
    assert isinstance(stream, WriteStream)
    assert stream.path == str(target)
    stream.write("foo")
    stream.write(b"\x00bar")
    stream.end()

    assert stream.closed
    assert target.read_bytes() == b"foo\x00bar"


def test_open_write_stream_existing_directory(tmp_path):
    target = tmp_path / "baz.txt"
    with open_write_stream(target) as stream:
        stream.write("one")
    with open_write_stream(target) as stream:
        stream.write("two")
    assert target.read_text() == "two"


def test_open_write_stream_append(tmp_path):
    target = tmp_path / "log" / "out.txt"
    with open_write_stream(target) as stream:
        stream.write("foo")
    with open_write_stream(target, append=True) as stream:
        assert stream.append
        stream.write("bar")
    assert target.read_text() == "foobar"


def test_write_keeps_line_endings(tmp_path):
    target = tmp_path / "crlf.txt"
    with open_write_stream(target) as stream:
        stream.write("\ufefffoo\r\nbar")
    assert target.read_bytes() == "\ufefffoo\r\nbar".encode("utf-8")


def test_end_with_final_chunk(tmp_path):
    target = tmp_path / "end.txt"
    stream = open_write_stream(target)
    stream.end("last")
    assert target.read_text() == "last"


def test_write_after_close(tmp_path):
    stream = open_write_stream(tmp_path / "closed.txt")
    stream.close()
    stream.close()  # second close is a no-op
    with pytest.raises(ValueError, match="closed WriteStream"):
        stream.write("foo")


def test_context_manager_closes_on_error(tmp_path):
    with pytest.raises(RuntimeError):
        with open_write_stream(tmp_path / "error.txt") as stream:
            stream.write("partial")
            raise RuntimeError("boom")
    assert stream.closed
    assert (tmp_path / "error.txt").read_text() == "partial"


def test_context_manager_prioritizes_original_exception(tmp_path):
    stream = open_write_stream(tmp_path / "error.txt")
    with patch.object(stream._file_obj, "close", side_effect=OSError("close failed")):
        with pytest.raises(RuntimeError, match="boom"):
            with stream:
                raise RuntimeError("boom")
    stream._file_obj.close()


def test_context_manager_raises_close_error(tmp_path):
    stream = open_write_stream(tmp_path / "error.txt")
    with patch.object(stream._file_obj, "close", side_effect=OSError("close failed")):
        with pytest.raises(OSError, match="close failed"):
            with stream:
                pass
    stream._file_obj.close()


def test_parent_is_a_file(tmp_path):
    (tmp_path / "blocker").write_text("x")
    with pytest.raises(OSError):
        open_write_stream(tmp_path / "blocker" / "child.txt")


class TestAsyncWriteStream:
    pytestmark = pytest.mark.asyncio

    async def test_open_creates_parents(self, tmp_path):
        target = tmp_path / "foo" / "bar.txt"

        stream = await open_write_stream_async(target)
        assert isinstance(stream, AsyncWriteStream)
        assert stream.path == str(target)
        await stream.write("foo")
        await stream.end(b"bar")

        assert stream.closed
        assert target.read_text() == "foobar"

    async def test_append(self, tmp_path):
        target = tmp_path / "foo" / "bar.txt"
        async with await open_write_stream_async(target) as stream:
            await stream.write("foo")
        async with await open_write_stream_async(target, append=True) as stream:
            await stream.write("bar")
        assert target.read_text() == "foobar"

    async def test_write_after_close(self, tmp_path):
        stream = await open_write_stream_async(tmp_path / "closed.txt")
        await stream.aclose()
        with pytest.raises(ValueError, match="closed AsyncWriteStream"):
            await stream.write("foo")

    async def test_closes_on_error(self, tmp_path):
        with pytest.raises(RuntimeError):
            async with await open_write_stream_async(tmp_path / "error.txt") as stream:
                raise RuntimeError("boom")
        assert stream.closed
