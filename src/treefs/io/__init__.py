"""Text reading and ensured-directory writing helpers."""

from .text_normalizer import normalize_text
from .write_stream import AsyncWriteStream, WriteStream, open_write_stream, open_write_stream_async

__all__ = ["AsyncWriteStream", "WriteStream", "normalize_text", "open_write_stream", "open_write_stream_async"]
