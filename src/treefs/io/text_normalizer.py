"""Normalization applied to text read from disk."""

BYTE_ORDER_MARK = "\ufeff"


def normalize_text(content: str) -> str:
    """Strip a leading byte-order mark and convert CRLF line endings to LF.

    Only text reads apply this; writes, appends and binary copies keep content as-is.

    Example:
        >>> normalize_text("\\ufefffoo")
        'foo'
        >>> normalize_text("foo\\r\\nbar")
        'foo\\nbar'
    """
    if content.startswith(BYTE_ORDER_MARK):
        content = content[len(BYTE_ORDER_MARK) :]  # noqa: E203
    return content.replace("\r\n", "\n")
