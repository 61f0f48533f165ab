import pytest

from treefs.io.text_normalizer import normalize_text


@pytest.mark.parametrize(
    "content,expected",
    [
        ("\ufefffoo", "foo"),
        ("foo\r\nbar", "foo\nbar"),
        ("\ufefffoo\r\nbar\r\n", "foo\nbar\n"),
        ("foo\rbar", "foo\rbar"),
        ("foo\ufeff", "foo\ufeff"),
        ("", ""),
    ],
)
def test_normalize_text(content, expected):
    assert normalize_text(content) == expected


def test_only_one_leading_bom_is_stripped():
    assert normalize_text("\ufeff\ufefffoo") == "\ufefffoo"
