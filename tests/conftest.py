"""Test configuration and fixtures for treefs."""

import pytest

# Relative path -> content of the sample tree used across the tests.
DUMMY_FILES = {
    # Normal files in a hidden folder
    ".hidden/a.txt": "a",
    ".hidden/b.js": "b",
    # Normal folder in a hidden folder
    ".hidden/c/d": "d",
    # Top-level files
    "e.txt": "e",
    "f.js": "f",
    # A hidden file
    ".g": "g",
    # Files in a normal folder
    "folder/h.txt": "h",
    "folder/i.js": "i",
    # A hidden file in a normal folder
    "folder/.j": "j",
}


@pytest.fixture
def dummy_files():
    return dict(DUMMY_FILES)


@pytest.fixture
def dummy_folder(tmp_path):
    """A tree mixing hidden and visible files and folders."""
    root = tmp_path / "test"
    for relative_path, content in DUMMY_FILES.items():
        target = root / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return root
