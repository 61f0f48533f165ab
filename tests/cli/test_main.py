"""Tests for the treefs command-line entry point."""

from unittest.mock import patch

import pytest

from treefs import __version__
from treefs.cli.main import main


def test_list(dummy_folder, capsys):
    main(["list", str(dummy_folder)])
    assert capsys.readouterr().out.splitlines() == ["e.txt", "f.js", "folder/h.txt", "folder/i.js"]


def test_list_all_with_regex(dummy_folder, capsys):
    main(["list", "--all", "-r", r"\.(js|txt)$", str(dummy_folder)])
    assert capsys.readouterr().out.splitlines() == [".g", ".hidden/c/d", "folder/.j"]


def test_list_with_gitignore_pattern(dummy_folder, capsys):
    main(["list", "-i", "folder/", str(dummy_folder)])
    assert capsys.readouterr().out.splitlines() == ["e.txt", "f.js"]


def test_copy(dummy_folder, tmp_path, capsys):
    dest = tmp_path / "mirror"
    main(["copy", "-x", "f.js", str(dummy_folder), str(dest)])

    assert capsys.readouterr().out.splitlines() == ["e.txt", "folder/h.txt", "folder/i.js"]
    assert (dest / "folder" / "i.js").read_text() == "i"
    assert not (dest / "f.js").exists()


def test_empty(dummy_folder, capsys):
    main(["empty", "-r", r"\.js$", str(dummy_folder)])

    assert capsys.readouterr().out.splitlines() == ["e.txt", "folder/h.txt"]
    assert (dummy_folder / "f.js").exists()
    assert not (dummy_folder / "e.txt").exists()


def test_unique(tmp_path, capsys):
    (tmp_path / "report.pdf").write_text("x")
    main(["unique", str(tmp_path / "report.pdf")])
    assert capsys.readouterr().out.strip() == str(tmp_path / "report-1.pdf")


def test_missing_directory(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["list", str(tmp_path / "missing")])
    assert exc_info.value.code == 1
    assert capsys.readouterr().err.startswith("Error: ")


def test_permission_denied(dummy_folder, capsys):
    with patch("treefs.cli.main.fs.list_dir", side_effect=PermissionError("Permission denied")):
        with pytest.raises(SystemExit) as exc_info:
            main(["list", str(dummy_folder)])
    assert exc_info.value.code == 126
    assert "Error: Permission denied" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out
