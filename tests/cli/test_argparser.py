"""Unit tests for the treefs argument parser."""

import argparse
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from treefs.cli.argparser import build_filter_config, create_exclusion_action, create_parser
from treefs.exclusion_rules.composite_rules import CompositeExclusionRules
from treefs.exclusion_rules.git_rules import GitIgnoreExclusionRules


@pytest.fixture
def mock_exclusion_rules():
    """Create a mock GitIgnoreExclusionRules object."""
    return MagicMock(spec=GitIgnoreExclusionRules)


def test_exclusion_action_loads_file(mock_exclusion_rules):
    action = create_exclusion_action(mock_exclusion_rules)(option_strings=["-e", "--exclude-from"], dest="exclude_from")

    action(None, argparse.Namespace(), Path("/path/to/.gitignore"), "-e")

    mock_exclusion_rules.load_rules.assert_called_once_with(Path("/path/to/.gitignore"))
    mock_exclusion_rules.add_rule.assert_not_called()


def test_exclusion_action_adds_pattern(mock_exclusion_rules):
    action = create_exclusion_action(mock_exclusion_rules)(option_strings=["-i", "--ignore"], dest="ignore")

    action(None, argparse.Namespace(), "*.map", "--ignore")

    mock_exclusion_rules.add_rule.assert_called_once_with("*.map")
    mock_exclusion_rules.load_rules.assert_not_called()


def test_exclusion_action_missing_file(tmp_path, capsys):
    parser = create_parser(GitIgnoreExclusionRules())
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["list", "-e", str(tmp_path / "missing.ignore"), str(tmp_path)])
    assert exc_info.value.code == 2
    assert "Rules file not found" in capsys.readouterr().err


def test_command_is_required(capsys):
    with pytest.raises(SystemExit) as exc_info:
        create_parser(GitIgnoreExclusionRules()).parse_args([])
    assert exc_info.value.code == 2


def test_copy_arguments():
    args = create_parser(GitIgnoreExclusionRules()).parse_args(["copy", "-a", "-x", "CNAME", "src", "dest"])
    assert args.command == "copy"
    assert args.source == Path("src")
    assert args.destination == Path("dest")
    assert args.all
    assert args.exclude == ["CNAME"]


def test_unique_has_no_filter_options():
    parser = create_parser(GitIgnoreExclusionRules())
    with pytest.raises(SystemExit):
        parser.parse_args(["unique", "-a", "out.txt"])


def test_build_filter_config_defaults():
    rules = GitIgnoreExclusionRules()
    args = create_parser(rules).parse_args(["list", "."])

    config = build_filter_config(args, rules)

    assert config.ignore_hidden
    assert config.ignore_pattern is None
    assert config.exclude == frozenset()


def test_build_filter_config_combines_patterns(tmp_path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("*.pyc\n")
    rules = GitIgnoreExclusionRules()
    args = create_parser(rules).parse_args(
        ["empty", "-a", "-e", str(ignore_file), "-i", "build/", "-r", r"\.log$", "-x", "keep.txt", "."]
    )

    config = build_filter_config(args, rules)

    assert not config.ignore_hidden
    assert isinstance(config.ignore_pattern, CompositeExclusionRules)
    assert config.ignore_pattern.exclude("main.pyc")
    assert config.ignore_pattern.exclude("build/out.js")
    assert config.ignore_pattern.exclude("server.log")
    assert not config.ignore_pattern.exclude("main.py")
    assert config.exclude == frozenset({"keep.txt"})
