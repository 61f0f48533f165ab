"""Command-line argument parsing for treefs.

This module defines the command-line interface for treefs, handling argument
parsing and turning the filter options into a FilterConfig.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from treefs import __version__
from treefs.exclusion_rules.git_rules import GitIgnoreExclusionRules
from treefs.path_filter import FilterConfig


def create_exclusion_action(exclusion_rules: GitIgnoreExclusionRules) -> Type[argparse.Action]:
    """Create an action class that feeds ignore files and patterns into ``exclusion_rules``.

    Rules are added as the arguments are processed, so the order of -e and -i options
    on the command line is preserved (this matters for ``!`` negations).
    """

    class ExclusionRulesAction(argparse.Action):
        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if option_string in ("-e", "--exclude-from"):
                try:
                    exclusion_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

    return ExclusionRulesAction


def create_parser(exclusion_rules: GitIgnoreExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The gitignore rules object to update during parsing.
    """
    description = """
    treefs: mirror, prune and uniquely name files in a directory tree.

    Hidden entries (names starting with a dot) are skipped by default, and hidden
    directories are never descended into. Ignore patterns and explicit exclusions
    only apply to files; directories are always traversed.
    """

    epilog = """
    Examples:
      # List the files of a project, skipping hidden ones
      treefs list /path/to/project

      # Mirror a site, leaving out source maps and anything in .gitignore
      treefs copy -e .gitignore -i "*.map" public/ /srv/www/

      # Empty an output directory but keep its CNAME file
      treefs empty -x CNAME public/

      # Print a free name for an output file
      treefs unique out/report.pdf
    """

    filter_options = argparse.ArgumentParser(add_help=False)
    ExclusionAction = create_exclusion_action(exclusion_rules)
    filter_options.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Include hidden files and descend into hidden directories.",
    )
    filter_options.add_argument(
        "-e",
        "--exclude-from",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Ignore file in .gitignore format (can be specified multiple times).",
    )
    filter_options.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help="Gitignore-style pattern matched against file paths (can be specified multiple times).",
    )
    filter_options.add_argument(
        "-r",
        "--regex",
        type=str,
        metavar="REGEX",
        action="append",
        default=[],
        help="Regular expression searched in file names (can be specified multiple times).",
    )
    filter_options.add_argument(
        "-x",
        "--exclude",
        type=str,
        metavar="PATH",
        action="append",
        default=[],
        help="Relative path of a file to leave alone (can be specified multiple times).",
    )

    parser = argparse.ArgumentParser(
        prog="treefs",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"treefs {__version__}", help="Show the version and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every file operation to stderr.")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    list_parser = commands.add_parser("list", parents=[filter_options], help="List eligible files.")
    list_parser.add_argument("directory", type=Path, help="Directory to list.")

    copy_parser = commands.add_parser("copy", parents=[filter_options], help="Mirror eligible files.")
    copy_parser.add_argument("source", type=Path, help="Directory to copy from.")
    copy_parser.add_argument("destination", type=Path, help="Directory to copy into (created if missing).")

    empty_parser = commands.add_parser(
        "empty", parents=[filter_options], help="Delete eligible files and prune empty directories."
    )
    empty_parser.add_argument("directory", type=Path, help="Directory to empty.")

    unique_parser = commands.add_parser("unique", help="Print a non-colliding name for a file.")
    unique_parser.add_argument("path", type=Path, help="Wanted file path.")

    return parser


def build_filter_config(args: argparse.Namespace, exclusion_rules: GitIgnoreExclusionRules) -> FilterConfig:
    """Turn the parsed filter options into a FilterConfig."""
    patterns: List[Any] = list(args.regex)
    if exclusion_rules.has_rules():
        patterns.append(exclusion_rules)
    return FilterConfig(
        ignore_hidden=not args.all,
        ignore_pattern=patterns or None,
        exclude=args.exclude,
    )
