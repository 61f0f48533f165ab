"""Command-line interface for treefs.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    126: Permission denied

Example:
    # Mirror a directory without its hidden files
    $ treefs copy site/ /srv/www/

    # Display version information
    $ treefs --version
"""

import logging
import sys
from typing import Iterable, Optional, Sequence

import anyio

from treefs import fs
from treefs.cli.argparser import build_filter_config, create_parser
from treefs.exclusion_rules.git_rules import GitIgnoreExclusionRules

logger = logging.getLogger("treefs.cli")


def _print_paths(paths: Iterable[str]) -> None:
    for path in sorted(paths):
        print(path)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the treefs command-line interface.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.
    """
    exclusion_rules = GitIgnoreExclusionRules()
    parser = create_parser(exclusion_rules)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "unique":
            print(anyio.run(fs.ensure_path, args.path))
            return

        config = build_filter_config(args, exclusion_rules)
        if args.command == "list":
            _print_paths(anyio.run(fs.list_dir, args.directory, config))
        elif args.command == "copy":
            _print_paths(anyio.run(fs.copy_dir, args.source, args.destination, config))
        elif args.command == "empty":
            _print_paths(anyio.run(fs.empty_dir, args.directory, config))
    except PermissionError as e:
        logger.debug("Permission denied", exc_info=True)
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
