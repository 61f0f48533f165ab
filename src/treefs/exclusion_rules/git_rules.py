"""Exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from treefs.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules written in .gitignore pattern syntax.

    Patterns are matched with the pathspec library exactly the way Git matches them:
    globs, ``**``, negation with ``!`` and comment lines are all supported. Rules can
    come from one or more ignore files, be added one at a time with ``add_rule``, or
    both; later rules override earlier ones, which matters for negations.

    When used as a filter's ``ignore_pattern`` the rules only see file paths. A
    directory pattern such as ``build/`` therefore still excludes every file below
    ``build`` (Git semantics), but the walk itself continues into the directory.

    Attributes:
        spec (PathSpec): Compiled matcher for all rules added so far.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.exclude("keep.log")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize the rules, optionally loading one or more ignore files.

        Args:
            rules_files: Path, or sequence of paths, of files in .gitignore format.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        return bool(self.spec.match_file(path))

    def has_rules(self) -> bool:
        return len(self.spec.patterns) > 0

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more ignore files.

        Args:
            rules_files: Path, or sequence of paths, of files in .gitignore format.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            self._extend(path.read_text(encoding="utf-8").splitlines())

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore pattern (e.g. ``"*.pyc"`` or ``"!important.txt"``)."""
        self._extend([rule])

    def _extend(self, lines: Sequence[str]) -> None:
        self._lines.extend(lines)
        self.spec = PathSpec.from_lines(GitWildMatchPattern, self._lines)
