"""Exclusion rules backed by a regular expression."""

import re
from typing import Pattern, Union

from .base_rules import BaseExclusionRules


class RegexExclusionRules(BaseExclusionRules):
    """Exclude files whose name contains a match for a regular expression.

    The expression is searched in the last segment of the relative path only, so a
    directory name along the way never causes a file to be excluded: with ``\\.js``,
    ``lib.js/readme.txt`` is kept while ``lib.js/index.js`` is not. Matching uses
    ``re.search`` and is therefore unanchored.

    Attributes:
        pattern (Pattern[str]): The compiled expression.

    Example:
        >>> rules = RegexExclusionRules(r"\\.js")
        >>> rules.exclude("folder/i.js")
        True
        >>> rules.exclude("folder/h.txt")
        False
        >>> rules.exclude("lib.js/readme.txt")
        False
    """

    def __init__(self, pattern: Union[str, Pattern[str]]):
        """Compile (or adopt) the expression.

        Args:
            pattern: A regular expression string or an already compiled pattern.

        Raises:
            re.error: If the expression string is not a valid regular expression.
        """
        self.pattern: Pattern[str] = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)

    def exclude(self, path: str) -> bool:
        return self.pattern.search(path.rsplit("/", 1)[-1]) is not None

    def __repr__(self) -> str:
        return f"RegexExclusionRules({self.pattern.pattern!r})"
