"""Exclusion rules for filtering files during traversal."""

import re
from typing import Any, Optional

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .regex_rules import RegexExclusionRules


def as_exclusion_rules(pattern: Any) -> Optional[BaseExclusionRules]:
    """Coerce an ``ignore_pattern`` value into an exclusion rules object.

    Accepts None, a regular expression string, a compiled pattern, an existing
    BaseExclusionRules instance, or a list/tuple of any of those (combined with OR).

    Raises:
        TypeError: If the value is none of the accepted kinds.
    """
    if pattern is None or isinstance(pattern, BaseExclusionRules):
        return pattern
    if isinstance(pattern, (str, re.Pattern)):
        return RegexExclusionRules(pattern)
    if isinstance(pattern, (list, tuple)):
        rules = [rule for rule in map(as_exclusion_rules, pattern) if rule is not None]
        return CompositeExclusionRules(rules) if rules else None
    raise TypeError(f"Unsupported ignore_pattern type: {type(pattern).__name__}")


__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "GitIgnoreExclusionRules",
    "RegexExclusionRules",
    "as_exclusion_rules",
]
