"""Composite exclusion rules for combining several matchers."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Combine several exclusion rules with a logical OR.

    A path is excluded as soon as any constituent rule excludes it. This is what a
    filter builds when its ``ignore_pattern`` is given as a sequence, so a regular
    expression and a set of gitignore patterns can be used together.

    Attributes:
        rules (List[BaseExclusionRules]): Constituent rules, evaluated in order.

    Example:
        >>> from treefs.exclusion_rules.regex_rules import RegexExclusionRules
        >>> from treefs.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule("*.log")
        >>> composite = CompositeExclusionRules([RegexExclusionRules(r"\\.js$"), git_rules])
        >>> composite.exclude("app.js"), composite.exclude("app.log"), composite.exclude("app.py")
        (True, True, False)
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Args:
            rules: Rules to combine. Each must implement BaseExclusionRules.

        Raises:
            ValueError: If no rules are given.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, " f"got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        return any(rule.exclude(path) for rule in self.rules)

    def has_rules(self) -> bool:
        return any(rule.has_rules() for rule in self.rules)

    def get_rules(self) -> List[BaseExclusionRules]:
        """Return a copy of the constituent rules list."""
        return list(self.rules)
