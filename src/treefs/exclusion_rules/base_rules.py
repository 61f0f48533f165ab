from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class for pattern matchers used as a filter's ``ignore_pattern``.

    Implementations decide whether a file, given by its path relative to the traversal
    root, matches the rules. Relative paths always use forward slashes as separators,
    whatever the host platform, so implementations never need to normalize them.

    Rules are only consulted for files. Directories are never handed to ``exclude``
    by the path filter, so a rule such as ``build/`` or ``*.js`` cannot stop a
    directory from being traversed.

    Example:
        >>> class SuffixRules(BaseExclusionRules):
        ...     def __init__(self, suffix: str):
        ...         self.suffix = suffix
        ...     def exclude(self, path: str) -> bool:
        ...         return path.endswith(self.suffix)
        >>> rules = SuffixRules(".tmp")
        >>> rules.exclude("build/cache.tmp")
        True
        >>> rules.exclude("main.py")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a relative file path matches these rules.

        Args:
            path (str): Path relative to the traversal root, using "/" separators.

        Returns:
            bool: True if the path should be left out, False otherwise.
        """
        pass

    def has_rules(self) -> bool:
        """
        Report whether any rule is configured.

        Returns:
            bool: True unless the implementation knows it can never match.
        """
        return True
