"""Eligibility rules for entries met during a directory walk.

A ``FilterConfig`` bundles the three controls a caller can pass to ``list_dir``,
``copy_dir`` and ``empty_dir``. ``is_included`` is the pure predicate the tree walker
applies to every entry before recording or descending into it.
"""

from dataclasses import dataclass, field, fields
from typing import Any, FrozenSet, Iterable, Mapping, Union

from treefs.exclusion_rules import as_exclusion_rules
from treefs.types import FileType

HIDDEN_MARKER = "."


def to_relative_path(path: str) -> str:
    """Canonicalize a relative path to forward-slash form.

    Example:
        >>> to_relative_path("folder\\\\i.js")
        'folder/i.js'
        >>> to_relative_path("./folder/h.txt")
        'folder/h.txt'
    """
    parts = [part for part in path.replace("\\", "/").split("/") if part not in ("", ".")]
    return "/".join(parts)


def is_hidden(relative_path: str) -> bool:
    """Return True if any segment of the path begins with the hidden marker."""
    return any(segment.startswith(HIDDEN_MARKER) for segment in relative_path.split("/") if segment)


@dataclass(frozen=True)
class FilterConfig:
    """Per-call filtering options for the tree operations.

    Attributes:
        ignore_hidden: Skip dot-files and never descend into dot-directories.
        ignore_pattern: Matcher applied to files. Any value accepted by
            ``as_exclusion_rules`` may be passed; it is coerced on construction.
        exclude: Relative file paths to leave alone. Coerced to a frozenset of
            canonical (forward-slash) paths on construction.

    Example:
        >>> config = FilterConfig(ignore_pattern=r"\\.js", exclude=["folder\\\\a.txt"])
        >>> sorted(config.exclude)
        ['folder/a.txt']
        >>> config.ignore_pattern.exclude("f.js")
        True
    """

    ignore_hidden: bool = True
    ignore_pattern: Any = None
    exclude: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # frozen dataclass, so normalized values go through object.__setattr__
        object.__setattr__(self, "ignore_pattern", as_exclusion_rules(self.ignore_pattern))
        exclude: Iterable[str] = self.exclude or ()
        if isinstance(exclude, str):
            exclude = [exclude]
        object.__setattr__(self, "exclude", frozenset(to_relative_path(str(path)) for path in exclude))

    @classmethod
    def coerce(cls, options: Union["FilterConfig", Mapping[str, Any], None]) -> "FilterConfig":
        """Build a config from None, an existing config, or a mapping of field names.

        Raises:
            TypeError: If the mapping holds an unknown option name.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise TypeError(f"Unknown filter option(s): {', '.join(sorted(unknown))}")
        return cls(**dict(options))


def is_included(relative_path: str, kind: FileType, config: FilterConfig) -> bool:
    """Decide whether an entry is eligible under ``config``.

    The hidden rule applies to files and directories alike. The pattern and the
    explicit exclusion set only apply to files, so a directory is never pruned
    because of them.

    Example:
        >>> config = FilterConfig(ignore_pattern=r"\\.js")
        >>> is_included(".hidden/a.txt", FileType.FILE, config)
        False
        >>> is_included("lib.js", FileType.DIRECTORY, config)
        True
        >>> is_included("lib.js/index.js", FileType.FILE, config)
        False
        >>> is_included("lib.js/readme.txt", FileType.FILE, config)
        True
    """
    if config.ignore_hidden and is_hidden(relative_path):
        return False
    if kind is not FileType.FILE:
        return True
    if config.ignore_pattern is not None and config.ignore_pattern.exclude(relative_path):
        return False
    return relative_path not in config.exclude
