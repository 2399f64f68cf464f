"""Path rules built from regular expressions searched anywhere in the path."""

import re
from re import Pattern
from typing import List, Optional, Sequence, Union

from tokentree.exceptions import InvalidPatternError

from .base_rules import BasePathRules

# Entries whose subtree is not scanned unless the caller says otherwise
DEFAULT_PENDING_PATTERNS = ("node_modules", r"\.git", "build")

PatternLike = Union[str, Pattern[str]]


class RegexPathRules(BasePathRules):
    """Path rules that match when any regular expression is found in the path.

    Each pattern is searched (not anchored) in the full path string, so a bare token
    such as ``node_modules`` matches that token at any depth, and anchors like ``$``
    can be used to target file extensions.

    Patterns may be given as strings or as already compiled ``re.Pattern`` objects.

    Attributes:
        patterns (List[Pattern[str]]): Compiled patterns, in the order they were added.

    Example:
        >>> rules = RegexPathRules(["node_modules", r"\\.pyc$"])
        >>> rules.matches("/work/app/node_modules/left-pad/index.js")
        True
        >>> rules.matches("/work/app/cache/module.pyc")
        True
        >>> rules.matches("/work/app/src/module.py")
        False
        >>> RegexPathRules().has_rules()
        False
    """

    def __init__(self, patterns: Optional[Sequence[PatternLike]] = None):
        """Initialize RegexPathRules.

        Args:
            patterns: Regular expressions to search for. Defaults to none.

        Raises:
            InvalidPatternError: If any pattern fails to compile.
        """
        self.patterns: List[Pattern[str]] = []
        for pattern in patterns or ():
            self._add_pattern(pattern)

    def matches(self, path: str) -> bool:
        return any(pattern.search(path) for pattern in self.patterns)

    def has_rules(self) -> bool:
        return bool(self.patterns)

    def add_rule(self, rule: str) -> None:
        """Add a single regular expression.

        Args:
            rule: The regular expression to search for.

        Raises:
            InvalidPatternError: If the expression fails to compile.

        Example:
            >>> rules = RegexPathRules()
            >>> rules.add_rule("dist")
            >>> rules.matches("/work/app/dist/bundle.js")
            True
        """
        self._add_pattern(rule)

    def _add_pattern(self, pattern: PatternLike) -> None:
        if isinstance(pattern, re.Pattern):
            self.patterns.append(pattern)
            return
        try:
            self.patterns.append(re.compile(pattern))
        except re.error as e:
            raise InvalidPatternError(pattern, str(e)) from e

    def __repr__(self) -> str:
        return f"RegexPathRules({[p.pattern for p in self.patterns]!r})"


def default_pending_rules() -> RegexPathRules:
    """Create the rules that mark dependency, VCS and build directories as pending.

    Returns:
        RegexPathRules matching any path that contains ``node_modules``, ``.git`` or ``build``.

    Example:
        >>> rules = default_pending_rules()
        >>> rules.matches("/work/app/.git")
        True
        >>> rules.matches("/work/app/src")
        False
    """
    return RegexPathRules(DEFAULT_PENDING_PATTERNS)
