"""Composite path rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BasePathRules


class CompositePathRules(BasePathRules):
    """Composite path rules that combine multiple rule types.

    A path matches if ANY of the constituent rules matches it (logical OR). This is
    how the command line combines regular expressions, individual gitignore
    patterns and gitignore files into one exclusion predicate.

    Attributes:
        rules (List[BasePathRules]): List of constituent rules.

    Example:
        >>> from tokentree.path_rules.git_rules import GitIgnorePathRules
        >>> from tokentree.path_rules.regex_rules import RegexPathRules
        >>> git_rules = GitIgnorePathRules()
        >>> git_rules.add_rule("*.pyc")
        >>> composite = CompositePathRules([git_rules, RegexPathRules(["/dist/"])])
        >>> composite.matches("/work/app/module.pyc")
        True
        >>> composite.matches("/work/app/dist/bundle.js")
        True
        >>> composite.matches("/work/app/module.py")
        False
    """

    def __init__(self, rules: Sequence[BasePathRules]):
        """Initialize composite path rules.

        Args:
            rules: Sequence of rules to combine.

        Raises:
            ValueError: If the rules sequence is empty.
            TypeError: If any rule doesn't implement BasePathRules.
        """
        if not rules:
            raise ValueError("At least one path rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BasePathRules):
                raise TypeError(f"Rule at index {i} must implement BasePathRules, got {type(rule)}")

        self.rules: List[BasePathRules] = list(rules)

    def matches(self, path: str) -> bool:
        return any(rule.matches(path) for rule in self.rules)

    def has_rules(self) -> bool:
        """Check if any constituent rule has rules configured.

        Returns:
            True if ANY of the constituent rules has rules configured.
        """
        return any(rule.has_rules() for rule in self.rules)

    def add_rule_object(self, rule: BasePathRules) -> None:
        """Add another rules object to this composite.

        Raises:
            TypeError: If rule doesn't implement BasePathRules.
        """
        if not isinstance(rule, BasePathRules):
            raise TypeError(f"Rule must implement BasePathRules, got {type(rule)}")
        self.rules.append(rule)

    def get_rules(self) -> List[BasePathRules]:
        """Get a copy of the constituent rules list."""
        return list(self.rules)
