"""Path rules for excluding entries and marking them as pending."""

from .base_rules import BasePathRules
from .composite_rules import CompositePathRules
from .git_rules import GitIgnorePathRules
from .regex_rules import DEFAULT_PENDING_PATTERNS, RegexPathRules, default_pending_rules

__all__ = [
    "DEFAULT_PENDING_PATTERNS",
    "BasePathRules",
    "CompositePathRules",
    "GitIgnorePathRules",
    "RegexPathRules",
    "default_pending_rules",
]
