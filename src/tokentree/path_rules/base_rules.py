from abc import ABC, abstractmethod
from typing import Sequence, Union

from tokentree.types import PathType


class BasePathRules(ABC):
    """
    Abstract base class defining the interface for path-matching rules.

    Path rules answer a single question: does this full path match? The tree builder
    uses one rules object to decide which entries are excluded from the tree and
    another to decide which entries become pending placeholders. Implementations may
    use any matching strategy (regular expressions, gitignore patterns, combinations)
    as long as they accept the full path string of the candidate entry.

    Loading rules from files and adding individual rules are optional capabilities
    that depend on the rule type.

    Example:
        >>> from tokentree.path_rules.regex_rules import RegexPathRules
        >>> rules = RegexPathRules([r"\\.log$"])
        >>> rules.matches("/srv/app/debug.log")
        True
        >>> rules.matches("/srv/app/main.py")
        False
    """

    @abstractmethod
    def matches(self, path: str) -> bool:
        """
        Determine whether a path matches any of the loaded rules.

        Args:
            path (str): Full path of the file or directory to check, using forward
                slashes as separators.

        Returns:
            bool: True if the path matches, False otherwise.
        """
        pass

    def has_rules(self) -> bool:
        """
        Check whether any rules are configured.

        Returns:
            bool: True by default. Subclasses that can be empty override this.
        """
        return True

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single rule directly.

        Args:
            rule (str): The rule to add. Its syntax depends on the rule type.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
