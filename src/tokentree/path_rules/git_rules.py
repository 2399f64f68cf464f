"""Implementation of path rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from tokentree.types import PathType

from .base_rules import BasePathRules


class GitIgnorePathRules(BasePathRules):
    """Path rules using .gitignore pattern syntax.

    Paths are matched with the pathspec library in the same way that Git matches
    them, so all standard .gitignore syntax is supported: globs, directory patterns
    ending in ``/``, negations starting with ``!``, ``**`` and comment lines.

    The tree builder hands every rules object the full path of an entry, and for
    directories it also tries the path with a trailing slash so that directory
    patterns apply to the directory itself. Unanchored patterns such as ``*.log``
    match at any depth of a full path. Anchored patterns (``/dist``) are only
    meaningful relative to a base directory; when ``base_dir`` is given, paths under
    it are matched relative to it.

    Attributes:
        spec (PathSpec): Compiled pattern matcher from the pathspec library.
        base_dir (Optional[str]): Directory that anchored patterns are relative to.

    Example:
        >>> rules = GitIgnorePathRules()
        >>> rules.add_rule("*.log")
        >>> rules.matches("/srv/app/logs/app.log")
        True
        >>> rules.add_rule("!keep.log")
        >>> rules.matches("/srv/app/logs/keep.log")
        False
        >>> anchored = GitIgnorePathRules(base_dir="/srv/app")
        >>> anchored.add_rule("/dist/")
        >>> anchored.matches("/srv/app/dist/")
        True
        >>> anchored.matches("/srv/app/src/dist/")
        False
    """

    def __init__(
        self,
        rules_files: Optional[Union[PathType, Sequence[PathType]]] = None,
        base_dir: Optional[PathType] = None,
    ):
        """Initialize GitIgnorePathRules with patterns from specified files.

        Args:
            rules_files: Path(s) to the file(s) containing .gitignore patterns.
            base_dir: Directory that anchored patterns are relative to. Defaults to None.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])
        self.base_dir = Path(base_dir).as_posix().rstrip("/") if base_dir is not None else None

        if rules_files is not None:
            self.load_rules(rules_files)

    def matches(self, path: str) -> bool:
        """Check if a path matches the loaded .gitignore patterns.

        Args:
            path: Full path to check, using forward slashes.

        Returns:
            bool: True if the path matches a non-negated pattern that isn't overridden
                by a later negation, False otherwise.
        """
        return self.spec.match_file(self._relative(path))

    def has_rules(self) -> bool:
        return bool(self.spec.patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and combine .gitignore patterns from one or more files.

        Patterns are appended to the existing ones, so later files can override
        earlier ones through negation.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                lines = f.read().splitlines()

            self._patterns().extend(PathSpec.from_lines(GitWildMatchPattern, lines).patterns)

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern directly.

        Args:
            rule: A single .gitignore pattern (e.g. "*.pyc", "dist/", "!important.txt").
        """
        self._patterns().append(GitWildMatchPattern(rule))

    def _patterns(self) -> list:
        # PathSpec may hold its patterns in an immutable sequence
        if not isinstance(self.spec.patterns, list):
            self.spec.patterns = list(self.spec.patterns)
        return self.spec.patterns

    def _relative(self, path: str) -> str:
        if self.base_dir is None:
            return path
        prefix = self.base_dir + "/"
        if path.startswith(prefix):
            return path[len(prefix) :]
        return path
