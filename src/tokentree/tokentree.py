"""Scanning a directory into a selectable tree document.

This module provides the entry points used by a UI or request handler: ``scan``
builds a fresh document for a directory, and ``FileData`` wraps the resulting tree
with the toggle operations and JSON conversion.
"""

from typing import Any, Dict, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from tokentree.exceptions import InvalidTreeDocumentError
from tokentree.file_system_tree.error_action import ErrorAction
from tokentree.file_system_tree.file_system_node import FileSystemNode
from tokentree.file_system_tree.file_system_tree import FileSystemTree
from tokentree.path_rules.base_rules import BasePathRules
from tokentree.path_rules.regex_rules import PatternLike, RegexPathRules
from tokentree.serialization import node_from_dict
from tokentree.tree_mutator import toggle_checked, toggle_expanded
from tokentree.types import NodePath, PathType

ExcludePatterns = Union[BasePathRules, Sequence[PatternLike], None]


class FileData(BaseModel):
    """A scanned tree document with a single root folder.

    FileData values are immutable: the toggle methods return new documents and
    leave the original one as it was.

    Attributes:
        root (FileSystemNode): The root folder of the tree.

    Example:
        >>> data = FileData.from_dict({"root": {"name": "app", "tokens": 0, "type": "folder"}})
        >>> data.toggle_checked(["app"]).root.checked
        False
        >>> data.root.checked
        True
    """

    model_config = ConfigDict(frozen=True)

    root: FileSystemNode

    def toggle_checked(self, target_path: NodePath) -> "FileData":
        """Return a new document with the addressed node's selection flipped (cascading to folders' contents)."""
        return FileData(root=toggle_checked(self.root, target_path))

    def toggle_expanded(self, target_path: NodePath) -> "FileData":
        """Return a new document with the addressed folder's expansion flipped."""
        return FileData(root=toggle_expanded(self.root, target_path))

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FileData":
        """Rebuild a document from its dictionary form.

        Raises:
            InvalidTreeDocumentError: If the document is malformed.
        """
        if not isinstance(data, Mapping) or "root" not in data:
            raise InvalidTreeDocumentError("expected an object with a 'root' node")
        return cls(root=node_from_dict(data["root"]))

    @classmethod
    def from_json(cls, text: str) -> "FileData":
        """Parse a document from its JSON form.

        Raises:
            InvalidTreeDocumentError: If the text is not a valid document.
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise InvalidTreeDocumentError(str(e.errors()[0]["msg"])) from e

    def __repr__(self) -> str:
        return f"FileData(root={self.root.name!r}, tokens={self.root.tokens})"


def _as_rules(patterns: ExcludePatterns) -> Optional[BasePathRules]:
    if patterns is None or isinstance(patterns, BasePathRules):
        return patterns
    return RegexPathRules(patterns)


def scan(
    root_path: PathType,
    exclude_patterns: ExcludePatterns = None,
    *,
    pending_patterns: ExcludePatterns = None,
    follow_symlinks: bool = False,
) -> FileData:
    """Scan a directory into a fresh tree document.

    Filesystem errors never escape this function: they are logged as warnings and
    the document holds whatever could be read.

    Args:
        root_path: Directory to scan.
        exclude_patterns: Rules object, or regular expressions searched in each full
            path, for entries to omit. Defaults to None.
        pending_patterns: Rules object, or regular expressions, for entries to keep as
            unscanned placeholders. Defaults to ``node_modules``, ``.git`` and ``build``.
        follow_symlinks: Whether to walk symbolic links to directories. Defaults to False.

    Returns:
        The document holding the root folder of the scanned tree.

    Raises:
        InvalidPatternError: If a pattern string is not a valid regular expression.

    Example:
        >>> data = scan("src", [r"\\.pyc$"])  # doctest: +SKIP
        >>> data.root.expanded  # doctest: +SKIP
        True
    """
    tree = FileSystemTree(
        root_path,
        exclusion_rules=_as_rules(exclude_patterns),
        pending_rules=_as_rules(pending_patterns),
        error_action=ErrorAction.WARN,
        follow_symlinks=follow_symlinks,
    )
    return FileData(root=tree.get_tree())


def create_file_data(root_path: PathType, exclude_patterns: ExcludePatterns = None) -> FileData:
    """Scan a directory with the default pending patterns. Shorthand for ``scan``."""
    return scan(root_path, exclude_patterns)
