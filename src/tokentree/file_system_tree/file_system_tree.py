"""File system tree representation with exclusion and pending rules.

This module provides the main FileSystemTree class, which walks a directory into a
tree of FileSystemNode objects annotated with approximate token counts, and the
rendering helper used to display such a tree.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

from tokentree.file_system_tree.error_action import ErrorAction
from tokentree.file_system_tree.file_identifier import FileIdentifier
from tokentree.file_system_tree.file_system_node import FileSystemNode
from tokentree.path_rules.base_rules import BasePathRules
from tokentree.path_rules.regex_rules import default_pending_rules
from tokentree.token_estimator import file_tokens
from tokentree.types import NodeType, PathType

logger = logging.getLogger(__name__)


def sort_key(node: FileSystemNode) -> Tuple[bool, str, str]:
    """Ordering of siblings: folders before files, then by name ignoring case.

    Names that differ only in case put the lowercase spelling first.
    """
    return (not node.is_dir, node.name.casefold(), node.name.swapcase())


class FileSystemTree:
    """A token-annotated tree of a directory with support for exclusion and pending rules.

    The directory is walked depth-first in a single synchronous pass. Every entry is
    tested against the exclusion rules first and then against the pending rules,
    using its full path (with forward slashes; directories are also tried with a
    trailing slash):

    - Excluded entries are omitted entirely and excluded directories are not walked.
    - Pending entries are kept as empty placeholders with zero tokens and
      ``is_pending`` set; pending directories are not walked.
    - Files count ``size // 4`` tokens; folders count the sum of their children.

    The root is never tested against the rules. Filesystem errors do not abort the
    walk: with the default ``ErrorAction.WARN`` a file that can't be stat'ed counts
    zero tokens and a directory that can't be listed keeps whatever entries were
    read, and each failure is logged as a warning.

    Symbolic Link Behavior:
        By default symbolic links are never walked; a link is a file node whose token
        count comes from the size of its target. When follow_symlinks is True, links
        to directories are walked like directories, and a link back to a directory
        already on the current descent path becomes an empty folder instead of
        recursing forever.

    Attributes:
        root_path (Path): The root directory.
        exclusion_rules (Optional[BasePathRules]): Rules for omitting entries.
        pending_rules (BasePathRules): Rules for cutting the walk off at placeholders.
        error_action (ErrorAction): How to handle filesystem errors.
        follow_symlinks (bool): Whether to walk symbolic links to directories.

    Example:
        >>> tree = FileSystemTree("src")  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        src/ (1520)
        ├── utils/ (310)
        │   └── helpers.py (310)
        └── main.py (1210)
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BasePathRules] = None,
        pending_rules: Optional[BasePathRules] = None,
        error_action: ErrorAction = ErrorAction.WARN,
        follow_symlinks: bool = False,
    ) -> None:
        """Initialize a FileSystemTree.

        Args:
            root_path: Path to the root directory to scan. Can be any path-like object.
            exclusion_rules: Rules for omitting files and directories. Defaults to None.
            pending_rules: Rules for marking entries as pending. Defaults to the rules
                returned by ``default_pending_rules()``; pass an empty ``RegexPathRules``
                to disable pending placeholders.
            error_action: How to handle filesystem errors. Defaults to WARN.
            follow_symlinks: Whether to walk symbolic links to directories. Defaults to False.
        """
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self.pending_rules = pending_rules if pending_rules is not None else default_pending_rules()
        self.error_action = ErrorAction(error_action)
        self.follow_symlinks = follow_symlinks
        self._tree: Optional[FileSystemNode] = None
        self._file_count: int = 0
        self._directory_count: int = 0
        self._pending_count: int = 0

    def get_tree(self) -> FileSystemNode:
        """Get the root node of the tree, scanning the directory on first access.

        Returns:
            The root folder node.

        Raises:
            OSError: Only when error_action is RAISE and a listing or stat fails,
                including FileNotFoundError and NotADirectoryError for a bad root.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        root_str = os.fspath(self.root_path)

        ancestors: Set[FileIdentifier] = set()
        if self.follow_symlinks:
            root_id = FileIdentifier.of(root_str)
            if root_id is not None:
                ancestors.add(root_id)

        self._tree = self._create_folder(root_str, self._root_name(), ancestors)
        self._count_nodes()

    def _root_name(self) -> str:
        # "." and ".." have no useful base name, so use the resolved directory's
        name = self.root_path.resolve().name if self.root_path.name in ("", ".", "..") else self.root_path.name
        return name or os.fspath(self.root_path)

    def _create_folder(self, path: str, name: str, ancestors: Set[FileIdentifier]) -> FileSystemNode:
        """Create a folder node with its sorted children and aggregated tokens."""
        entries: List[Tuple[str, bool]] = []
        try:
            with os.scandir(path) as it:
                for entry in it:
                    entries.append((entry.name, self._entry_is_dir(entry)))
        except OSError as e:
            self._report("Error scanning directory %s: %s", path, e)

        children = []
        for entry_name, is_dir in entries:
            child = self._create_node(os.path.join(path, entry_name), entry_name, is_dir, ancestors)
            if child is not None:
                children.append(child)
        children.sort(key=sort_key)

        return FileSystemNode(
            name=name,
            node_type=NodeType.FOLDER,
            tokens=sum(child.tokens for child in children),
            expanded=True,
            children=tuple(children),
        )

    def _entry_is_dir(self, entry: "os.DirEntry[str]") -> bool:
        try:
            return entry.is_dir(follow_symlinks=self.follow_symlinks)
        except OSError:
            return False

    def _create_node(
        self, path: str, name: str, is_dir: bool, ancestors: Set[FileIdentifier]
    ) -> Optional[FileSystemNode]:
        """Create the node for one directory entry, or None if it is excluded."""
        rule_path = path.replace(os.sep, "/")

        if self._matches(self.exclusion_rules, rule_path, is_dir):
            logger.debug("Excluded %s", path)
            return None

        node_type = NodeType.FOLDER if is_dir else NodeType.FILE

        if self._matches(self.pending_rules, rule_path, is_dir):
            logger.debug("Pending %s", path)
            return FileSystemNode(name=name, node_type=node_type, expanded=False, is_pending=True)

        if not is_dir:
            return FileSystemNode(name=name, node_type=node_type, tokens=self._file_tokens(path))

        if not self.follow_symlinks:
            return self._create_folder(path, name, ancestors)

        folder_id = FileIdentifier.of(path)
        if folder_id is not None and folder_id in ancestors:
            logger.debug("Symlink loop detected at %s", path)
            return FileSystemNode(name=name, node_type=node_type)

        # Only directories on the current descent path count, so the same directory
        # reached through two unrelated links is walked twice
        if folder_id is not None:
            ancestors.add(folder_id)
        try:
            return self._create_folder(path, name, ancestors)
        finally:
            if folder_id is not None:
                ancestors.discard(folder_id)

    @staticmethod
    def _matches(rules: Optional[BasePathRules], rule_path: str, is_dir: bool) -> bool:
        if rules is None:
            return False
        if rules.matches(rule_path):
            return True
        # Directory patterns such as "dist/" only match paths with a trailing slash
        return is_dir and rules.matches(rule_path + "/")

    def _file_tokens(self, path: str) -> int:
        try:
            return file_tokens(path)
        except OSError as e:
            self._report("Error calculating tokens for %s: %s", path, e)
            return 0

    def _report(self, message: str, path: str, error: OSError) -> None:
        if self.error_action == ErrorAction.RAISE:
            raise error
        logger.warning(message, path, error)

    def _count_nodes(self) -> None:
        """Count files, directories (excluding the root) and pending placeholders."""
        self._file_count = 0
        self._directory_count = 0
        self._pending_count = 0
        if self._tree is None:
            return

        for _, node in self._tree.walk():
            if node.is_pending:
                self._pending_count += 1
            if node.is_dir:
                self._directory_count += 1
            else:
                self._file_count += 1
        self._directory_count -= 1  # the root

    def get_file_count(self) -> int:
        """Get the number of files in the tree, pending placeholders included."""
        self.get_tree()
        return self._file_count

    def get_directory_count(self) -> int:
        """Get the number of folders in the tree, excluding the root."""
        self.get_tree()
        return self._directory_count

    def get_pending_count(self) -> int:
        """Get the number of pending placeholders in the tree."""
        self.get_tree()
        return self._pending_count

    def get_token_count(self) -> int:
        """Get the estimated token count of the whole tree.

        Example:
            >>> tree = FileSystemTree("src")  # doctest: +SKIP
            >>> tree.get_token_count()  # doctest: +SKIP
            1520
        """
        return self.get_tree().tokens

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a tree representation of the scanned directory one line at a time.

        Yields:
            Lines of the tree representation. See ``stream_node_representation``.
        """
        yield from stream_node_representation(self.get_tree())

    def get_tree_representation(self) -> str:
        """Get a complete string representation of the scanned directory."""
        return "\n".join(self.stream_tree_representation())

    def refresh(self) -> None:
        """Rescan the directory to reflect current filesystem state."""
        self._tree = None
        self._build_tree()


def stream_node_representation(root: FileSystemNode) -> Iterator[str]:
    """Generate a Unix ``tree``-style representation of a node and its subtree.

    Folders are suffixed with ``/``, every entry shows its token count in parentheses,
    pending entries are suffixed with ``[pending]`` and unchecked entries are prefixed
    with ``[ ]``. The children of collapsed folders are not shown.

    Args:
        root: The node to render.

    Yields:
        One line per visible node, without trailing newlines.

    Example:
        >>> root = FileSystemNode(
        ...     name="app",
        ...     type="folder",
        ...     tokens=3,
        ...     children=[
        ...         FileSystemNode(
        ...             name="src", type="folder", tokens=2, children=[FileSystemNode(name="m.py", tokens=2)]
        ...         ),
        ...         FileSystemNode(name="node_modules", type="folder", expanded=False, isPending=True),
        ...         FileSystemNode(name="a.txt", tokens=1, checked=False),
        ...     ],
        ... )
        >>> for line in stream_node_representation(root):
        ...     print(line)
        app/ (3)
        ├── src/ (2)
        │   └── m.py (2)
        ├── node_modules/ (0) [pending]
        └── [ ] a.txt (1)
    """

    def label(node: FileSystemNode) -> str:
        mark = "" if node.checked else "[ ] "
        suffix = "/" if node.is_dir else ""
        pending = " [pending]" if node.is_pending else ""
        return f"{mark}{node.name}{suffix} ({node.tokens}){pending}"

    def write_children(node: FileSystemNode, prefix: str) -> Iterator[str]:
        if not node.expanded:
            return
        children = node.children or ()
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            connector = "└── " if is_last else "├── "
            yield f"{prefix}{connector}{label(child)}"
            yield from write_children(child, prefix + ("    " if is_last else "│   "))

    yield label(root)
    yield from write_children(root, "")
