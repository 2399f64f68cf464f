"""Pure operations that toggle the selection and expansion state of tree nodes.

Nodes are addressed by their name path: the root's name followed by the names of the
folders leading to the target and the target's own name. Every operation returns a
new tree and leaves its argument untouched, so earlier snapshots of a tree stay valid
for comparison or undo. Subtrees off the path to the target are shared between the
old and the new tree.

A path that does not address any node (for example one captured before a rescan
removed the entry) is not an error: the operation returns the tree it was given.
"""

import logging
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Tuple

from tokentree.file_system_tree.file_system_node import FileSystemNode
from tokentree.types import NodePath

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"

_Transform = Callable[[FileSystemNode], FileSystemNode]


def find_node(tree: FileSystemNode, target_path: NodePath) -> Optional[FileSystemNode]:
    """Find the node addressed by a name path.

    Args:
        tree: Root of the tree to search.
        target_path: Names from the root to the target, root name included.

    Returns:
        The addressed node, or None if no node has that path.

    Example:
        >>> main = FileSystemNode(name="main.py", tokens=3)
        >>> root = FileSystemNode(name="app", type="folder", children=[
        ...     FileSystemNode(name="src", type="folder", children=[main])])
        >>> find_node(root, ["app", "src", "main.py"]) is main
        True
        >>> find_node(root, ["app", "lib"]) is None
        True
    """
    names = list(target_path)
    if not names or names[0] != tree.name:
        return None
    node: Optional[FileSystemNode] = tree
    for name in names[1:]:
        node = next((child for child in node.iter_children() if child.name == name), None)
        if node is None:
            return None
    return node


def toggle_checked(tree: FileSystemNode, target_path: NodePath) -> FileSystemNode:
    """Return a tree with one node's ``checked`` flag flipped.

    When the target is a folder, every node below it takes the target's new value,
    whatever its previous state. Nodes outside the target's subtree keep their state.

    Args:
        tree: Root of the tree.
        target_path: Names from the root to the target, root name included.

    Returns:
        The root of the new tree.

    Example:
        >>> root = FileSystemNode(name="app", type="folder", children=[
        ...     FileSystemNode(name="src", type="folder", children=[FileSystemNode(name="main.py")])])
        >>> new_root = toggle_checked(root, ["app", "src"])
        >>> [(path[-1], node.checked) for path, node in new_root.walk()]
        [('app', True), ('src', False), ('main.py', False)]
        >>> [(path[-1], node.checked) for path, node in root.walk()]
        [('app', True), ('src', True), ('main.py', True)]
    """
    return _replace(tree, target_path, lambda node: _set_checked(node, not node.checked))


def toggle_expanded(tree: FileSystemNode, target_path: NodePath) -> FileSystemNode:
    """Return a tree with one folder's ``expanded`` flag flipped.

    A file target leaves the tree unchanged. Descendants are never affected.

    Args:
        tree: Root of the tree.
        target_path: Names from the root to the target, root name included.

    Returns:
        The root of the new tree.

    Example:
        >>> root = FileSystemNode(name="app", type="folder")
        >>> toggle_expanded(root, ["app"]).expanded
        False
    """

    def flip(node: FileSystemNode) -> FileSystemNode:
        if not node.is_dir:
            return node
        return node.model_copy(update={"expanded": not node.expanded})

    return _replace(tree, target_path, flip)


def _set_checked(node: FileSystemNode, checked: bool) -> FileSystemNode:
    """Copy a node with ``checked`` set on it and on its whole subtree."""
    update: Dict[str, Any] = {"checked": checked}
    if node.children:
        update["children"] = tuple(_set_checked(child, checked) for child in node.children)
    return node.model_copy(update=update)


def _replace(tree: FileSystemNode, target_path: NodePath, transform: _Transform) -> FileSystemNode:
    names = list(target_path)
    if not names or names[0] != tree.name:
        logger.debug("No node at %s; tree left unchanged", PATH_SEPARATOR.join(names))
        return tree

    def descend(node: FileSystemNode, rest: Sequence[str]) -> FileSystemNode:
        if not rest:
            return transform(node)
        children = node.children or ()
        for i, child in enumerate(children):
            if child.name == rest[0]:
                new_child = descend(child, rest[1:])
                if new_child is child:
                    return node
                return node.model_copy(update={"children": children[:i] + (new_child,) + children[i + 1 :]})
        logger.debug("No node at %s; tree left unchanged", PATH_SEPARATOR.join(names))
        return node

    return descend(tree, names[1:])


def collect_checked_files(tree: FileSystemNode) -> Iterator[Tuple[str, ...]]:
    """Yield the name paths of checked files that were actually scanned.

    Pending placeholders are skipped since their content was never read.

    Example:
        >>> root = FileSystemNode(name="app", type="folder", children=[
        ...     FileSystemNode(name="a.py"),
        ...     FileSystemNode(name="b.py", checked=False),
        ...     FileSystemNode(name="vendor.js", isPending=True),
        ... ])
        >>> list(collect_checked_files(root))
        [('app', 'a.py')]
    """
    for path, node in tree.walk():
        if not node.is_dir and node.checked and not node.is_pending:
            yield path
