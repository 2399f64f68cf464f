"""Directory scanning into selectable, token-annotated trees.

This package walks a directory into a tree of file and folder nodes annotated with
an approximate token count, and provides pure operations for toggling the selection
and expansion state of nodes in that tree.
"""

from importlib.metadata import PackageNotFoundError, version

from tokentree.tokentree import FileData, create_file_data, scan
from tokentree.tree_mutator import toggle_checked, toggle_expanded

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("tokentree")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "FileData",
    "create_file_data",
    "scan",
    "toggle_checked",
    "toggle_expanded",
]
