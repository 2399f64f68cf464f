"""File system tree representation with exclusion and pending rules.

This module provides classes for scanning a directory into a tree of token-annotated
file and folder nodes, with support for omitting entries and for cutting the scan
off at pending entries.
"""

from .error_action import ErrorAction
from .file_system_node import FileSystemNode
from .file_system_tree import FileSystemTree

__all__ = ["ErrorAction", "FileSystemNode", "FileSystemTree"]
