from enum import Enum
from os import PathLike
from typing import Sequence, Tuple, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

# Address of a node in a tree: its name followed by the names of its descendants
NodePath = Union[Sequence[str], Tuple[str, ...]]


class NodeType(str, Enum):
    """Enumeration of node kinds in a scanned tree.

    The values double as the ``type`` field of the serialized document.

    Attributes:
        FILE: A regular file (or a symbolic link that is not followed).
        FOLDER: A directory.
    """

    FILE = "file"
    FOLDER = "folder"
