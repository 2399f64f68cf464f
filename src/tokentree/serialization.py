"""Conversion of trees to and from their JSON document shape.

Each node is represented as an object with the following structure:
{
    "name": "src",
    "tokens": 1520,
    "type": "folder",          # or "file"
    "checked": true,
    "expanded": true,          # folders only
    "children": [...],         # folders only, possibly empty
    "isPending": false
}
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from tokentree.exceptions import InvalidTreeDocumentError
from tokentree.file_system_tree.file_system_node import FileSystemNode


def node_to_dict(node: FileSystemNode) -> Dict[str, Any]:
    """Convert a node and its subtree to plain dictionaries.

    Example:
        >>> leaf = FileSystemNode(name="a.txt", tokens=1)
        >>> root = FileSystemNode(name="app", type="folder", tokens=1, children=[leaf])
        >>> node_to_dict(root)["children"]
        [{'name': 'a.txt', 'tokens': 1, 'type': 'file', 'checked': True, 'isPending': False}]
    """
    return node.model_dump(mode="json", by_alias=True, exclude_none=True)


def node_from_dict(data: Mapping[str, Any]) -> FileSystemNode:
    """Rebuild a node and its subtree from the document shape.

    Args:
        data: A node object as produced by ``node_to_dict``. ``checked`` defaults to
            true, ``expanded`` to true for folders and ``isPending`` to false.

    Returns:
        The rebuilt node.

    Raises:
        InvalidTreeDocumentError: If a required field is missing or has the wrong type.

    Example:
        >>> node_from_dict({"name": "app", "tokens": 0, "type": "folder"}).expanded
        True
        >>> node_from_dict({"name": "app", "type": "link"})  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        tokentree.exceptions.InvalidTreeDocumentError: Invalid tree document: ...
    """
    if not isinstance(data, Mapping):
        raise InvalidTreeDocumentError(f"expected an object, got {type(data).__name__}")
    try:
        return FileSystemNode.model_validate(dict(data))
    except ValidationError as e:
        raise InvalidTreeDocumentError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "node"
    return f"{location}: {first['msg']}"


def tree_from_json(text: str) -> FileSystemNode:
    """Parse a node and its subtree from a JSON string.

    Raises:
        InvalidTreeDocumentError: If the text is not valid JSON or not a valid node.
    """
    try:
        return FileSystemNode.model_validate_json(text)
    except ValidationError as e:
        raise InvalidTreeDocumentError(_describe(e)) from e


def tree_to_json(node: FileSystemNode, indent: Optional[int] = None) -> str:
    """Serialize a node and its subtree to a JSON string.

    Example:
        >>> tree_to_json(FileSystemNode(name="notes.md", tokens=3))
        '{"name":"notes.md","tokens":3,"type":"file","checked":true,"isPending":false}'
    """
    return node.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
