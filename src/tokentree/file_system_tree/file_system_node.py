"""Node representation for file system elements in the tree."""

from typing import Any, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tokentree.types import NodeType


class FileSystemNode(BaseModel):
    """Immutable node representing a file or folder in a scanned tree.

    Nodes are frozen pydantic models: they compare by value, and changing a node
    means building a new one (``model_copy(update=...)``), which lets a new tree
    share every unchanged subtree with the tree it was derived from.

    Field aliases give the JSON document shape, so ``model_dump(by_alias=True)``
    yields ``{name, tokens, type, checked, expanded?, children?, isPending}``.

    Attributes:
        name (str): The base name of the file or folder.
        tokens (int): Approximate token count; for folders, the sum over children.
        node_type (NodeType): Whether this node is a file or a folder (alias ``type``).
        checked (bool): Selection state.
        expanded (Optional[bool]): Expansion state for folders, None for files.
        children (Optional[Tuple[FileSystemNode, ...]]): Children of a folder, None for files.
        is_pending (bool): True if the entry was cut off by a pending rule (alias ``isPending``).

    Example:
        >>> readme = FileSystemNode(name="README.md", tokens=12)
        >>> root = FileSystemNode(name="project", node_type=NodeType.FOLDER, tokens=12, children=(readme,))
        >>> root.is_dir, root.expanded
        (True, True)
        >>> readme.is_dir, readme.expanded, readme.children
        (False, None, None)
        >>> root == FileSystemNode(name="project", type="folder", tokens=12, children=[readme])
        True
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    tokens: int = Field(default=0, ge=0)
    node_type: NodeType = Field(default=NodeType.FILE, alias="type")
    checked: bool = True
    expanded: Optional[bool] = None
    children: Optional[Tuple["FileSystemNode", ...]] = None
    is_pending: bool = Field(default=False, alias="isPending")

    @model_validator(mode="before")
    @classmethod
    def _apply_kind_defaults(cls, data: Any) -> Any:
        """Folders default to expanded with no children; files never carry either."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        node_type = NodeType(data.get("node_type", data.get("type", NodeType.FILE)))
        if node_type is NodeType.FOLDER:
            if data.get("expanded") is None:
                data["expanded"] = True
            if data.get("children") is None:
                data["children"] = ()
        else:
            if data.get("children"):
                raise ValueError(f"file '{data.get('name')}' cannot have children")
            data["expanded"] = None
            data["children"] = None
        return data

    @property
    def is_dir(self) -> bool:
        return self.node_type is NodeType.FOLDER

    def iter_children(self) -> Iterator["FileSystemNode"]:
        return iter(self.children or ())

    def walk(self, prefix: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], "FileSystemNode"]]:
        """Iterate over this node and its descendants in pre-order.

        Args:
            prefix: Name path of this node's parent. Defaults to the empty path.

        Yields:
            Pairs of (name path, node), where the name path starts at this node
            (or at the given prefix).

        Example:
            >>> leaf = FileSystemNode(name="a.txt")
            >>> root = FileSystemNode(name="app", type="folder", children=[leaf])
            >>> [path for path, _ in root.walk()]
            [('app',), ('app', 'a.txt')]
        """
        path = prefix + (self.name,)
        yield path, self
        for child in self.iter_children():
            yield from child.walk(path)
