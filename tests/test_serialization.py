"""Unit tests for tree serialization."""

import json

import pytest

from tokentree.exceptions import InvalidTreeDocumentError
from tokentree.file_system_tree.file_system_node import FileSystemNode
from tokentree.serialization import node_from_dict, node_to_dict, tree_from_json, tree_to_json
from tokentree.types import NodeType


@pytest.fixture
def tree():
    return FileSystemNode(
        name="app",
        type="folder",
        tokens=7,
        children=[
            FileSystemNode(name="node_modules", type="folder", expanded=False, isPending=True),
            FileSystemNode(name="src", type="folder", tokens=7, checked=False, children=[
                FileSystemNode(name="main.py", tokens=7, checked=False),
            ]),
            FileSystemNode(name="empty", type="folder"),
        ],
    )


def test_node_to_dict(tree):
    data = node_to_dict(tree)

    assert data["name"] == "app"
    assert data["type"] == "folder"
    assert data["expanded"] is True
    assert [c["name"] for c in data["children"]] == ["node_modules", "src", "empty"]

    pending = data["children"][0]
    assert pending == {
        "name": "node_modules",
        "tokens": 0,
        "type": "folder",
        "checked": True,
        "expanded": False,
        "children": [],
        "isPending": True,
    }


def test_files_have_no_expanded_or_children(tree):
    main = node_to_dict(tree)["children"][1]["children"][0]
    assert "expanded" not in main
    assert "children" not in main
    assert main["checked"] is False


def test_empty_folder_has_empty_children(tree):
    assert node_to_dict(tree)["children"][2]["children"] == []


def test_node_from_dict_restores_tree(tree):
    assert node_from_dict(node_to_dict(tree)) == tree


def test_node_from_dict_applies_defaults():
    node = node_from_dict(
        {"name": "app", "tokens": 1, "type": "folder", "children": [{"name": "a", "tokens": 1, "type": "file"}]}
    )
    assert node.checked is True
    assert node.expanded is True
    assert node.is_pending is False
    assert node.children[0].node_type is NodeType.FILE
    assert node.children[0].expanded is None


@pytest.mark.parametrize(
    "data",
    [
        {"tokens": 0, "type": "file"},
        {"name": "a", "tokens": "many", "type": "file"},
        {"name": "a", "tokens": -4, "type": "file"},
        {"name": "a", "tokens": 0, "type": "symlink"},
        {"name": "a", "tokens": 0, "type": "file", "children": [{"name": "b", "tokens": 0, "type": "file"}]},
        {"name": "a", "tokens": 0, "type": "folder", "children": ["b"]},
    ],
)
def test_node_from_dict_rejects_malformed_nodes(data):
    with pytest.raises(InvalidTreeDocumentError):
        node_from_dict(data)


def test_node_from_dict_rejects_non_objects():
    with pytest.raises(InvalidTreeDocumentError, match="expected an object, got list"):
        node_from_dict([])  # type: ignore[arg-type]


def test_tree_to_json(tree):
    assert json.loads(tree_to_json(tree)) == node_to_dict(tree)


def test_tree_to_json_indent(tree):
    text = tree_to_json(tree, indent=2)
    assert text.startswith('{\n  "name": "app"')


def test_tree_to_json_keeps_unicode():
    assert '"naïve.txt"' in tree_to_json(FileSystemNode(name="naïve.txt"))


def test_tree_from_json(tree):
    assert tree_from_json(tree_to_json(tree)) == tree


@pytest.mark.parametrize("text", ["not json", "[]", '{"name": "a", "type": "device"}'])
def test_tree_from_json_rejects_invalid_documents(text):
    with pytest.raises(InvalidTreeDocumentError):
        tree_from_json(text)
