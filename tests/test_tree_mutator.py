"""Unit tests for the tree mutator."""

import logging

import pytest

from tokentree.file_system_tree.file_system_node import FileSystemNode
from tokentree.tree_mutator import collect_checked_files, find_node, toggle_checked, toggle_expanded


@pytest.fixture
def tree():
    """app/
    ├── src/
    │   ├── lib/
    │   │   └── util.py
    │   └── main.py
    ├── node_modules/ (pending)
    └── README.md
    """
    return FileSystemNode(
        name="app",
        type="folder",
        tokens=30,
        children=[
            FileSystemNode(
                name="src",
                type="folder",
                tokens=25,
                children=[
                    FileSystemNode(
                        name="lib", type="folder", tokens=5, children=[FileSystemNode(name="util.py", tokens=5)]
                    ),
                    FileSystemNode(name="main.py", tokens=20),
                ],
            ),
            FileSystemNode(name="node_modules", type="folder", expanded=False, isPending=True),
            FileSystemNode(name="README.md", tokens=5),
        ],
    )


def states(root, attribute="checked"):
    return {"/".join(path): getattr(node, attribute) for path, node in root.walk()}


def test_find_node(tree):
    assert find_node(tree, ["app"]) is tree
    assert find_node(tree, ("app", "src", "lib", "util.py")).tokens == 5
    assert find_node(tree, ["app", "missing"]) is None
    assert find_node(tree, ["other"]) is None
    assert find_node(tree, []) is None


def test_toggle_file_flips_only_that_file(tree):
    new_tree = toggle_checked(tree, ["app", "src", "main.py"])

    before, after = states(tree), states(new_tree)
    assert after["app/src/main.py"] is False
    del before["app/src/main.py"], after["app/src/main.py"]
    assert before == after


def test_toggle_folder_cascades_to_all_descendants(tree):
    new_tree = toggle_checked(tree, ["app", "src"])

    after = states(new_tree)
    assert after["app/src"] is False
    assert after["app/src/lib"] is False
    assert after["app/src/lib/util.py"] is False
    assert after["app/src/main.py"] is False
    assert after["app"] is True
    assert after["app/README.md"] is True


def test_cascade_overrides_mixed_descendant_state(tree):
    partially = toggle_checked(tree, ["app", "src", "main.py"])
    unchecked = toggle_checked(partially, ["app", "src"])
    # src was still checked, so it and everything below becomes unchecked
    assert set(states(find_node(unchecked, ["app", "src"])).values()) == {False}

    rechecked = toggle_checked(unchecked, ["app", "src"])
    assert set(states(find_node(rechecked, ["app", "src"])).values()) == {True}


def test_toggle_root_cascades_to_whole_tree(tree):
    new_tree = toggle_checked(tree, ["app"])
    assert set(states(new_tree).values()) == {False}


def test_toggle_checked_twice_restores_tree(tree):
    assert toggle_checked(toggle_checked(tree, ["app", "src"]), ["app", "src"]) == tree


def test_toggle_checked_leaves_input_untouched(tree):
    snapshot = tree.model_copy(deep=True)
    toggle_checked(tree, ["app", "src"])
    assert tree == snapshot


def test_toggle_checked_preserves_other_fields(tree):
    new_tree = toggle_checked(tree, ["app", "src"])
    for path, node in new_tree.walk():
        original = find_node(tree, path)
        assert (node.name, node.tokens, node.node_type, node.expanded, node.is_pending) == (
            original.name,
            original.tokens,
            original.node_type,
            original.expanded,
            original.is_pending,
        )


def test_unchanged_subtrees_are_shared(tree):
    new_tree = toggle_checked(tree, ["app", "src", "main.py"])
    assert new_tree is not tree
    assert find_node(new_tree, ["app", "src", "lib"]) is find_node(tree, ["app", "src", "lib"])
    assert find_node(new_tree, ["app", "README.md"]) is find_node(tree, ["app", "README.md"])


def test_stale_path_is_a_no_op(tree, caplog):
    with caplog.at_level(logging.DEBUG, logger="tokentree.tree_mutator"):
        assert toggle_checked(tree, ["app", "src", "deleted.py"]) == tree
        assert toggle_expanded(tree, ["app", "gone"]) == tree
        assert toggle_checked(tree, ["other", "src"]) == tree
    assert "tree left unchanged" in caplog.text


def test_toggle_expanded_folder(tree):
    new_tree = toggle_expanded(tree, ["app", "src"])
    assert find_node(new_tree, ["app", "src"]).expanded is False
    assert find_node(new_tree, ["app", "src", "lib"]).expanded is True
    assert states(new_tree) == states(tree)

    restored = toggle_expanded(new_tree, ["app", "src"])
    assert restored == tree


def test_toggle_expanded_pending_folder(tree):
    new_tree = toggle_expanded(tree, ["app", "node_modules"])
    node_modules = find_node(new_tree, ["app", "node_modules"])
    assert node_modules.expanded is True
    assert node_modules.is_pending is True


def test_toggle_expanded_on_file_is_a_no_op(tree):
    new_tree = toggle_expanded(tree, ["app", "README.md"])
    assert new_tree == tree
    assert find_node(new_tree, ["app", "README.md"]).expanded is None


def test_toggle_expanded_does_not_touch_checked(tree):
    unchecked = toggle_checked(tree, ["app", "src"])
    collapsed = toggle_expanded(unchecked, ["app", "src"])
    assert states(collapsed) == states(unchecked)


def test_tuple_and_list_paths_are_equivalent(tree):
    assert toggle_checked(tree, ("app", "src")) == toggle_checked(tree, ["app", "src"])


def test_collect_checked_files(tree):
    assert list(collect_checked_files(tree)) == [
        ("app", "src", "lib", "util.py"),
        ("app", "src", "main.py"),
        ("app", "README.md"),
    ]
    narrowed = toggle_checked(tree, ["app", "src", "lib"])
    assert list(collect_checked_files(narrowed)) == [("app", "src", "main.py"), ("app", "README.md")]
