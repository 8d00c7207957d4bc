"""Tree construction from flat path lists."""

import itertools

from app.packages.catalog.core.enums import NodeTypeEnum
from app.packages.catalog.utils.tree_builder import (
    PathInfo,
    build_tree_from_paths,
    collect_path_values,
    format_name,
    node_matches,
    stringify_value,
)


def _sequential_ids():
    counter = itertools.count(1)
    return lambda: f"n{next(counter)}"


def _shape(nodes):
    return [(node.path, node.type, _shape(node.children or [])) for node in nodes]


def test_format_name_splits_camel_case_and_underscores():
    assert format_name("emailValidFlag") == "Email Valid Flag"
    assert format_name("phsp_direct_individual") == "Phsp Direct Individual"
    assert format_name("firstName") == "First Name"
    assert format_name("type2eLinkedStatus") == "Type2e Linked Status"


def test_builds_folders_files_and_flat_index():
    snapshot = build_tree_from_paths(
        [PathInfo("a/d", value=2), PathInfo("a/b/c", value=1)],
        id_factory=_sequential_ids(),
    )

    assert len(snapshot.tree) == 1
    root = snapshot.tree[0]
    assert root.name == "A"
    assert root.type == NodeTypeEnum.FOLDER
    assert root.level == 0
    assert [child.path for child in root.children] == ["a/b", "a/d"]

    leaf = root.children[0].children[0]
    assert leaf.path == "a/b/c"
    assert leaf.type == NodeTypeEnum.FILE
    assert leaf.value == 1
    assert leaf.level == 2
    assert leaf.children is None
    assert leaf.parent_id == root.children[0].id

    flat_paths = [entry.node.path for entry in snapshot.flat_nodes.values()]
    assert flat_paths == ["a", "a/b", "a/b/c", "a/d"]
    assert snapshot.flat_nodes[root.id].children_ids == [child.id for child in root.children]
    assert snapshot.flat_nodes[root.id].node is root


def test_first_duplicate_wins():
    snapshot = build_tree_from_paths([PathInfo("x", value="first"), PathInfo("x", value="second")])
    assert len(snapshot) == 1
    assert snapshot.tree[0].value == "first"


def test_leaf_gaining_a_child_becomes_a_folder_and_keeps_its_value():
    snapshot = build_tree_from_paths([PathInfo("a", value=5), PathInfo("a/b", value=6)])
    root = snapshot.tree[0]
    assert root.type == NodeTypeEnum.FOLDER
    assert root.value == 5
    assert [child.path for child in root.children] == ["a/b"]


def test_metadata_applies_to_terminal_node_only():
    snapshot = build_tree_from_paths(
        [PathInfo("a/b", value="v", metadata={"description": "leaf", "owner_team": "data"})]
    )
    folder = snapshot.tree[0]
    leaf = folder.children[0]
    assert folder.description is None
    assert leaf.description == "leaf"
    assert leaf.extra == {"owner_team": "data"}


def test_rebuilding_identical_input_gives_identical_shape():
    paths = [PathInfo("u/e/addr"), PathInfo("u/i/first"), PathInfo("m/score")]
    first = build_tree_from_paths(paths)
    second = build_tree_from_paths(list(reversed(paths)))
    assert _shape(first.tree) == _shape(second.tree)


def test_collect_path_values_keeps_non_mapping_values_as_leaves():
    paths = collect_path_values({"a": {"b": [1, 2]}, "c": None, "d": {"e": True}})
    by_path = {info.path: info for info in paths}

    assert set(by_path) == {"a/b", "c", "d/e"}
    assert by_path["a/b"].value == [1, 2]
    assert by_path["a/b"].metadata == {"data_type": "array"}
    assert by_path["c"].metadata == {"data_type": "null"}
    assert by_path["d/e"].metadata == {"data_type": "boolean"}


def test_stringify_and_match():
    assert stringify_value(None) == "null"
    assert stringify_value(False) == "false"
    assert stringify_value(["a", 1]) == "a,1"

    snapshot = build_tree_from_paths(
        [PathInfo("user/email", value="John@Example.com", metadata={"category": "Communication"})]
    )
    leaf = snapshot.tree[0].children[0]
    folder = snapshot.tree[0]
    assert node_matches(leaf, "example.com")
    assert node_matches(leaf, "communication")
    assert node_matches(folder, "user")
    assert not node_matches(folder, "example")


def test_siblings_sort_case_insensitively():
    snapshot = build_tree_from_paths([PathInfo("Zeta"), PathInfo("alpha"), PathInfo("Beta")])
    assert [node.path for node in snapshot.tree] == ["alpha", "Beta", "Zeta"]


def test_promoted_folder_still_matches_on_its_value():
    snapshot = build_tree_from_paths([PathInfo("a", value="needle"), PathInfo("a/b", value=1)])
    root = snapshot.tree[0]
    assert root.type == NodeTypeEnum.FOLDER
    assert node_matches(root, "needle")
    assert not node_matches(root.children[0], "needle")
