"""Leaf path extraction over nested documents."""

from app.packages.catalog.utils.path_extractor import (
    extract_path_strings,
    extract_paths,
    get_value_at_path,
    has_path,
)


def _count_terminals(value) -> int:
    if isinstance(value, dict):
        return sum(_count_terminals(child) for child in value.values())
    if isinstance(value, list):
        return sum(_count_terminals(item) for item in value)
    return 1


def test_scalars_and_none_are_leaves():
    paths = list(extract_paths({"a": {"b": 1, "c": None}}))
    assert paths == [["a", "b"], ["a", "c"]]


def test_array_elements_share_the_parent_path():
    document = {"actions": [{"rank": 1}, {"rank": 2}], "tags": ["x", "y", "z"]}
    paths = list(extract_path_strings(document))
    assert paths == ["actions/rank", "actions/rank", "tags", "tags", "tags"]


def test_empty_containers_only_reported_when_not_leaf_only():
    document = {"a": {}, "b": [], "c": 0}
    assert list(extract_path_strings(document)) == ["c"]
    assert list(extract_path_strings(document, leaf_only=False)) == ["a", "b", "c"]


def test_top_level_scalar_yields_the_empty_path():
    assert list(extract_paths(5)) == [[]]


def test_leaf_count_matches_terminal_positions(workspace):
    raw = workspace.raw_user_data
    assert len(list(extract_paths(raw))) == _count_terminals(raw)


def test_value_lookup_and_existence():
    document = {"person": {"name": {"firstname": "John", "middle": None}}}
    assert get_value_at_path(document, "person/name/firstname") == "John"
    assert get_value_at_path(document, ["person", "name"]) == {"firstname": "John", "middle": None}
    assert get_value_at_path(document, "person/age") is None
    assert get_value_at_path(document, "person/name/firstname/extra") is None

    assert has_path(document, "person/name/middle") is True
    assert has_path(document, "person/name/last") is False
