"""Mapping table lookups, prefix resolution and level splitting."""

from app.packages.catalog.utils.path_mapper import (
    MappingTable,
    PathLevels,
    join_levels,
    split_into_levels,
)


def _table(*rows):
    records = []
    for index, (raw_path, transformed_path) in enumerate(rows, start=1):
        levels = split_into_levels(transformed_path).as_dict() if transformed_path else {}
        records.append({"id": str(index), "raw_path": raw_path, "levels": levels})
    return MappingTable.from_records(records)


def test_split_into_levels_keeps_segments_verbatim():
    levels = split_into_levels("userDetails/identity/firstName")
    assert levels.as_tuple() == ("userDetails", "identity", "firstName", "", "")


def test_split_into_levels_rejoins_the_tail_into_level5():
    levels = split_into_levels("a/b/c/d/e/f")
    assert levels.level4 == "d"
    assert levels.level5 == "e/f"


def test_join_levels_skips_empty_levels():
    assert join_levels(PathLevels(level1="a", level3="c")) == "a/c"
    assert join_levels(PathLevels()) == ""


def test_from_records_derives_transformed_path_from_levels():
    table = MappingTable.from_records(
        [
            {
                "id": 7,
                "raw_path": "x/y",
                "transformed_path": "stale/value",
                "levels": {"level1": " fresh ", "level2": "path", "level3": None},
            }
        ]
    )
    mapping = table.find_by_id("7")
    assert mapping.transformed_path == "fresh/path"
    assert mapping.levels.level3 == ""


def test_resolve_prefers_exact_then_longest_prefix():
    table = _table(("a/b", "one"), ("a/b/c", "two/three"), ("p/q", "exact/target"))

    assert table.resolve("p/q") == "exact/target"
    assert table.resolve("a/b/c/d") == "two/three/d"
    assert table.resolve("a/b/x") == "one/x"


def test_resolve_matches_string_prefixes_and_falls_back_to_identity():
    table = _table(("a/b", "one"))
    assert table.resolve("a/bc") == "one/c"
    assert table.resolve("a/b/c") == "one/c"
    assert table.resolve("unmapped/path") == "unmapped/path"


def test_resolve_prefix_with_empty_target_returns_remainder():
    table = _table(("a/b", ""))
    assert table.resolve("a/b/c/d") == "c/d"


def test_seed_table_resolves_every_raw_path_to_its_stored_target(workspace):
    table = workspace.mapping_service.snapshot()
    assert len(table) == 31
    for mapping in table:
        assert table.resolve(mapping.raw_path) == mapping.transformed_path
    assert table.resolve("person/name/firstname") == "userDetails/identity/firstName"


def test_transitions_return_new_snapshots():
    table = _table(("a", "x"), ("b", "y"), ("c", "z"))

    updated_table, updated = table.with_updated_levels("2", PathLevels(level1="new", level2="home"))
    assert updated.transformed_path == "new/home"
    assert table.find_by_id("2").transformed_path == "y"
    assert updated_table.find_by_id("2").transformed_path == "new/home"

    missing_table, missing = table.with_updated_levels("99", PathLevels(level1="n"))
    assert missing is None
    assert missing_table is table


def test_next_id_does_not_reuse_ids_after_removal():
    table = _table(("a", "x"), ("b", "y"), ("c", "z"))
    trimmed, removed = table.with_removed_mapping("2")
    assert removed.raw_path == "b"
    assert len(trimmed) == 2

    grown, created = trimmed.with_added_mapping("d", PathLevels(level1="w"))
    assert created.id == "4"
    assert created.transformed_path == "w"
    assert len(grown) == 3
