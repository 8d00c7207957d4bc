"""Tree service over the seed transformed document."""

import pytest

from app.packages.catalog.core.enums import NodeTypeEnum, TreeEventKind, TreeSourceEnum
from app.packages.catalog.services.tree_service import TreeService
from app.packages.catalog.utils.node_metadata import infer_node_metadata
from app.packages.catalog.utils.path_mapper import PathLevels
from app.packages.catalog.utils.tree_builder import PathInfo


def test_leaf_nodes_carry_values_and_metadata(workspace):
    node = workspace.tree_service.get_node_by_path("userDetails/identity/firstName")
    assert node.type == NodeTypeEnum.FILE
    assert node.name == "First Name"
    assert node.value == "John"
    assert node.data_type == "string"
    assert node.xdm_path == "person/name/firstname"
    assert node.category == "User Information"
    assert node.importance == "high"


def test_lookup_by_segments_children_and_ancestry(workspace):
    service = workspace.tree_service
    identity = service.get_node_by_path(["userDetails", "identity"])
    assert identity.type == NodeTypeEnum.FOLDER

    children = service.get_node_children(identity.id)
    assert [child.path for child in children] == [child.path for child in identity.children]
    assert "userDetails/identity/lastName" in {child.path for child in children}

    chain = service.get_node_ancestry(children[0].id)
    assert [node.path for node in chain] == ["userDetails", "userDetails/identity", children[0].path]

    assert service.get_node_by_id("missing") is None
    assert service.get_node_children("missing") == []
    assert service.get_node_ancestry("missing") == []


def test_search_is_case_insensitive_and_blank_returns_nothing(workspace):
    service = workspace.tree_service
    paths = {node.path for node in service.search_tree("JOHN")}
    assert "userDetails/identity/firstName" in paths
    assert "userDetails/email/address" in paths
    assert service.search_tree("   ") == []

    flat_order = [entry.node.path for entry in service.get_flat_nodes().values()]
    result_order = [node.path for node in service.search_tree("email")]
    assert result_order == [path for path in flat_order if path in set(result_order)]


def test_select_expand_collapse_are_independent_flags(workspace):
    service = workspace.tree_service
    events = []
    for kind in (TreeEventKind.NODE_SELECTED, TreeEventKind.NODE_EXPANDED, TreeEventKind.NODE_COLLAPSED):
        service.subscribe(kind, lambda node, kind=kind: events.append((kind, node.path)))

    first = service.get_node_by_path("userDetails/identity/firstName")
    last = service.get_node_by_path("userDetails/identity/lastName")
    folder = service.get_node_by_path("userDetails/identity")

    service.select_node(first.id)
    service.select_node(last.id)
    assert first.is_selected and last.is_selected

    service.expand_node(folder.id)
    assert folder.is_expanded
    assert not service.get_node_by_path("userDetails").is_expanded
    service.collapse_node(folder.id)
    assert not folder.is_expanded

    assert service.select_node("missing") is None
    assert events == [
        (TreeEventKind.NODE_SELECTED, first.path),
        (TreeEventKind.NODE_SELECTED, last.path),
        (TreeEventKind.NODE_EXPANDED, folder.path),
        (TreeEventKind.NODE_COLLAPSED, folder.path),
    ]


def test_rebuild_from_mapped_raw_data_replaces_the_tree(workspace):
    updates = []
    workspace.tree_service.subscribe(TreeEventKind.TREE_UPDATED, updates.append)
    old = workspace.tree_service.get_node_by_path("userDetails/identity/firstName")

    workspace.rebuild_tree(TreeSourceEnum.MAPPED)

    assert len(updates) == 1
    assert workspace.tree_source == TreeSourceEnum.MAPPED
    assert workspace.tree_service.get_node_by_id(old.id) is None
    score = workspace.tree_service.get_node_by_path("modelsAndScores/overallScore/modelRawScore")
    assert score.value == 80
    assert workspace.tree_service.get_node_by_path("emailMarketingPermission") is None


def test_mapping_edits_rebuild_the_tree(workspace):
    workspace.rebuild_tree(TreeSourceEnum.MAPPED)
    levels = PathLevels(level1="userDetails", level2="profile", level3="givenName")
    workspace.mapping_service.update_mapping("1", levels)

    node = workspace.tree_service.get_node_by_path("userDetails/profile/givenName")
    assert node.value == "John"
    assert node.xdm_path == "person/name/firstname"
    assert workspace.tree_service.get_node_by_path("userDetails/identity/firstName") is None


def test_initialize_failure_emits_error_and_reraises():
    def broken(info: PathInfo):
        raise ValueError(f"cannot describe {info.path}")

    service = TreeService(metadata_provider=broken)
    errors = []
    service.subscribe(TreeEventKind.ERROR, errors.append)

    with pytest.raises(ValueError):
        service.initialize_from_data({"a": 1})
    assert errors == ["cannot describe a"]
    assert service.get_tree() == []


def test_infer_node_metadata_for_leaf_and_section():
    leaf = infer_node_metadata("userDetails/email/emailValidFlag", True, xdm_lookup=lambda _: "adobeCorpnew/emailValidFlag")
    assert leaf["description"] == "Email Valid Flag field indicating yes/no state"
    assert leaf["data_type"] == "boolean"
    assert leaf["data_owner"] == "User Management Team"
    assert leaf["xdm_path"] == "adobeCorpnew/emailValidFlag"

    section = infer_node_metadata("teamEntitlements/contractInfo", None, is_leaf=False)
    assert section["description"] == "Team-level entitlements and contract information"
    assert section["latency"] == "N/A"
    assert "data_type" not in section
    assert "xdm_path" not in section


def test_search_finds_values_on_promoted_folders():
    service = TreeService()
    service.build_tree_from_paths([PathInfo("a", value="needle"), PathInfo("a/b", value=1)])
    assert [node.path for node in service.search_tree("NEEDLE")] == ["a"]
