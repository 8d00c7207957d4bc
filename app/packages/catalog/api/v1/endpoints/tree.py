"""Attribute browser tree routes: lookups, search and node state toggles."""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query

from app.packages.catalog.api.v1.schemas.tree import (
    FlatNodeListResponse,
    TreeNodeListResponse,
    TreeNodeResponse,
    TreeRebuildRequest,
    TreeRebuildResponse,
    TreeResponse,
)
from app.packages.catalog.core.constants import HTTP_STATUS_NOT_FOUND
from app.packages.catalog.core.dependencies import get_workspace
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.services.workspace import CatalogWorkspace
from app.packages.catalog.utils.tree_builder import TreeNode

router = APIRouter(prefix="/tree", tags=["tree"])


def _node_or_404(node: Optional[TreeNode]) -> TreeNode:
    if node is None:
        raise AppException("Tree node not found", HTTP_STATUS_NOT_FOUND)
    return node


@router.get("", response_model=TreeResponse)
def get_tree(workspace: CatalogWorkspace = Depends(get_workspace)) -> TreeResponse:
    return create_response("Tree fetched", [node.as_dict() for node in workspace.tree_service.get_tree()])


@router.post("/rebuild", response_model=TreeRebuildResponse)
def rebuild_tree(
    payload: TreeRebuildRequest,
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> TreeRebuildResponse:
    """Replace the tree; selection and expansion state is not carried over."""
    roots = workspace.rebuild_tree(payload.source)
    payload_data = {
        "source": workspace.tree_source,
        "root_count": len(roots),
        "node_count": len(workspace.tree_service.get_flat_nodes()),
    }
    return create_response("Tree rebuilt", payload_data)


@router.get("/nodes", response_model=FlatNodeListResponse)
def list_flat_nodes(workspace: CatalogWorkspace = Depends(get_workspace)) -> FlatNodeListResponse:
    """Depth-first flat index; each entry carries its direct children ids only."""
    entries = [
        {"node": entry.node.as_dict(include_children=False), "children_ids": list(entry.children_ids)}
        for entry in workspace.tree_service.get_flat_nodes().values()
    ]
    return create_response("Tree nodes fetched", entries)


@router.get("/lookup", response_model=TreeNodeResponse)
def lookup_node(
    path: str = Query(..., min_length=1, description="Slash-joined node path"),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> TreeNodeResponse:
    node = _node_or_404(workspace.tree_service.get_node_by_path(path))
    return create_response("Tree node fetched", node.as_dict())


@router.get("/search", response_model=TreeNodeListResponse)
def search_tree(
    q: str = Query("", description="Case-insensitive text; blank returns nothing"),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> TreeNodeListResponse:
    matches = workspace.tree_service.search_tree(q)
    return create_response("Tree searched", [node.as_dict(include_children=False) for node in matches])


@router.get("/nodes/{node_id}", response_model=TreeNodeResponse)
def get_node(node_id: str, workspace: CatalogWorkspace = Depends(get_workspace)) -> TreeNodeResponse:
    node = _node_or_404(workspace.tree_service.get_node_by_id(node_id))
    return create_response("Tree node fetched", node.as_dict())


@router.get("/nodes/{node_id}/children", response_model=TreeNodeListResponse)
def get_node_children(node_id: str, workspace: CatalogWorkspace = Depends(get_workspace)) -> TreeNodeListResponse:
    service = workspace.tree_service
    _node_or_404(service.get_node_by_id(node_id))
    children = service.get_node_children(node_id)
    return create_response("Tree node children fetched", [child.as_dict(include_children=False) for child in children])


@router.get("/nodes/{node_id}/ancestry", response_model=TreeNodeListResponse)
def get_node_ancestry(node_id: str, workspace: CatalogWorkspace = Depends(get_workspace)) -> TreeNodeListResponse:
    """Root-to-node chain, useful for breadcrumbs."""
    chain = workspace.tree_service.get_node_ancestry(node_id)
    if not chain:
        raise AppException("Tree node not found", HTTP_STATUS_NOT_FOUND)
    return create_response("Tree node ancestry fetched", [node.as_dict(include_children=False) for node in chain])


def _toggle(action: Callable[[str], Optional[TreeNode]], node_id: str, msg: str) -> dict:
    node = _node_or_404(action(node_id))
    return create_response(msg, node.as_dict(include_children=False))


@router.post("/nodes/{node_id}/select", response_model=TreeNodeResponse)
def select_node(node_id: str, workspace: CatalogWorkspace = Depends(get_workspace)) -> TreeNodeResponse:
    return _toggle(workspace.tree_service.select_node, node_id, "Tree node selected")


@router.post("/nodes/{node_id}/expand", response_model=TreeNodeResponse)
def expand_node(node_id: str, workspace: CatalogWorkspace = Depends(get_workspace)) -> TreeNodeResponse:
    return _toggle(workspace.tree_service.expand_node, node_id, "Tree node expanded")


@router.post("/nodes/{node_id}/collapse", response_model=TreeNodeResponse)
def collapse_node(node_id: str, workspace: CatalogWorkspace = Depends(get_workspace)) -> TreeNodeResponse:
    return _toggle(workspace.tree_service.collapse_node, node_id, "Tree node collapsed")
