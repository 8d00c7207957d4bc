"""Tree service: holds the current tree snapshot and answers lookups, search and UI state toggles."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from app.packages.catalog.core.constants import PATH_SEPARATOR
from app.packages.catalog.core.enums import TreeEventKind
from app.packages.catalog.utils.events import EventBus
from app.packages.catalog.utils.tree_builder import (
    FlatTreeNode,
    PathInfo,
    TreeNode,
    TreeSnapshot,
    build_tree_from_paths,
    collect_path_values,
    node_matches,
)

logger = logging.getLogger(__name__)

MetadataProvider = Callable[[PathInfo], Dict[str, Any]]


class TreeService:
    """Caller-owned tree state.

    Selection and expansion are independent per-node flags: selecting a node
    does not clear other selections and expanding a node leaves its ancestors
    untouched.
    """

    def __init__(self, metadata_provider: Optional[MetadataProvider] = None) -> None:
        self._snapshot = TreeSnapshot()
        self._metadata_provider = metadata_provider
        self.events: EventBus[TreeEventKind] = EventBus()

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    def build_tree_from_paths(self, paths: Iterable[PathInfo]) -> List[TreeNode]:
        """Replace the current tree with one built from ``paths``."""
        self._snapshot = build_tree_from_paths(paths)
        logger.info("Tree rebuilt: %d roots, %d nodes", len(self._snapshot.tree), len(self._snapshot))
        self.events.emit(TreeEventKind.TREE_UPDATED, self._snapshot)
        return self._snapshot.tree

    def initialize_from_data(self, data: Dict[str, Any]) -> List[TreeNode]:
        try:
            paths = collect_path_values(data)
            if self._metadata_provider is not None:
                for info in paths:
                    info.metadata = {**(info.metadata or {}), **self._metadata_provider(info)}
            return self.build_tree_from_paths(paths)
        except (TypeError, ValueError, AttributeError) as exc:
            logger.exception("Failed to initialize tree from data")
            self.events.emit(TreeEventKind.ERROR, str(exc))
            raise

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def get_tree(self) -> List[TreeNode]:
        return self._snapshot.tree

    def get_flat_nodes(self) -> Dict[str, FlatTreeNode]:
        return self._snapshot.flat_nodes

    def get_flat_node(self, node_id: str) -> Optional[FlatTreeNode]:
        return self._snapshot.flat_nodes.get(node_id)

    def get_node_by_id(self, node_id: str) -> Optional[TreeNode]:
        entry = self._snapshot.flat_nodes.get(node_id)
        return entry.node if entry else None

    def get_node_by_path(self, path: str | Sequence[str]) -> Optional[TreeNode]:
        target = path if isinstance(path, str) else PATH_SEPARATOR.join(path)
        for entry in self._snapshot.flat_nodes.values():
            if entry.node.path == target:
                return entry.node
        return None

    def get_node_children(self, node_id: str) -> List[TreeNode]:
        entry = self._snapshot.flat_nodes.get(node_id)
        if entry is None:
            return []
        flat = self._snapshot.flat_nodes
        return [flat[child_id].node for child_id in entry.children_ids if child_id in flat]

    def get_node_ancestry(self, node_id: str) -> List[TreeNode]:
        """Chain of nodes from the root down to ``node_id`` (inclusive); empty when unknown."""
        chain: List[TreeNode] = []
        current = self.get_node_by_id(node_id)
        while current is not None:
            chain.append(current)
            current = self.get_node_by_id(current.parent_id) if current.parent_id else None
        chain.reverse()
        return chain

    def search_tree(self, query: str) -> List[TreeNode]:
        lowered = (query or "").strip().lower()
        if not lowered:
            return []
        return [entry.node for entry in self._snapshot.flat_nodes.values() if node_matches(entry.node, lowered)]

    # ------------------------------------------------------------------
    # node state
    # ------------------------------------------------------------------

    def select_node(self, node_id: str) -> Optional[TreeNode]:
        return self._toggle(node_id, "is_selected", True, TreeEventKind.NODE_SELECTED)

    def expand_node(self, node_id: str) -> Optional[TreeNode]:
        return self._toggle(node_id, "is_expanded", True, TreeEventKind.NODE_EXPANDED)

    def collapse_node(self, node_id: str) -> Optional[TreeNode]:
        return self._toggle(node_id, "is_expanded", False, TreeEventKind.NODE_COLLAPSED)

    def subscribe(self, kind: TreeEventKind, callback: Callable[[Any], None]) -> Callable[[], None]:
        return self.events.subscribe(kind, callback)

    def _toggle(self, node_id: str, attr: str, value: bool, kind: TreeEventKind) -> Optional[TreeNode]:
        node = self.get_node_by_id(node_id)
        if node is None:
            return None
        setattr(node, attr, value)
        self.events.emit(kind, node)
        return node
