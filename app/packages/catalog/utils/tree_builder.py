"""Folder/file tree construction from a flat list of slash-joined paths.

``build_tree_from_paths`` sorts the input, materializes one node per path
prefix and returns a :class:`TreeSnapshot` holding the root list together with
an id-indexed flat map (node reference plus ``children_ids``).
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from app.packages.catalog.core.constants import PATH_SEPARATOR
from app.packages.catalog.core.enums import NodeTypeEnum

_WORD_BREAK = re.compile(r"(?=[A-Z])|_")

METADATA_FIELDS = (
    "description",
    "data_owner",
    "data_source",
    "latency",
    "xdm_path",
    "importance",
    "category",
    "data_type",
    "last_updated",
)

SEARCHABLE_FIELDS = ("description", "data_owner", "data_source", "category", "xdm_path")


@dataclass
class PathInfo:
    path: str
    value: Any = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass
class TreeNode:
    id: str
    name: str
    type: NodeTypeEnum
    level: int
    path: Optional[str] = None
    value: Any = None
    children: Optional[List["TreeNode"]] = None
    parent_id: Optional[str] = None
    is_expanded: bool = False
    is_selected: bool = False
    description: Optional[str] = None
    data_owner: Optional[str] = None
    data_source: Optional[str] = None
    latency: Optional[str] = None
    xdm_path: Optional[str] = None
    importance: Optional[str] = None
    category: Optional[str] = None
    data_type: Optional[str] = None
    last_updated: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return self.type == NodeTypeEnum.FILE

    def apply_metadata(self, metadata: Mapping[str, Any]) -> None:
        for key, value in metadata.items():
            if key in METADATA_FIELDS:
                setattr(self, key, value)
            else:
                self.extra[key] = value

    def add_child(self, child: "TreeNode") -> None:
        if self.children is None:
            self.children = []
        self.children.append(child)
        child.parent_id = self.id
        # A leaf that gains a child turns into a folder; its value is kept
        self.type = NodeTypeEnum.FOLDER

    def as_dict(self, include_children: bool = True) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "level": self.level,
            "path": self.path,
            "value": self.value,
            "parent_id": self.parent_id,
            "is_expanded": self.is_expanded,
            "is_selected": self.is_selected,
            **{key: getattr(self, key) for key in METADATA_FIELDS},
            "extra": dict(self.extra),
        }
        if include_children and self.children is not None:
            payload["children"] = [child.as_dict() for child in self.children]
        else:
            payload["children"] = None
        return payload


@dataclass
class FlatTreeNode:
    """Non-owning index entry: the node itself plus the ids of its direct children."""

    node: TreeNode
    children_ids: List[str] = field(default_factory=list)


@dataclass
class TreeSnapshot:
    tree: List[TreeNode] = field(default_factory=list)
    flat_nodes: Dict[str, FlatTreeNode] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.flat_nodes)


def format_name(segment: str) -> str:
    """Human readable label for a key: ``emailValidFlag`` → ``Email Valid Flag``."""
    words = [word for word in _WORD_BREAK.split(segment) if word]
    return " ".join(word[0].upper() + word[1:].lower() for word in words)


def _new_id() -> str:
    return str(uuid.uuid4())


def build_flat_nodes(tree: Iterable[TreeNode]) -> Dict[str, FlatTreeNode]:
    """Depth-first index of every node under ``tree``."""
    flat: Dict[str, FlatTreeNode] = {}
    stack = list(reversed(list(tree)))
    while stack:
        node = stack.pop()
        children = node.children or []
        flat[node.id] = FlatTreeNode(node=node, children_ids=[child.id for child in children])
        stack.extend(reversed(children))
    return flat


def build_tree_from_paths(
    paths: Iterable[PathInfo],
    id_factory: Callable[[], str] = _new_id,
) -> TreeSnapshot:
    """Build a fresh tree and flat map from ``paths``.

    Inputs are processed in case-insensitive path order (ties broken by the
    exact path) so siblings come out sorted. The first
    occurrence of a duplicated path wins; metadata is only applied to the node
    that terminates a path.
    """
    roots: List[TreeNode] = []
    by_path: Dict[str, TreeNode] = {}

    for info in sorted(paths, key=lambda item: (item.path.lower(), item.path)):
        parts = info.path.split(PATH_SEPARATOR)
        parent: Optional[TreeNode] = None
        prefix = ""

        for depth, part in enumerate(parts):
            prefix = f"{prefix}{PATH_SEPARATOR}{part}" if prefix else part
            node = by_path.get(prefix)
            if node is None:
                is_last = depth == len(parts) - 1
                node = TreeNode(
                    id=id_factory(),
                    name=format_name(part),
                    type=NodeTypeEnum.FILE if is_last else NodeTypeEnum.FOLDER,
                    level=depth,
                    path=prefix,
                    value=info.value if is_last else None,
                    children=None if is_last else [],
                )
                if is_last and info.metadata:
                    node.apply_metadata(info.metadata)
                if parent is None:
                    roots.append(node)
                else:
                    parent.add_child(node)
                by_path[prefix] = node
            parent = node

    return TreeSnapshot(tree=roots, flat_nodes=build_flat_nodes(roots))


def javascript_type_name(value: Any) -> str:
    """Type label used in node metadata (``string``, ``number``, ``boolean``, ``array``...)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"


def collect_path_values(data: Any, parent_path: str = "") -> List[PathInfo]:
    """Flatten a document into tree builder input.

    Mappings are descended; everything else (including lists and ``None``) is a
    leaf that keeps its value and records its ``data_type``.
    """
    if not isinstance(data, Mapping):
        return []

    paths: List[PathInfo] = []
    for key, value in data.items():
        current = f"{parent_path}{PATH_SEPARATOR}{key}" if parent_path else str(key)
        if isinstance(value, Mapping):
            paths.extend(collect_path_values(value, current))
        else:
            paths.append(PathInfo(path=current, value=value, metadata={"data_type": javascript_type_name(value)}))
    return paths


def stringify_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify_value(item) for item in value)
    return str(value)


def node_matches(node: TreeNode, lowered_query: str) -> bool:
    if lowered_query in node.name.lower():
        return True
    # Folders promoted from leaves keep their value
    if (node.is_leaf or node.value is not None) and lowered_query in stringify_value(node.value).lower():
        return True
    for attr in SEARCHABLE_FIELDS:
        text = getattr(node, attr)
        if text and lowered_query in str(text).lower():
            return True
    return False
