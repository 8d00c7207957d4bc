"""Enumerations that constrain node types, mapping levels and event kinds."""

from enum import Enum


class NodeTypeEnum(str, Enum):
    FOLDER = "folder"
    FILE = "file"


class PathLevelEnum(str, Enum):
    """The five fixed columns a transformed path is split into."""

    LEVEL1 = "level1"
    LEVEL2 = "level2"
    LEVEL3 = "level3"
    LEVEL4 = "level4"
    LEVEL5 = "level5"


class MappingEventKind(str, Enum):
    """Notifications published by the path mapping service."""

    MAPPING_UPDATED = "mapping_updated"
    MAPPING_ADDED = "mapping_added"
    MAPPING_DELETED = "mapping_deleted"


class TreeEventKind(str, Enum):
    """Notifications published by the tree service."""

    TREE_UPDATED = "tree_updated"
    NODE_SELECTED = "node_selected"
    NODE_EXPANDED = "node_expanded"
    NODE_COLLAPSED = "node_collapsed"
    ERROR = "error"


class TreeSourceEnum(str, Enum):
    """Where a tree rebuild takes its path list from."""

    SEED = "seed"
    MAPPED = "mapped"


class ImportanceEnum(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
