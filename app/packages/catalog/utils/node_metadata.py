"""Keyword based metadata for tree nodes built from the transformed user document."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from app.packages.catalog.core.constants import PATH_SEPARATOR
from app.packages.catalog.core.enums import ImportanceEnum
from app.packages.catalog.utils.tree_builder import format_name, javascript_type_name

_SECTION_DESCRIPTIONS = (
    ("userDetails/identity", "Core user identity information including name and location"),
    ("userDetails/email", "User email contact information and validation status"),
    ("userDetails/authentication", "User authentication and sign-up details"),
    ("userDetails/accountSystemInfo", "Account system linking and integration information"),
    ("userDetails/languagePreferences", "User preferred languages for UI and communications"),
    ("userDetails/status", "Current user status within various application funnels"),
    ("individualEntitlements", "Individual user product entitlements and subscription details"),
    ("teamEntitlements", "Team-level entitlements and contract information"),
    ("modelsAndScores", "User behavior models and predictive scores"),
    ("productActivity", "User product usage and activity data"),
)

_LEAF_DESCRIPTION_SUFFIX = {
    "string": " containing text data",
    "number": " containing numeric value",
    "boolean": " indicating yes/no state",
    "null": " (currently empty)",
    "array": " containing multiple values",
}


def _data_owner(key: str, path: str, is_leaf: bool) -> str:
    if "user" in key or "profile" in key or "userDetails" in path:
        return "User Management Team"
    if "payment" in key or "billing" in key or "entitlement" in key:
        return "Finance Team"
    if "analytics" in key or "metrics" in key or "scores" in key:
        return "Analytics Team"
    if "email" in path.lower():
        return "Marketing Team"
    return "Data Team" if is_leaf else "System Admin"


def _data_source(key: str, path: str, value: Any) -> str:
    if "timestamp" in key or "date" in key or "dts" in key:
        return "System Clock"
    if "location" in key or "address" in key or "country" in key:
        return "Location Service"
    if "user" in key or "profile" in key or "userDetails" in path:
        return "User Profile"
    lowered = path.lower()
    if "entitlement" in lowered or "contract" in lowered:
        return "Entitlement System"
    if "activity" in lowered:
        return "Activity Tracking"
    if isinstance(value, (int, float)) and not isinstance(value, bool) and "id" in key:
        return "ID Generator"
    return "System"


def _latency(key: str, path: str, is_leaf: bool) -> str:
    if not is_leaf:
        return "N/A"
    lowered = path.lower()
    if "timestamp" in key or "status" in key:
        return "Real-time"
    if "cache" in key or "temp" in key:
        return "5 minutes"
    if "analytics" in key or "metrics" in key or "scores" in lowered:
        return "1 hour"
    if "activity" in lowered:
        return "15 minutes"
    return "On-demand"


def _importance(key: str, path: str) -> str:
    lowered = path.lower()
    if "identity" in lowered or "email" in key or "name" in key:
        return ImportanceEnum.HIGH.value
    if "preferences" in lowered:
        return ImportanceEnum.LOW.value
    return ImportanceEnum.MEDIUM.value


def _category(path: str) -> str:
    lowered = path.lower()
    if path.startswith("userDetails"):
        return "User Information"
    if "entitlements" in lowered:
        return "Product Entitlements"
    if "activity" in lowered:
        return "User Activity"
    if "scores" in lowered:
        return "Analytics"
    if "email" in lowered:
        return "Communication"
    return "Uncategorized"


def _description(segment: str, path: str, data_type: str, is_leaf: bool) -> str:
    if is_leaf:
        return f"{format_name(segment)} field{_LEAF_DESCRIPTION_SUFFIX.get(data_type, '')}"
    for prefix, text in _SECTION_DESCRIPTIONS:
        if path == prefix or path.startswith(prefix + PATH_SEPARATOR):
            return text
    return f"{format_name(segment)} section"


def infer_node_metadata(
    path: str,
    value: Any,
    is_leaf: bool = True,
    xdm_lookup: Optional[Callable[[str], Optional[str]]] = None,
) -> Dict[str, Any]:
    """Metadata dictionary for the node at ``path``.

    ``xdm_lookup`` maps a transformed path back to its raw (XDM) path, usually
    through the current mapping table.
    """
    segment = path.rsplit(PATH_SEPARATOR, 1)[-1]
    key = segment.lower()
    data_type = javascript_type_name(value) if is_leaf else ""

    metadata: Dict[str, Any] = {
        "data_owner": _data_owner(key, path, is_leaf),
        "data_source": _data_source(key, path, value),
        "latency": _latency(key, path, is_leaf),
        "importance": _importance(key, path),
        "category": _category(path),
        "description": _description(segment, path, data_type, is_leaf),
    }
    if data_type:
        metadata["data_type"] = data_type
    if xdm_lookup is not None:
        xdm_path = xdm_lookup(path)
        if xdm_path:
            metadata["xdm_path"] = xdm_path
    return metadata
