"""Raw and transformed schema documents held in memory."""

from __future__ import annotations

import copy
import logging
from collections.abc import MutableMapping
from typing import Any, Dict, Optional

from app.packages.catalog.core.constants import PATH_SEPARATOR
from app.packages.catalog.utils.path_extractor import get_value_at_path, has_path

logger = logging.getLogger(__name__)


def default_leaf_value(key: str) -> Any:
    """Typed placeholder for a newly created leaf, guessed from its name."""
    if "Date" in key:
        return ""
    if "Count" in key or "Number" in key:
        return 0
    if key.startswith("is") or "Valid" in key or "Has" in key:
        return False
    return ""


class SchemaService:
    """Owns working copies of both schemas; the seed documents are never modified."""

    def __init__(self, raw_schema: Dict[str, Any], transformed_schema: Dict[str, Any]) -> None:
        self._raw_seed = copy.deepcopy(raw_schema)
        self._transformed_seed = copy.deepcopy(transformed_schema)
        self._raw_schema: Dict[str, Any] = {}
        self._transformed_schema: Dict[str, Any] = {}
        self.reset_schemas()

    def get_raw_schema(self) -> Dict[str, Any]:
        return copy.deepcopy(self._raw_schema)

    def get_transformed_schema(self) -> Dict[str, Any]:
        return copy.deepcopy(self._transformed_schema)

    def get_raw_schema_value_at(self, path: str) -> Optional[Any]:
        return copy.deepcopy(get_value_at_path(self._raw_schema, path))

    def get_transformed_schema_value_at(self, path: str) -> Optional[Any]:
        return copy.deepcopy(get_value_at_path(self._transformed_schema, path))

    def raw_path_exists(self, path: str) -> bool:
        return has_path(self._raw_schema, path)

    def transformed_path_exists(self, path: str) -> bool:
        return has_path(self._transformed_schema, path)

    def update_raw_schema_at(self, path: str, value: Any) -> bool:
        return self._set_existing(self._raw_schema, path, value)

    def update_transformed_schema_at(self, path: str, value: Any) -> bool:
        return self._set_existing(self._transformed_schema, path, value)

    def ensure_transformed_path(self, path: str) -> bool:
        """Create ``path`` in the transformed schema, adding intermediate objects as needed.

        Returns False when an intermediate segment already holds a scalar.
        """
        parts = [part for part in path.split(PATH_SEPARATOR) if part]
        if not parts:
            return False

        current: Any = self._transformed_schema
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
            if not isinstance(current, MutableMapping):
                logger.warning("Cannot extend transformed schema at %s: %s is not an object", path, part)
                return False

        leaf = parts[-1]
        if leaf not in current:
            current[leaf] = default_leaf_value(leaf)
            logger.info("Added transformed schema path %s", path)
        return True

    def reset_schemas(self) -> None:
        self._raw_schema = copy.deepcopy(self._raw_seed)
        self._transformed_schema = copy.deepcopy(self._transformed_seed)

    @staticmethod
    def _set_existing(document: Dict[str, Any], path: str, value: Any) -> bool:
        """Assign ``value`` at ``path``; the parent object must already exist."""
        parts = path.split(PATH_SEPARATOR)
        parent = get_value_at_path(document, parts[:-1]) if len(parts) > 1 else document
        if not isinstance(parent, MutableMapping):
            return False
        parent[parts[-1]] = value
        return True
