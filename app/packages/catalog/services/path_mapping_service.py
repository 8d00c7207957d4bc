"""Path mapping service: queries and edits of the raw → transformed mapping table.

Edits never touch ``transformed_path`` directly: the levels are the single
source of truth and the table snapshot is replaced on every change. Invalid
ids or raw paths make the mutators return ``None``.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from openpyxl import Workbook

from app.packages.catalog.core.constants import LEVEL_KEYS, PATH_SEPARATOR
from app.packages.catalog.core.enums import MappingEventKind, PathLevelEnum
from app.packages.catalog.services.schema_service import SchemaService
from app.packages.catalog.utils.events import EventBus
from app.packages.catalog.utils.path_extractor import extract_path_strings, get_value_at_path, has_path
from app.packages.catalog.utils.path_mapper import MappingTable, PathLevels, PathMapping, split_into_levels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingUpdated:
    original: PathMapping
    updated: PathMapping
    kind: MappingEventKind = MappingEventKind.MAPPING_UPDATED


@dataclass(frozen=True)
class MappingAdded:
    mapping: PathMapping
    kind: MappingEventKind = MappingEventKind.MAPPING_ADDED


@dataclass(frozen=True)
class MappingDeleted:
    mapping: PathMapping
    kind: MappingEventKind = MappingEventKind.MAPPING_DELETED


def _set_value_at_path(document: Dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(PATH_SEPARATOR)
    current = document
    for part in parts[:-1]:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child
    current[parts[-1]] = value


class PathMappingService:
    """Caller-owned holder of the current :class:`MappingTable` snapshot."""

    def __init__(self, table: MappingTable, schema_service: SchemaService) -> None:
        self._table = table
        self._schema_service = schema_service
        self.events: EventBus[MappingEventKind] = EventBus()

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def snapshot(self) -> MappingTable:
        return self._table

    def get_all_mappings(self) -> List[PathMapping]:
        return list(self._table)

    def get_mapping_by_id(self, mapping_id: str) -> Optional[PathMapping]:
        return self._table.find_by_id(mapping_id)

    def get_mapping_by_raw_path(self, raw_path: str) -> Optional[PathMapping]:
        return self._table.find_by_raw_path(raw_path)

    def get_mapping_by_transformed_path(self, transformed_path: str) -> Optional[PathMapping]:
        return self._table.find_by_transformed_path(transformed_path)

    def get_mappings_by_level(self, level: PathLevelEnum, value: str) -> List[PathMapping]:
        return [mapping for mapping in self._table if mapping.levels.get(level.value) == value]

    def get_unique_values_for_level(self, level: PathLevelEnum) -> List[str]:
        return sorted({mapping.levels.get(level.value) for mapping in self._table} - {""})

    def resolve(self, raw_path: str) -> str:
        return self._table.resolve(raw_path)

    def split_into_levels(self, path: str) -> PathLevels:
        return split_into_levels(path)

    def raw_path_for(self, transformed_path: str) -> Optional[str]:
        mapping = self._table.find_by_transformed_path(transformed_path)
        return mapping.raw_path if mapping else None

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------

    def update_mapping(self, mapping_id: str, levels: PathLevels) -> Optional[PathMapping]:
        original = self._table.find_by_id(mapping_id)
        if original is None:
            return None

        self._table, updated = self._table.with_updated_levels(mapping_id, levels)
        self._schema_service.ensure_transformed_path(updated.transformed_path)
        logger.info("Mapping %s now points %s -> %s", mapping_id, updated.raw_path, updated.transformed_path)
        self.events.emit(MappingEventKind.MAPPING_UPDATED, MappingUpdated(original=original, updated=updated))
        return updated

    def add_mapping(
        self,
        raw_path: str,
        levels: PathLevels,
        description: Optional[str] = None,
        data_type: Optional[str] = None,
    ) -> Optional[PathMapping]:
        if not self._schema_service.raw_path_exists(raw_path):
            logger.warning("Raw path does not exist: %s", raw_path)
            return None
        if self._table.find_by_raw_path(raw_path) is not None:
            logger.warning("Raw path is already mapped: %s", raw_path)
            return None

        self._table, created = self._table.with_added_mapping(raw_path, levels, description, data_type)
        self._schema_service.ensure_transformed_path(created.transformed_path)
        logger.info("Added mapping %s: %s -> %s", created.id, raw_path, created.transformed_path)
        self.events.emit(MappingEventKind.MAPPING_ADDED, MappingAdded(mapping=created))
        return created

    def delete_mapping(self, mapping_id: str) -> Optional[PathMapping]:
        self._table, removed = self._table.with_removed_mapping(mapping_id)
        if removed is None:
            return None
        logger.info("Removed mapping %s (%s)", mapping_id, removed.raw_path)
        self.events.emit(MappingEventKind.MAPPING_DELETED, MappingDeleted(mapping=removed))
        return removed

    def subscribe(self, kind: MappingEventKind, callback: Callable[[Any], None]) -> Callable[[], None]:
        return self.events.subscribe(kind, callback)

    # ------------------------------------------------------------------
    # data operations
    # ------------------------------------------------------------------

    def apply_value_to_transformed_schema(self, raw_path: str, value: Any) -> bool:
        mapping = self._table.find_by_raw_path(raw_path)
        if mapping is None:
            logger.warning("No mapping found for raw path: %s", raw_path)
            return False
        return self._schema_service.update_transformed_schema_at(mapping.transformed_path, value)

    def transform_raw_data(self, raw_data: Dict[str, Any]) -> Dict[str, Any]:
        """Build the transformed document by copying every mapped raw value to its target path."""
        result: Dict[str, Any] = {}
        for mapping in self._table:
            if not mapping.transformed_path or not has_path(raw_data, mapping.raw_path):
                continue
            _set_value_at_path(result, mapping.transformed_path, get_value_at_path(raw_data, mapping.raw_path))
        return result

    def describe_raw_paths(self, raw_data: Dict[str, Any], leaf_only: bool = True) -> List[Dict[str, Any]]:
        """Every extracted raw leaf path with its resolved target and level split.

        Array elements share their parent's path, so duplicates are reported once.
        """
        rows: List[Dict[str, Any]] = []
        seen: set[str] = set()
        for raw_path in extract_path_strings(raw_data, leaf_only=leaf_only):
            if raw_path in seen:
                continue
            seen.add(raw_path)
            transformed = self._table.resolve(raw_path)
            mapping = self._table.find_by_raw_path(raw_path)
            rows.append(
                {
                    "raw_path": raw_path,
                    "transformed_path": transformed,
                    "levels": split_into_levels(transformed).as_dict(),
                    "mapping_id": mapping.id if mapping else None,
                    "is_mapped": mapping is not None or self._table.longest_prefix_match(raw_path) is not None,
                }
            )
        return rows

    def export_workbook(self) -> io.BytesIO:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Path Mappings"
        sheet.append(["ID", "Raw Path", "Transformed Path", *[key.title() for key in LEVEL_KEYS], "Description", "Data Type"])
        for mapping in self._table:
            sheet.append(
                [
                    mapping.id,
                    mapping.raw_path,
                    mapping.transformed_path,
                    *mapping.levels.as_tuple(),
                    mapping.description or "",
                    mapping.data_type or "",
                ]
            )
        buffer = io.BytesIO()
        workbook.save(buffer)
        buffer.seek(0)
        return buffer
