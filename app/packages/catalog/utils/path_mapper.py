"""Raw → transformed path mapping.

A :class:`MappingTable` is an immutable snapshot of :class:`PathMapping` rows.
Every "mutation" returns a new table; ``transformed_path`` is always derived
from the levels through :func:`join_levels` and never edited directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from app.packages.catalog.core.constants import LEVEL_KEYS, PATH_SEPARATOR


@dataclass(frozen=True)
class PathLevels:
    level1: str = ""
    level2: str = ""
    level3: str = ""
    level4: str = ""
    level5: str = ""

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "PathLevels":
        data = data or {}
        return cls(**{key: (data.get(key) or "").strip() for key in LEVEL_KEYS})

    def as_tuple(self) -> Tuple[str, str, str, str, str]:
        return (self.level1, self.level2, self.level3, self.level4, self.level5)

    def as_dict(self) -> Dict[str, str]:
        return dict(zip(LEVEL_KEYS, self.as_tuple()))

    def get(self, level: str) -> str:
        return getattr(self, level)


@dataclass(frozen=True)
class PathMapping:
    id: str
    raw_path: str
    transformed_path: str
    levels: PathLevels = field(default_factory=PathLevels)
    description: Optional[str] = None
    data_type: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "raw_path": self.raw_path,
            "transformed_path": self.transformed_path,
            "levels": self.levels.as_dict(),
            "description": self.description,
            "data_type": self.data_type,
        }


def join_levels(levels: PathLevels) -> str:
    """``/``-join of the non-empty levels, in level1..level5 order."""
    return PATH_SEPARATOR.join(part for part in levels.as_tuple() if part)


def split_into_levels(path: str) -> PathLevels:
    """Split ``path`` into the five level columns.

    Segments 0-2 fill level1-level3, segment 3 fills level4 and every remaining
    segment is rejoined into level5.

    >>> split_into_levels("a/b/c/d/e/f").level5
    'e/f'
    """
    segments = path.split(PATH_SEPARATOR)

    def _segment(index: int) -> str:
        return segments[index] if index < len(segments) else ""

    return PathLevels(
        level1=_segment(0),
        level2=_segment(1),
        level3=_segment(2),
        level4=_segment(3),
        level5=PATH_SEPARATOR.join(segments[4:]),
    )


def build_mapping(
    mapping_id: str,
    raw_path: str,
    levels: PathLevels,
    description: Optional[str] = None,
    data_type: Optional[str] = None,
) -> PathMapping:
    return PathMapping(
        id=mapping_id,
        raw_path=raw_path,
        transformed_path=join_levels(levels),
        levels=levels,
        description=description,
        data_type=data_type,
    )


@dataclass(frozen=True)
class MappingTable:
    mappings: Tuple[PathMapping, ...] = ()

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "MappingTable":
        """Load seed rows; ``transformed_path`` is recomputed from the levels."""
        rows = []
        for record in records:
            levels = PathLevels.from_mapping(record.get("levels"))
            rows.append(
                build_mapping(
                    str(record["id"]),
                    record["raw_path"],
                    levels,
                    description=record.get("description"),
                    data_type=record.get("data_type"),
                )
            )
        return cls(tuple(rows))

    def __iter__(self) -> Iterator[PathMapping]:
        return iter(self.mappings)

    def __len__(self) -> int:
        return len(self.mappings)

    # ------------------------------------------------------------------
    # lookups
    # ------------------------------------------------------------------

    def find_by_id(self, mapping_id: str) -> Optional[PathMapping]:
        return next((m for m in self.mappings if m.id == mapping_id), None)

    def find_by_raw_path(self, raw_path: str) -> Optional[PathMapping]:
        return next((m for m in self.mappings if m.raw_path == raw_path), None)

    def find_by_transformed_path(self, transformed_path: str) -> Optional[PathMapping]:
        return next((m for m in self.mappings if m.transformed_path == transformed_path), None)

    def longest_prefix_match(self, raw_path: str) -> Optional[PathMapping]:
        """Mapping whose ``raw_path`` is the longest string prefix of ``raw_path``.

        Matching is on characters, not segments: a key ``a/b`` also covers ``a/bc``.
        """
        best: Optional[PathMapping] = None
        for mapping in self.mappings:
            if not mapping.raw_path or not raw_path.startswith(mapping.raw_path):
                continue
            if best is None or len(mapping.raw_path) > len(best.raw_path):
                best = mapping
        return best

    def resolve(self, raw_path: str) -> str:
        """Transformed path for ``raw_path``; unmapped paths come back unchanged."""
        exact = self.find_by_raw_path(raw_path)
        if exact is not None:
            return exact.transformed_path

        prefix = self.longest_prefix_match(raw_path)
        if prefix is None:
            return raw_path

        remainder = raw_path[len(prefix.raw_path):]
        if remainder.startswith(PATH_SEPARATOR):
            remainder = remainder[len(PATH_SEPARATOR):]
        # An empty target yields the bare remainder rather than a leading "/"
        if not prefix.transformed_path:
            return remainder
        return f"{prefix.transformed_path}{PATH_SEPARATOR}{remainder}"

    def next_id(self) -> str:
        numeric_ids = [int(m.id) for m in self.mappings if m.id.isdigit()]
        return str(max(numeric_ids, default=0) + 1)

    # ------------------------------------------------------------------
    # snapshot transitions
    # ------------------------------------------------------------------

    def with_updated_levels(self, mapping_id: str, levels: PathLevels) -> Tuple["MappingTable", Optional[PathMapping]]:
        """Return ``(new_table, updated_mapping)``; unknown ids give ``(self, None)``."""
        current = self.find_by_id(mapping_id)
        if current is None:
            return self, None
        updated = replace(current, levels=levels, transformed_path=join_levels(levels))
        rows = tuple(updated if m.id == mapping_id else m for m in self.mappings)
        return MappingTable(rows), updated

    def with_added_mapping(
        self,
        raw_path: str,
        levels: PathLevels,
        description: Optional[str] = None,
        data_type: Optional[str] = None,
    ) -> Tuple["MappingTable", PathMapping]:
        created = build_mapping(self.next_id(), raw_path, levels, description, data_type)
        return MappingTable(self.mappings + (created,)), created

    def with_removed_mapping(self, mapping_id: str) -> Tuple["MappingTable", Optional[PathMapping]]:
        current = self.find_by_id(mapping_id)
        if current is None:
            return self, None
        return MappingTable(tuple(m for m in self.mappings if m.id != mapping_id)), current
