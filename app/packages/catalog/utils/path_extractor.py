"""Leaf path extraction over nested JSON-like documents.

Rules:
- a scalar or ``None`` ends the descent and the current path is a leaf;
- mappings add one segment per key, in iteration order;
- sequences are descended element by element with the *same* parent path, so
  two elements can yield identical leaf paths (kept, not deduplicated);
- empty containers yield nothing unless ``leaf_only`` is False, in which case
  the container's own path is yielded once.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator, List, Optional, Sequence

from app.packages.catalog.core.constants import PATH_SEPARATOR


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def extract_paths(
    value: Any,
    current_path: Sequence[str] = (),
    leaf_only: bool = True,
) -> Iterator[List[str]]:
    """Yield every leaf path under ``value`` as a list of keys."""
    if isinstance(value, Mapping):
        if not value:
            if not leaf_only:
                yield list(current_path)
            return
        for key, child in value.items():
            yield from extract_paths(child, [*current_path, str(key)], leaf_only)
        return

    if _is_sequence(value):
        if not value:
            if not leaf_only:
                yield list(current_path)
            return
        for item in value:
            yield from extract_paths(item, current_path, leaf_only)
        return

    yield list(current_path)


def extract_path_strings(value: Any, leaf_only: bool = True) -> Iterator[str]:
    """Same as :func:`extract_paths` with each path joined by ``/``."""
    for path in extract_paths(value, (), leaf_only):
        yield PATH_SEPARATOR.join(path)


def get_value_at_path(document: Any, path: str | Sequence[str]) -> Optional[Any]:
    """Walk ``document`` along ``path``; returns ``None`` when any segment is missing."""
    parts = path.split(PATH_SEPARATOR) if isinstance(path, str) else list(path)
    current = document
    for part in parts:
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def has_path(document: Any, path: str | Sequence[str]) -> bool:
    """True when every segment of ``path`` exists, even if the leaf value is ``None``."""
    parts = path.split(PATH_SEPARATOR) if isinstance(path, str) else list(path)
    current = document
    for part in parts:
        if not isinstance(current, Mapping) or part not in current:
            return False
        current = current[part]
    return True
