"""The in-memory catalog workspace: schema, mapping and tree services wired together.

One workspace is created per application (see ``app.main``) and reached from
requests through ``core.dependencies.get_workspace``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.packages.catalog.core.config import get_settings
from app.packages.catalog.core.constants import (
    PATH_MAPPINGS_FILE,
    RAW_SCHEMA_FILE,
    RAW_USER_DATA_FILE,
    TRANSFORMED_SCHEMA_FILE,
    TRANSFORMED_USER_DATA_FILE,
)
from app.packages.catalog.core.enums import MappingEventKind, TreeSourceEnum
from app.packages.catalog.services.path_mapping_service import PathMappingService
from app.packages.catalog.services.schema_service import SchemaService
from app.packages.catalog.services.tree_service import TreeService
from app.packages.catalog.utils.node_metadata import infer_node_metadata
from app.packages.catalog.utils.path_mapper import MappingTable
from app.packages.catalog.utils.tree_builder import PathInfo, TreeNode

logger = logging.getLogger(__name__)


def load_seed_document(name: str, seed_dir: Optional[Path] = None) -> Any:
    directory = seed_dir or get_settings().seed_data_directory
    with (directory / name).open(encoding="utf-8") as handle:
        return json.load(handle)


@dataclass
class CatalogWorkspace:
    raw_user_data: Dict[str, Any]
    transformed_user_data: Dict[str, Any]
    schema_service: SchemaService
    mapping_service: PathMappingService
    tree_service: TreeService
    tree_source: TreeSourceEnum = field(default=TreeSourceEnum.SEED)

    def rebuild_tree(self, source: Optional[TreeSourceEnum] = None) -> List[TreeNode]:
        """Rebuild from the seed transformed document or from the raw data run through the mappings.

        Without ``source`` the tree is rebuilt from whichever source was used last.
        """
        if source is not None:
            self.tree_source = source
        if self.tree_source == TreeSourceEnum.MAPPED:
            document = self.mapping_service.transform_raw_data(self.raw_user_data)
        else:
            document = self.transformed_user_data
        return self.tree_service.initialize_from_data(document)


def build_workspace(seed_dir: Optional[Path] = None) -> CatalogWorkspace:
    """Load the seed documents and return a fully initialized workspace."""
    schema_service = SchemaService(
        load_seed_document(RAW_SCHEMA_FILE, seed_dir),
        load_seed_document(TRANSFORMED_SCHEMA_FILE, seed_dir),
    )
    table = MappingTable.from_records(load_seed_document(PATH_MAPPINGS_FILE, seed_dir))
    mapping_service = PathMappingService(table, schema_service)

    def leaf_metadata(info: PathInfo) -> Dict[str, Any]:
        # Resolved per build so xdm paths follow mapping edits
        return infer_node_metadata(info.path, info.value, xdm_lookup=mapping_service.raw_path_for)

    tree_service = TreeService(metadata_provider=leaf_metadata)

    workspace = CatalogWorkspace(
        raw_user_data=load_seed_document(RAW_USER_DATA_FILE, seed_dir),
        transformed_user_data=load_seed_document(TRANSFORMED_USER_DATA_FILE, seed_dir),
        schema_service=schema_service,
        mapping_service=mapping_service,
        tree_service=tree_service,
    )
    workspace.rebuild_tree()

    def on_mapping_change(_event: object) -> None:
        # Leaf xdm paths, and the mapped tree itself, depend on the mapping table
        workspace.rebuild_tree()

    for kind in MappingEventKind:
        mapping_service.subscribe(kind, on_mapping_change)

    logger.info("Catalog workspace ready with %d path mappings", len(table))
    return workspace
