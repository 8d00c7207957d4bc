"""Database bootstrapping: table creation and seeding of the attribute catalog."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.packages.catalog.core.config import get_settings
from app.packages.catalog.core.constants import (
    DEFAULT_XDM_SCHEMA_NAME,
    IDENTITY_PATH_PREFIX,
    PATH_MAPPINGS_FILE,
    PATH_SEPARATOR,
    RAW_USER_DATA_FILE,
)
from app.packages.catalog.crud.attribute import attribute_crud
from app.packages.catalog.db import session as db_session
from app.packages.catalog.models import Attribute, AttributeValue, XdmDetail
from app.packages.catalog.models.base import Base
from app.packages.catalog.services.workspace import load_seed_document
from app.packages.catalog.utils.node_metadata import infer_node_metadata
from app.packages.catalog.utils.path_extractor import get_value_at_path, has_path
from app.packages.catalog.utils.path_mapper import MappingTable
from app.packages.catalog.utils.tree_builder import format_name, stringify_value

logger = logging.getLogger(__name__)


def init_db(seed_dir: Optional[Path] = None) -> None:
    """Create all tables and, on an empty catalog, seed attributes from the mapping table."""
    Base.metadata.create_all(bind=db_session.engine)

    if not get_settings().seed_catalog_on_startup:
        return

    session = db_session.SessionLocal()
    try:
        created = _seed_attributes_if_empty(session, seed_dir)
        session.commit()
        if created:
            logger.info("Seeded %d catalog attributes", created)
    except Exception:
        session.rollback()
        logger.exception("Failed to seed the attribute catalog during database initialization")
        raise
    finally:
        session.close()


def _seed_attributes_if_empty(db: Session, seed_dir: Optional[Path]) -> int:
    if attribute_crud.count(db) > 0:
        return 0

    table = MappingTable.from_records(load_seed_document(PATH_MAPPINGS_FILE, seed_dir))
    raw_user_data = load_seed_document(RAW_USER_DATA_FILE, seed_dir)

    by_path: Dict[str, Attribute] = {}
    for mapping in table:
        if not mapping.transformed_path:
            continue
        segments = mapping.transformed_path.split(PATH_SEPARATOR)
        parent: Optional[Attribute] = None
        for depth in range(1, len(segments) + 1):
            path = PATH_SEPARATOR.join(segments[:depth])
            is_leaf = depth == len(segments)
            attribute = by_path.get(path)
            if attribute is None:
                sample = get_value_at_path(raw_user_data, mapping.raw_path) if is_leaf else None
                attribute = _build_attribute(path, segments[depth - 1], parent, is_leaf, sample, mapping.description, mapping.data_type)
                db.add(attribute)
                db.flush()
                by_path[path] = attribute
                if is_leaf:
                    _attach_leaf_details(db, attribute, mapping.raw_path, raw_user_data)
            parent = attribute
    return len(by_path)


def _build_attribute(
    path: str,
    name: str,
    parent: Optional[Attribute],
    is_leaf: bool,
    sample: Any,
    description: Optional[str],
    data_type: Optional[str],
) -> Attribute:
    metadata = infer_node_metadata(path, sample, is_leaf=is_leaf)
    return Attribute(
        attribute_name=name,
        attribute_path=path,
        display_name=format_name(name),
        data_type=(data_type or metadata.get("data_type")) if is_leaf else None,
        definition=(description if is_leaf and description else metadata["description"]),
        data_classification=metadata["category"],
        is_identity=is_leaf and path.startswith(IDENTITY_PATH_PREFIX + PATH_SEPARATOR),
        historical_data_enabled=False,
        data_owner=metadata["data_owner"],
        data_source=metadata["data_source"],
        parent_id=parent.id if parent is not None else None,
    )


def _attach_leaf_details(db: Session, attribute: Attribute, raw_path: str, raw_user_data: Dict[str, Any]) -> None:
    raw_segments: List[str] = raw_path.split(PATH_SEPARATOR)
    db.add(
        XdmDetail(
            attribute_id=attribute.id,
            schema_name=DEFAULT_XDM_SCHEMA_NAME,
            field_group_name=raw_segments[0],
            xdm_data_type=attribute.data_type,
            xdm_path=".".join(raw_segments),
        )
    )
    if has_path(raw_user_data, raw_path):
        value = get_value_at_path(raw_user_data, raw_path)
        if value is not None:
            db.add(AttributeValue(attribute_id=attribute.id, value=stringify_value(value), is_sample=True))
