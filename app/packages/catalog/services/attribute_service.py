"""Attribute catalog service: attribute definitions and their values, XDM details and datasets."""

from __future__ import annotations

import io
from collections import defaultdict
from typing import Any, Dict, List, Optional

from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
    MAX_PAGE_SIZE,
    PATH_SEPARATOR,
    XLSX_MEDIA_TYPE,
)
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.core.timezone import export_filename, format_datetime
from app.packages.catalog.crud.attribute import attribute_crud
from app.packages.catalog.crud.attribute_detail import (
    attribute_dataset_crud,
    attribute_value_crud,
    xdm_detail_crud,
)
from app.packages.catalog.crud.lineage import lineage_crud
from app.packages.catalog.models.attribute import Attribute, AttributeDataset, AttributeValue, XdmDetail
from app.packages.catalog.models.lineage import AttributeLineage
from app.packages.catalog.utils.tree_builder import format_name

# Columns a client may change through ``update_attribute``; name and path are fixed at creation.
_UPDATABLE_FIELDS = (
    "display_name",
    "data_type",
    "definition",
    "data_classification",
    "is_identity",
    "historical_data_enabled",
    "data_owner",
    "data_steward",
    "data_source",
)


class AttributeService:
    """Business rules for the relational attribute catalog."""

    # ------------------------------------------------------------------
    # attributes
    # ------------------------------------------------------------------

    def list_attributes(
        self,
        db: Session,
        *,
        keyword: Optional[str] = None,
        parent_id: Optional[int] = None,
        page: int = 1,
        size: int = 20,
    ) -> Dict[str, Any]:
        normalized_page = max(page, 1)
        normalized_size = max(min(size, MAX_PAGE_SIZE), 1)
        skip = (normalized_page - 1) * normalized_size

        items, total = attribute_crud.list_with_filters(
            db,
            keyword=keyword,
            parent_id=parent_id,
            skip=skip,
            limit=normalized_size,
        )
        payload = {
            "total": total,
            "page": normalized_page,
            "size": normalized_size,
            "list": [self._serialize_attribute(item) for item in items],
        }
        return create_response("Attributes fetched", payload, HTTP_STATUS_OK)

    def list_tree(self, db: Session) -> Dict[str, Any]:
        """Whole catalog as a nested tree with values, XDM details, datasets and lineage."""
        items: List[Attribute] = attribute_crud.list_all(db)
        if not items:
            return create_response("Attribute tree fetched", [], HTTP_STATUS_OK)

        ids = [item.id for item in items]
        values = attribute_value_crud.group_by_attribute(db, ids)
        xdm_details = xdm_detail_crud.group_by_attribute(db, ids)
        datasets = attribute_dataset_crud.group_by_attribute(db, ids)
        lineage: Dict[int, List[AttributeLineage]] = defaultdict(list)
        for edge in lineage_crud.query(db).all():
            lineage[edge.source_attribute_id].append(edge)
            if edge.target_attribute_id != edge.source_attribute_id:
                lineage[edge.target_attribute_id].append(edge)

        children_map: Dict[Optional[int], List[Attribute]] = defaultdict(list)
        for item in items:
            children_map[item.parent_id].append(item)
        for siblings in children_map.values():
            siblings.sort(key=lambda node: (node.attribute_name, node.id))

        def build(node: Attribute) -> Dict[str, Any]:
            payload = self._serialize_attribute(node)
            payload.update(
                {
                    "values": [self._serialize_value(row) for row in values.get(node.id, [])],
                    "xdm_details": [self._serialize_xdm(row) for row in xdm_details.get(node.id, [])],
                    "datasets": [self._serialize_dataset(row) for row in datasets.get(node.id, [])],
                    "lineage": [self._serialize_lineage_ref(edge) for edge in lineage.get(node.id, [])],
                    "children": [build(child) for child in children_map.get(node.id, [])],
                }
            )
            return payload

        roots = [build(root) for root in children_map.get(None, [])]
        return create_response("Attribute tree fetched", roots, HTTP_STATUS_OK)

    def get_attribute(self, db: Session, *, attribute_id: int) -> Dict[str, Any]:
        attribute = self._get_attribute_or_404(db, attribute_id)
        payload = self._serialize_attribute(attribute)
        payload.update(
            {
                "values": [self._serialize_value(row) for row in attribute.values],
                "xdm_details": [self._serialize_xdm(row) for row in attribute.xdm_details],
                "datasets": [self._serialize_dataset(row) for row in attribute.datasets],
                "lineage": [
                    self._serialize_lineage_ref(edge) for edge in lineage_crud.list_for_attribute(db, attribute.id)
                ],
            }
        )
        return create_response("Attribute fetched", payload, HTTP_STATUS_OK)

    def create_attribute(self, db: Session, *, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create an attribute; its path is the parent's path plus its own name."""
        name = self._normalize_required_text(payload.get("attribute_name"), "attribute_name")
        if PATH_SEPARATOR in name:
            raise AppException(f"attribute_name must not contain '{PATH_SEPARATOR}'", HTTP_STATUS_BAD_REQUEST)

        parent_id = payload.get("parent_id")
        parent_path = ""
        if parent_id is not None:
            parent = attribute_crud.get(db, parent_id)
            if parent is None:
                raise AppException("Parent attribute not found", HTTP_STATUS_NOT_FOUND)
            parent_path = parent.attribute_path

        attribute_path = f"{parent_path}{PATH_SEPARATOR}{name}" if parent_path else name
        if attribute_crud.get_by_path(db, attribute_path) is not None:
            raise AppException(f"Attribute path already exists: {attribute_path}", HTTP_STATUS_CONFLICT)

        values = {field: payload.get(field) for field in _UPDATABLE_FIELDS if payload.get(field) is not None}
        values.setdefault("display_name", format_name(name))
        created = attribute_crud.create(
            db,
            {
                **values,
                "attribute_name": name,
                "attribute_path": attribute_path,
                "parent_id": parent_id,
            },
        )
        return create_response("Attribute created", self._serialize_attribute(created), HTTP_STATUS_OK)

    def update_attribute(self, db: Session, *, attribute_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        attribute = self._get_attribute_or_404(db, attribute_id)
        for field in _UPDATABLE_FIELDS:
            if field in payload and payload[field] is not None:
                setattr(attribute, field, payload[field])
        if not (attribute.display_name or "").strip():
            attribute.display_name = format_name(attribute.attribute_name)
        saved = attribute_crud.save(db, attribute)
        return create_response("Attribute updated", self._serialize_attribute(saved), HTTP_STATUS_OK)

    def delete_attribute(self, db: Session, *, attribute_id: int) -> Dict[str, Any]:
        attribute = self._get_attribute_or_404(db, attribute_id)
        if attribute_crud.has_children(db, attribute.id):
            raise AppException("Attribute still has child attributes", HTTP_STATUS_BAD_REQUEST)

        for edge in lineage_crud.list_for_attribute(db, attribute.id):
            lineage_crud.delete(db, edge, auto_commit=False)
        attribute_crud.delete(db, attribute)
        return create_response("Attribute deleted", {"id": attribute_id}, HTTP_STATUS_OK)

    def export(self, db: Session, *, keyword: Optional[str] = None) -> StreamingResponse:
        _, total = attribute_crud.list_with_filters(db, keyword=keyword, parent_id=None, skip=0, limit=1)
        items, _ = attribute_crud.list_with_filters(
            db, keyword=keyword, parent_id=None, skip=0, limit=max(total, 1)
        )

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Attributes"
        sheet.append(
            [
                "ID",
                "Attribute Name",
                "Display Name",
                "Attribute Path",
                "Data Type",
                "Definition",
                "Data Classification",
                "Identity",
                "Historical Data",
                "Data Owner",
                "Data Steward",
                "Data Source",
                "Updated At",
            ]
        )
        for item in items:
            sheet.append(
                [
                    item.id,
                    item.attribute_name,
                    item.display_name,
                    item.attribute_path,
                    item.data_type or "",
                    item.definition or "",
                    item.data_classification or "",
                    "Yes" if item.is_identity else "No",
                    "Yes" if item.historical_data_enabled else "No",
                    item.data_owner or "",
                    item.data_steward or "",
                    item.data_source or "",
                    format_datetime(item.update_time),
                ]
            )

        buffer = io.BytesIO()
        workbook.save(buffer)
        buffer.seek(0)

        filename = export_filename("attributes")
        response = StreamingResponse(buffer, media_type=XLSX_MEDIA_TYPE)
        response.headers["Content-Disposition"] = f"attachment; filename={filename}"
        return response

    # ------------------------------------------------------------------
    # values, XDM details, datasets
    # ------------------------------------------------------------------

    def list_values(self, db: Session, *, attribute_id: int) -> Dict[str, Any]:
        self._get_attribute_or_404(db, attribute_id)
        rows = attribute_value_crud.list_by_attribute(db, attribute_id)
        return create_response("Attribute values fetched", [self._serialize_value(row) for row in rows], HTTP_STATUS_OK)

    def create_value(self, db: Session, *, attribute_id: int, value: str, is_sample: bool = True) -> Dict[str, Any]:
        self._get_attribute_or_404(db, attribute_id)
        created = attribute_value_crud.create(
            db, {"attribute_id": attribute_id, "value": value, "is_sample": is_sample}
        )
        return create_response("Attribute value created", self._serialize_value(created), HTTP_STATUS_OK)

    def delete_value(self, db: Session, *, attribute_id: int, value_id: int) -> Dict[str, Any]:
        row = attribute_value_crud.get_for_attribute(db, attribute_id, value_id)
        if row is None:
            raise AppException("Attribute value not found", HTTP_STATUS_NOT_FOUND)
        attribute_value_crud.delete(db, row)
        return create_response("Attribute value deleted", {"id": value_id}, HTTP_STATUS_OK)

    def list_xdm_details(self, db: Session, *, attribute_id: int) -> Dict[str, Any]:
        self._get_attribute_or_404(db, attribute_id)
        rows = xdm_detail_crud.list_by_attribute(db, attribute_id)
        return create_response("XDM details fetched", [self._serialize_xdm(row) for row in rows], HTTP_STATUS_OK)

    def create_xdm_detail(self, db: Session, *, attribute_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._get_attribute_or_404(db, attribute_id)
        created = xdm_detail_crud.create(
            db,
            {
                "attribute_id": attribute_id,
                "schema_name": self._normalize_required_text(payload.get("schema_name"), "schema_name"),
                "schema_url": payload.get("schema_url"),
                "field_group_name": payload.get("field_group_name"),
                "field_group_url": payload.get("field_group_url"),
                "xdm_data_type": payload.get("xdm_data_type"),
                "xdm_path": self._normalize_required_text(payload.get("xdm_path"), "xdm_path"),
            },
        )
        return create_response("XDM detail created", self._serialize_xdm(created), HTTP_STATUS_OK)

    def delete_xdm_detail(self, db: Session, *, attribute_id: int, detail_id: int) -> Dict[str, Any]:
        row = xdm_detail_crud.get_for_attribute(db, attribute_id, detail_id)
        if row is None:
            raise AppException("XDM detail not found", HTTP_STATUS_NOT_FOUND)
        xdm_detail_crud.delete(db, row)
        return create_response("XDM detail deleted", {"id": detail_id}, HTTP_STATUS_OK)

    def list_datasets(self, db: Session, *, attribute_id: int) -> Dict[str, Any]:
        self._get_attribute_or_404(db, attribute_id)
        rows = attribute_dataset_crud.list_by_attribute(db, attribute_id)
        return create_response("Datasets fetched", [self._serialize_dataset(row) for row in rows], HTTP_STATUS_OK)

    def create_dataset(self, db: Session, *, attribute_id: int, dataset_name: str) -> Dict[str, Any]:
        self._get_attribute_or_404(db, attribute_id)
        name = self._normalize_required_text(dataset_name, "dataset_name")
        if attribute_dataset_crud.get_by_name(db, attribute_id, name) is not None:
            raise AppException(f"Dataset already linked: {name}", HTTP_STATUS_CONFLICT)
        created = attribute_dataset_crud.create(db, {"attribute_id": attribute_id, "dataset_name": name})
        return create_response("Dataset created", self._serialize_dataset(created), HTTP_STATUS_OK)

    def delete_dataset(self, db: Session, *, attribute_id: int, dataset_id: int) -> Dict[str, Any]:
        row = attribute_dataset_crud.get_for_attribute(db, attribute_id, dataset_id)
        if row is None:
            raise AppException("Dataset not found", HTTP_STATUS_NOT_FOUND)
        attribute_dataset_crud.delete(db, row)
        return create_response("Dataset deleted", {"id": dataset_id}, HTTP_STATUS_OK)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _get_attribute_or_404(db: Session, attribute_id: int) -> Attribute:
        attribute = attribute_crud.get(db, attribute_id)
        if attribute is None:
            raise AppException("Attribute not found", HTTP_STATUS_NOT_FOUND)
        return attribute

    @staticmethod
    def _normalize_required_text(value: Optional[str], field_name: str) -> str:
        trimmed = (value or "").strip()
        if not trimmed:
            raise AppException(f"{field_name} must not be empty", HTTP_STATUS_BAD_REQUEST)
        return trimmed

    @staticmethod
    def _serialize_attribute(attribute: Attribute) -> Dict[str, Any]:
        return {
            "id": attribute.id,
            "attribute_name": attribute.attribute_name,
            "display_name": attribute.display_name,
            "attribute_path": attribute.attribute_path,
            "data_type": attribute.data_type,
            "definition": attribute.definition,
            "data_classification": attribute.data_classification,
            "is_identity": bool(attribute.is_identity),
            "historical_data_enabled": bool(attribute.historical_data_enabled),
            "data_owner": attribute.data_owner,
            "data_steward": attribute.data_steward,
            "data_source": attribute.data_source,
            "parent_id": attribute.parent_id,
            "create_time": format_datetime(attribute.create_time),
            "update_time": format_datetime(attribute.update_time),
        }

    @staticmethod
    def _serialize_value(row: AttributeValue) -> Dict[str, Any]:
        return {"id": row.id, "attribute_id": row.attribute_id, "value": row.value, "is_sample": bool(row.is_sample)}

    @staticmethod
    def _serialize_xdm(row: XdmDetail) -> Dict[str, Any]:
        return {
            "id": row.id,
            "attribute_id": row.attribute_id,
            "schema_name": row.schema_name,
            "schema_url": row.schema_url,
            "field_group_name": row.field_group_name,
            "field_group_url": row.field_group_url,
            "xdm_data_type": row.xdm_data_type,
            "xdm_path": row.xdm_path,
        }

    @staticmethod
    def _serialize_dataset(row: AttributeDataset) -> Dict[str, Any]:
        return {"id": row.id, "attribute_id": row.attribute_id, "dataset_name": row.dataset_name}

    @staticmethod
    def _serialize_lineage_ref(edge: AttributeLineage) -> Dict[str, Any]:
        return {
            "id": edge.id,
            "source_attribute_id": edge.source_attribute_id,
            "target_attribute_id": edge.target_attribute_id,
            "relationship_type": edge.relationship_type,
        }


attribute_service = AttributeService()
