"""Lineage service: directed relationships between attributes plus their steps and systems."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.packages.catalog.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_NOT_FOUND, HTTP_STATUS_OK
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.core.timezone import format_datetime
from app.packages.catalog.crud.attribute import attribute_crud
from app.packages.catalog.crud.lineage import lineage_crud, lineage_step_crud, lineage_system_crud
from app.packages.catalog.models.lineage import AttributeLineage, LineageStep, LineageSystem


class LineageService:
    def list_for_attribute(self, db: Session, *, attribute_id: int) -> Dict[str, Any]:
        """Edges where the attribute is the source or the target, steps and systems included."""
        if attribute_crud.get(db, attribute_id) is None:
            raise AppException("Attribute not found", HTTP_STATUS_NOT_FOUND)
        edges = lineage_crud.list_for_attribute(db, attribute_id)
        return create_response("Lineage fetched", [self._serialize_lineage(edge) for edge in edges], HTTP_STATUS_OK)

    def get_lineage(self, db: Session, *, lineage_id: int) -> Dict[str, Any]:
        edge = self._get_lineage_or_404(db, lineage_id)
        return create_response("Lineage fetched", self._serialize_lineage(edge), HTTP_STATUS_OK)

    def create_lineage(
        self,
        db: Session,
        *,
        source_attribute_id: int,
        target_attribute_id: int,
        relationship_type: str,
        transformation_logic: Optional[str] = None,
    ) -> Dict[str, Any]:
        if source_attribute_id == target_attribute_id:
            raise AppException("Source and target attributes must differ", HTTP_STATUS_BAD_REQUEST)
        for attribute_id in (source_attribute_id, target_attribute_id):
            if attribute_crud.get(db, attribute_id) is None:
                raise AppException(f"Attribute {attribute_id} not found", HTTP_STATUS_NOT_FOUND)

        relationship = (relationship_type or "").strip()
        if not relationship:
            raise AppException("relationship_type must not be empty", HTTP_STATUS_BAD_REQUEST)

        created = lineage_crud.create(
            db,
            {
                "source_attribute_id": source_attribute_id,
                "target_attribute_id": target_attribute_id,
                "relationship_type": relationship,
                "transformation_logic": transformation_logic,
            },
        )
        return create_response("Lineage created", self._serialize_lineage(created), HTTP_STATUS_OK)

    def delete_lineage(self, db: Session, *, lineage_id: int) -> Dict[str, Any]:
        edge = self._get_lineage_or_404(db, lineage_id)
        lineage_crud.delete(db, edge)
        return create_response("Lineage deleted", {"id": lineage_id}, HTTP_STATUS_OK)

    def list_steps(self, db: Session, *, lineage_id: int) -> Dict[str, Any]:
        self._get_lineage_or_404(db, lineage_id)
        rows = lineage_step_crud.list_by_lineage(db, lineage_id)
        return create_response("Lineage steps fetched", [self._serialize_step(row) for row in rows], HTTP_STATUS_OK)

    def create_step(self, db: Session, *, lineage_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._get_lineage_or_404(db, lineage_id)
        step_order = payload.get("step_order")
        if step_order is None:
            step_order = len(lineage_step_crud.list_by_lineage(db, lineage_id)) + 1
        created = lineage_step_crud.create(
            db,
            {
                "lineage_id": lineage_id,
                "step_order": step_order,
                "step_type": payload["step_type"],
                "step_description": payload.get("step_description"),
                "step_logic": payload.get("step_logic"),
            },
        )
        return create_response("Lineage step created", self._serialize_step(created), HTTP_STATUS_OK)

    def list_systems(self, db: Session, *, lineage_id: int) -> Dict[str, Any]:
        self._get_lineage_or_404(db, lineage_id)
        rows = lineage_system_crud.list_by_lineage(db, lineage_id)
        return create_response("Lineage systems fetched", [self._serialize_system(row) for row in rows], HTTP_STATUS_OK)

    def create_system(self, db: Session, *, lineage_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._get_lineage_or_404(db, lineage_id)
        system_order = payload.get("system_order")
        if system_order is None:
            system_order = len(lineage_system_crud.list_by_lineage(db, lineage_id)) + 1
        created = lineage_system_crud.create(
            db,
            {
                "lineage_id": lineage_id,
                "system_name": payload["system_name"],
                "system_role": payload.get("system_role"),
                "system_order": system_order,
            },
        )
        return create_response("Lineage system created", self._serialize_system(created), HTTP_STATUS_OK)

    # ------------------------------------------------------------------

    @staticmethod
    def _get_lineage_or_404(db: Session, lineage_id: int) -> AttributeLineage:
        edge = lineage_crud.get(db, lineage_id)
        if edge is None:
            raise AppException("Lineage not found", HTTP_STATUS_NOT_FOUND)
        return edge

    def _serialize_lineage(self, edge: AttributeLineage) -> Dict[str, Any]:
        return {
            "id": edge.id,
            "source_attribute_id": edge.source_attribute_id,
            "target_attribute_id": edge.target_attribute_id,
            "relationship_type": edge.relationship_type,
            "transformation_logic": edge.transformation_logic,
            "steps": [self._serialize_step(step) for step in edge.steps],
            "systems": [self._serialize_system(system) for system in edge.systems],
            "create_time": format_datetime(edge.create_time),
        }

    @staticmethod
    def _serialize_step(row: LineageStep) -> Dict[str, Any]:
        return {
            "id": row.id,
            "lineage_id": row.lineage_id,
            "step_order": row.step_order,
            "step_type": row.step_type,
            "step_description": row.step_description,
            "step_logic": row.step_logic,
        }

    @staticmethod
    def _serialize_system(row: LineageSystem) -> Dict[str, Any]:
        return {
            "id": row.id,
            "lineage_id": row.lineage_id,
            "system_name": row.system_name,
            "system_role": row.system_role,
            "system_order": row.system_order,
        }


lineage_service = LineageService()
