"""Database access for attribute lineage and its steps and systems."""

from __future__ import annotations

from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.packages.catalog.crud.base import CRUDBase
from app.packages.catalog.models.lineage import AttributeLineage, LineageStep, LineageSystem


class CRUDLineage(CRUDBase[AttributeLineage]):
    def list_for_attribute(self, db: Session, attribute_id: int) -> List[AttributeLineage]:
        """Lineage edges where the attribute is either the source or the target."""
        return (
            self.query(db)
            .filter(
                or_(
                    self.model.source_attribute_id == attribute_id,
                    self.model.target_attribute_id == attribute_id,
                )
            )
            .order_by(self.model.id.asc())
            .all()
        )


class CRUDLineageStep(CRUDBase[LineageStep]):
    def list_by_lineage(self, db: Session, lineage_id: int) -> List[LineageStep]:
        return (
            self.query(db)
            .filter(self.model.lineage_id == lineage_id)
            .order_by(self.model.step_order.asc(), self.model.id.asc())
            .all()
        )


class CRUDLineageSystem(CRUDBase[LineageSystem]):
    def list_by_lineage(self, db: Session, lineage_id: int) -> List[LineageSystem]:
        return (
            self.query(db)
            .filter(self.model.lineage_id == lineage_id)
            .order_by(self.model.system_order.asc(), self.model.id.asc())
            .all()
        )


lineage_crud = CRUDLineage(AttributeLineage)
lineage_step_crud = CRUDLineageStep(LineageStep)
lineage_system_crud = CRUDLineageSystem(LineageSystem)
