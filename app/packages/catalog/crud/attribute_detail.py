"""Database access for per-attribute values, XDM details and datasets."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.packages.catalog.crud.base import CRUDBase, ModelType
from app.packages.catalog.models.attribute import AttributeDataset, AttributeValue, XdmDetail


class CRUDAttributeDetail(CRUDBase[ModelType]):
    """Detail rows all hang off ``attribute_id``."""

    def list_by_attribute(self, db: Session, attribute_id: int) -> List[ModelType]:
        return self.query(db).filter(self.model.attribute_id == attribute_id).order_by(self.model.id.asc()).all()

    def group_by_attribute(self, db: Session, attribute_ids: Iterable[int]) -> Dict[int, List[ModelType]]:
        """Load detail rows for many attributes in one query."""
        ids = list(attribute_ids)
        grouped: Dict[int, List[ModelType]] = {attribute_id: [] for attribute_id in ids}
        if not ids:
            return grouped
        rows = self.query(db).filter(self.model.attribute_id.in_(ids)).order_by(self.model.id.asc()).all()
        for row in rows:
            grouped.setdefault(row.attribute_id, []).append(row)
        return grouped

    def get_for_attribute(self, db: Session, attribute_id: int, detail_id: int) -> Optional[ModelType]:
        return (
            self.query(db)
            .filter(self.model.id == detail_id, self.model.attribute_id == attribute_id)
            .first()
        )


class CRUDAttributeDataset(CRUDAttributeDetail[AttributeDataset]):
    def get_by_name(self, db: Session, attribute_id: int, dataset_name: str) -> Optional[AttributeDataset]:
        return (
            self.query(db)
            .filter(self.model.attribute_id == attribute_id, self.model.dataset_name == dataset_name)
            .first()
        )


attribute_value_crud = CRUDAttributeDetail(AttributeValue)
xdm_detail_crud = CRUDAttributeDetail(XdmDetail)
attribute_dataset_crud = CRUDAttributeDataset(AttributeDataset)
