"""Database access for attribute definitions."""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.packages.catalog.crud.base import CRUDBase
from app.packages.catalog.models.attribute import Attribute


class CRUDAttribute(CRUDBase[Attribute]):
    def get_by_path(self, db: Session, attribute_path: str, *, exclude_id: Optional[int] = None) -> Optional[Attribute]:
        query = self.query(db).filter(self.model.attribute_path == attribute_path)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return query.first()

    def list_with_filters(
        self,
        db: Session,
        *,
        keyword: Optional[str],
        parent_id: Optional[int],
        skip: int,
        limit: int,
    ) -> Tuple[List[Attribute], int]:
        """Paged attributes matching ``keyword`` on name, display name, path or definition."""
        query = self.query(db)
        if parent_id is not None:
            query = query.filter(self.model.parent_id == parent_id)

        if keyword:
            trimmed = keyword.strip()
            if trimmed:
                pattern = f"%{trimmed}%"
                query = query.filter(
                    or_(
                        self.model.attribute_name.ilike(pattern),
                        self.model.display_name.ilike(pattern),
                        self.model.attribute_path.ilike(pattern),
                        self.model.definition.ilike(pattern),
                    )
                )

        total = query.count()
        items = (
            query.order_by(self.model.attribute_path.asc(), self.model.id.asc())
            .offset(max(skip, 0))
            .limit(max(limit, 1))
            .all()
        )
        return items, total

    def list_all(self, db: Session) -> List[Attribute]:
        return self.query(db).order_by(self.model.attribute_path.asc()).all()

    def has_children(self, db: Session, attribute_id: int) -> bool:
        return self.query(db).filter(self.model.parent_id == attribute_id).first() is not None

    def count(self, db: Session) -> int:
        return self.query(db).count()


attribute_crud = CRUDAttribute(Attribute)
