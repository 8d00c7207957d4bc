"""Lineage models: attribute-to-attribute relationships and how they are produced."""

from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.catalog.models.base import Base, TimestampMixin


class AttributeLineage(TimestampMixin, Base):
    """A directed edge ``source -> target`` between two attributes."""

    __tablename__ = "attribute_lineage"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    source_attribute_id: Mapped[int] = mapped_column(Integer, ForeignKey("attributes.id"), index=True)
    target_attribute_id: Mapped[int] = mapped_column(Integer, ForeignKey("attributes.id"), index=True)
    relationship_type: Mapped[str] = mapped_column(String(100))
    transformation_logic: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    steps: Mapped[List["LineageStep"]] = relationship(
        back_populates="lineage", cascade="all, delete-orphan", order_by="LineageStep.step_order"
    )
    systems: Mapped[List["LineageSystem"]] = relationship(
        back_populates="lineage", cascade="all, delete-orphan", order_by="LineageSystem.system_order"
    )


class LineageStep(TimestampMixin, Base):
    __tablename__ = "lineage_steps"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    lineage_id: Mapped[int] = mapped_column(Integer, ForeignKey("attribute_lineage.id"), index=True)
    step_order: Mapped[int] = mapped_column(Integer, default=0)
    step_type: Mapped[str] = mapped_column(String(100))
    step_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    step_logic: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    lineage: Mapped[AttributeLineage] = relationship(back_populates="steps")


class LineageSystem(TimestampMixin, Base):
    __tablename__ = "lineage_systems"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    lineage_id: Mapped[int] = mapped_column(Integer, ForeignKey("attribute_lineage.id"), index=True)
    system_name: Mapped[str] = mapped_column(String(255))
    system_role: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    system_order: Mapped[int] = mapped_column(Integer, default=0)

    lineage: Mapped[AttributeLineage] = relationship(back_populates="systems")
