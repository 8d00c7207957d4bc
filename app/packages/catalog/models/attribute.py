"""Attribute catalog models: attribute definitions and their per-attribute details.

``attribute_path`` is the ``/``-joined chain of attribute names from the root,
unique across the catalog; ``parent_id`` links the same hierarchy.
"""

from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.catalog.models.base import Base, TimestampMixin


class Attribute(TimestampMixin, Base):
    """A user-data attribute definition."""

    __tablename__ = "attributes"
    __table_args__ = (
        UniqueConstraint("attribute_path", name="uq_attributes_attribute_path"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    attribute_name: Mapped[str] = mapped_column(String(255), index=True)
    attribute_path: Mapped[str] = mapped_column(String(1024), index=True)
    display_name: Mapped[str] = mapped_column(String(255))
    data_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    definition: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_classification: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    is_identity: Mapped[bool] = mapped_column(Boolean, default=False)
    historical_data_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    data_owner: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    data_steward: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    data_source: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("attributes.id"), nullable=True, index=True
    )

    values: Mapped[List["AttributeValue"]] = relationship(
        back_populates="attribute", cascade="all, delete-orphan", order_by="AttributeValue.id"
    )
    xdm_details: Mapped[List["XdmDetail"]] = relationship(
        back_populates="attribute", cascade="all, delete-orphan", order_by="XdmDetail.id"
    )
    datasets: Mapped[List["AttributeDataset"]] = relationship(
        back_populates="attribute", cascade="all, delete-orphan", order_by="AttributeDataset.id"
    )


class AttributeValue(TimestampMixin, Base):
    """A (sample) value observed for an attribute."""

    __tablename__ = "attribute_values"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    attribute_id: Mapped[int] = mapped_column(Integer, ForeignKey("attributes.id"), index=True)
    value: Mapped[str] = mapped_column(Text)
    is_sample: Mapped[bool] = mapped_column(Boolean, default=True)

    attribute: Mapped[Attribute] = relationship(back_populates="values")


class XdmDetail(TimestampMixin, Base):
    """Where the attribute lives in the XDM schema."""

    __tablename__ = "xdm_details"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    attribute_id: Mapped[int] = mapped_column(Integer, ForeignKey("attributes.id"), index=True)
    schema_name: Mapped[str] = mapped_column(String(255))
    schema_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    field_group_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    field_group_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    xdm_data_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    xdm_path: Mapped[str] = mapped_column(String(1024), index=True)

    attribute: Mapped[Attribute] = relationship(back_populates="xdm_details")


class AttributeDataset(TimestampMixin, Base):
    """A dataset the attribute is published in."""

    __tablename__ = "attribute_datasets"
    __table_args__ = (
        UniqueConstraint("attribute_id", "dataset_name", name="uq_attribute_datasets_attribute_dataset"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    attribute_id: Mapped[int] = mapped_column(Integer, ForeignKey("attributes.id"), index=True)
    dataset_name: Mapped[str] = mapped_column(String(255))

    attribute: Mapped[Attribute] = relationship(back_populates="datasets")
