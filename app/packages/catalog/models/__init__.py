"""Model package: importing it registers every ORM entity on the shared metadata."""

from app.packages.catalog.models.attribute import Attribute, AttributeDataset, AttributeValue, XdmDetail
from app.packages.catalog.models.lineage import AttributeLineage, LineageStep, LineageSystem

__all__ = [
    "Attribute",
    "AttributeDataset",
    "AttributeValue",
    "XdmDetail",
    "AttributeLineage",
    "LineageStep",
    "LineageSystem",
]
