"""Response models for the attribute browser tree."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope
from app.packages.catalog.core.enums import TreeSourceEnum


class TreeNodeItem(BaseModel):
    id: str
    name: str
    type: str
    level: int
    path: Optional[str] = None
    value: Any = None
    parent_id: Optional[str] = None
    is_expanded: bool = False
    is_selected: bool = False
    description: Optional[str] = None
    data_owner: Optional[str] = None
    data_source: Optional[str] = None
    latency: Optional[str] = None
    xdm_path: Optional[str] = None
    importance: Optional[str] = None
    category: Optional[str] = None
    data_type: Optional[str] = None
    last_updated: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)
    children: Optional[List["TreeNodeItem"]] = None


class FlatNodeItem(BaseModel):
    node: TreeNodeItem
    children_ids: List[str]


class TreeRebuildRequest(BaseModel):
    source: TreeSourceEnum = Field(
        default=TreeSourceEnum.SEED,
        description="'seed' uses the stored transformed document, 'mapped' runs raw data through the mappings",
    )


class TreeRebuildPayload(BaseModel):
    source: TreeSourceEnum
    root_count: int
    node_count: int


TreeNodeItem.model_rebuild()

TreeResponse = ResponseEnvelope[List[TreeNodeItem]]
TreeNodeResponse = ResponseEnvelope[TreeNodeItem]
TreeNodeListResponse = ResponseEnvelope[List[TreeNodeItem]]
FlatNodeListResponse = ResponseEnvelope[List[FlatNodeItem]]
TreeRebuildResponse = ResponseEnvelope[TreeRebuildPayload]
