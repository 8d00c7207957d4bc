"""Request and response models for attribute lineage."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope


class LineageCreateRequest(BaseModel):
    source_attribute_id: int = Field(..., description="Upstream attribute")
    target_attribute_id: int = Field(..., description="Downstream attribute")
    relationship_type: str = Field(..., min_length=1, description="e.g. derived_from, copied_to")
    transformation_logic: Optional[str] = None


class LineageStepCreateRequest(BaseModel):
    step_type: str = Field(..., min_length=1)
    step_order: Optional[int] = Field(default=None, ge=0, description="Defaults to the next position")
    step_description: Optional[str] = None
    step_logic: Optional[str] = None


class LineageSystemCreateRequest(BaseModel):
    system_name: str = Field(..., min_length=1)
    system_role: Optional[str] = None
    system_order: Optional[int] = Field(default=None, ge=0, description="Defaults to the next position")


class LineageStepItem(BaseModel):
    id: int
    lineage_id: int
    step_order: int
    step_type: str
    step_description: Optional[str]
    step_logic: Optional[str]


class LineageSystemItem(BaseModel):
    id: int
    lineage_id: int
    system_name: str
    system_role: Optional[str]
    system_order: int


class LineageItem(BaseModel):
    id: int
    source_attribute_id: int
    target_attribute_id: int
    relationship_type: str
    transformation_logic: Optional[str]
    steps: List[LineageStepItem]
    systems: List[LineageSystemItem]
    create_time: Optional[str]


LineageListResponse = ResponseEnvelope[List[LineageItem]]
LineageMutationResponse = ResponseEnvelope[LineageItem]
LineageStepListResponse = ResponseEnvelope[List[LineageStepItem]]
LineageStepMutationResponse = ResponseEnvelope[LineageStepItem]
LineageSystemListResponse = ResponseEnvelope[List[LineageSystemItem]]
LineageSystemMutationResponse = ResponseEnvelope[LineageSystemItem]
