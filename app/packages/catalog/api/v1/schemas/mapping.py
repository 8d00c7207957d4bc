"""Request and response models for the raw → transformed path mapping table."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope
from app.packages.catalog.core.constants import PATH_SEPARATOR
from app.packages.catalog.utils.path_mapper import PathLevels


class PathLevelsModel(BaseModel):
    level1: str = Field(default="", description="First transformed path segment")
    level2: str = ""
    level3: str = ""
    level4: str = ""
    level5: str = Field(default="", description="Remaining segments, may contain '/'")

    @model_validator(mode="after")
    def _validate_levels(self) -> "PathLevelsModel":
        values = [getattr(self, key).strip() for key in ("level1", "level2", "level3", "level4", "level5")]
        for key, value in zip(("level1", "level2", "level3", "level4"), values):
            if PATH_SEPARATOR in value:
                raise ValueError(f"{key} must be a single path segment")
        if not any(values):
            raise ValueError("At least one level is required")
        return self

    def to_levels(self) -> PathLevels:
        return PathLevels.from_mapping(self.model_dump())


class MappingUpdateRequest(BaseModel):
    levels: PathLevelsModel


class MappingCreateRequest(BaseModel):
    raw_path: str = Field(..., min_length=1, description="Slash-joined path in the raw schema")
    levels: PathLevelsModel
    description: Optional[str] = None
    data_type: Optional[str] = None

    @model_validator(mode="after")
    def _normalize_raw_path(self) -> "MappingCreateRequest":
        self.raw_path = self.raw_path.strip().strip(PATH_SEPARATOR)
        if not self.raw_path:
            raise ValueError("raw_path must not be empty")
        return self


class TransformRequest(BaseModel):
    data: Optional[Dict[str, Any]] = Field(
        default=None, description="Raw document to transform; the seed raw user data when omitted"
    )


class LevelsItem(BaseModel):
    level1: str
    level2: str
    level3: str
    level4: str
    level5: str


class MappingItem(BaseModel):
    id: str
    raw_path: str
    transformed_path: str
    levels: LevelsItem
    description: Optional[str]
    data_type: Optional[str]


class ResolvedPathItem(BaseModel):
    raw_path: str
    transformed_path: str
    levels: LevelsItem
    mapping_id: Optional[str] = None


class RawPathItem(ResolvedPathItem):
    is_mapped: bool


MappingListResponse = ResponseEnvelope[List[MappingItem]]
MappingMutationResponse = ResponseEnvelope[MappingItem]
LevelValuesResponse = ResponseEnvelope[List[str]]
ResolvedPathResponse = ResponseEnvelope[ResolvedPathItem]
LevelsResponse = ResponseEnvelope[LevelsItem]
RawPathListResponse = ResponseEnvelope[List[RawPathItem]]
TransformResponse = ResponseEnvelope[Dict[str, Any]]


class ApplyValueRequest(BaseModel):
    raw_path: str = Field(..., min_length=1)
    value: Any = Field(default=None, description="Value written at the mapped transformed path")


class ApplyValuePayload(BaseModel):
    raw_path: str
    transformed_path: str
    applied: bool


ApplyValueResponse = ResponseEnvelope[ApplyValuePayload]
