"""Request and response models for attributes and their values, XDM details and datasets."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope


class AttributeFields(BaseModel):
    """Editable attribute columns."""

    display_name: Optional[str] = Field(default=None, description="Label shown in the UI")
    data_type: Optional[str] = Field(default=None, description="Data type, e.g. string or number")
    definition: Optional[str] = Field(default=None, description="Business definition")
    data_classification: Optional[str] = Field(default=None, description="Classification such as PII")
    is_identity: Optional[bool] = Field(default=None, description="Whether the attribute identifies a person")
    historical_data_enabled: Optional[bool] = Field(default=None, description="Whether history is retained")
    data_owner: Optional[str] = Field(default=None)
    data_steward: Optional[str] = Field(default=None)
    data_source: Optional[str] = Field(default=None)

    @model_validator(mode="after")
    def _strip_text(self) -> "AttributeFields":
        for name in ("display_name", "data_type", "definition", "data_classification", "data_owner", "data_steward", "data_source"):
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, value.strip() or None)
        return self


class AttributeCreateRequest(AttributeFields):
    attribute_name: str = Field(..., min_length=1, description="Key of the attribute within its parent")
    parent_id: Optional[int] = Field(default=None, description="Parent attribute id; omitted for roots")

    @model_validator(mode="after")
    def _normalize_name(self) -> "AttributeCreateRequest":
        self.attribute_name = self.attribute_name.strip()
        if not self.attribute_name:
            raise ValueError("attribute_name must not be empty")
        return self


class AttributeUpdateRequest(AttributeFields):
    """Attribute name and parent are fixed once created."""


class AttributeItem(BaseModel):
    id: int
    attribute_name: str
    display_name: str
    attribute_path: str
    data_type: Optional[str]
    definition: Optional[str]
    data_classification: Optional[str]
    is_identity: bool
    historical_data_enabled: bool
    data_owner: Optional[str]
    data_steward: Optional[str]
    data_source: Optional[str]
    parent_id: Optional[int]
    create_time: Optional[str]
    update_time: Optional[str]


class AttributeValueCreateRequest(BaseModel):
    value: str = Field(..., description="Observed value, stored as text")
    is_sample: bool = Field(default=True)


class AttributeValueItem(BaseModel):
    id: int
    attribute_id: int
    value: str
    is_sample: bool


class XdmDetailCreateRequest(BaseModel):
    schema_name: str = Field(..., min_length=1)
    xdm_path: str = Field(..., min_length=1, description="Dotted XDM field path")
    schema_url: Optional[str] = None
    field_group_name: Optional[str] = None
    field_group_url: Optional[str] = None
    xdm_data_type: Optional[str] = None


class XdmDetailItem(BaseModel):
    id: int
    attribute_id: int
    schema_name: str
    schema_url: Optional[str]
    field_group_name: Optional[str]
    field_group_url: Optional[str]
    xdm_data_type: Optional[str]
    xdm_path: str


class DatasetCreateRequest(BaseModel):
    dataset_name: str = Field(..., min_length=1)


class DatasetItem(BaseModel):
    id: int
    attribute_id: int
    dataset_name: str


class LineageRef(BaseModel):
    id: int
    source_attribute_id: int
    target_attribute_id: int
    relationship_type: str


class AttributeDetail(AttributeItem):
    values: List[AttributeValueItem] = Field(default_factory=list)
    xdm_details: List[XdmDetailItem] = Field(default_factory=list)
    datasets: List[DatasetItem] = Field(default_factory=list)
    lineage: List[LineageRef] = Field(default_factory=list)


class AttributeTreeNode(AttributeDetail):
    children: List["AttributeTreeNode"] = Field(default_factory=list)


class AttributeListPayload(BaseModel):
    total: int
    page: int
    size: int
    list: List[AttributeItem]


AttributeTreeNode.model_rebuild()

AttributeListResponse = ResponseEnvelope[AttributeListPayload]
AttributeTreeResponse = ResponseEnvelope[List[AttributeTreeNode]]
AttributeDetailResponse = ResponseEnvelope[AttributeDetail]
AttributeMutationResponse = ResponseEnvelope[AttributeItem]
AttributeValueListResponse = ResponseEnvelope[List[AttributeValueItem]]
AttributeValueMutationResponse = ResponseEnvelope[AttributeValueItem]
XdmDetailListResponse = ResponseEnvelope[List[XdmDetailItem]]
XdmDetailMutationResponse = ResponseEnvelope[XdmDetailItem]
DatasetListResponse = ResponseEnvelope[List[DatasetItem]]
DatasetMutationResponse = ResponseEnvelope[DatasetItem]
