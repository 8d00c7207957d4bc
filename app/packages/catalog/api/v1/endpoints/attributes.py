"""Attribute catalog routes."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.packages.catalog.api.v1.schemas.attribute import (
    AttributeCreateRequest,
    AttributeDetailResponse,
    AttributeListResponse,
    AttributeMutationResponse,
    AttributeTreeResponse,
    AttributeUpdateRequest,
    AttributeValueCreateRequest,
    AttributeValueListResponse,
    AttributeValueMutationResponse,
    DatasetCreateRequest,
    DatasetListResponse,
    DatasetMutationResponse,
    XdmDetailCreateRequest,
    XdmDetailListResponse,
    XdmDetailMutationResponse,
)
from app.packages.catalog.api.v1.schemas.common import DeletionResponse
from app.packages.catalog.api.v1.schemas.lineage import LineageListResponse
from app.packages.catalog.core.constants import MAX_PAGE_SIZE
from app.packages.catalog.core.dependencies import get_db
from app.packages.catalog.services.attribute_service import attribute_service
from app.packages.catalog.services.lineage_service import lineage_service

router = APIRouter(prefix="/attributes", tags=["attributes"])


@router.get("", response_model=AttributeListResponse)
def list_attributes(
    keyword: Optional[str] = Query(None, description="Match on name, display name, path or definition"),
    parent_id: Optional[int] = Query(None, description="Only direct children of this attribute"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
) -> AttributeListResponse:
    return attribute_service.list_attributes(db, keyword=keyword, parent_id=parent_id, page=page, size=size)


@router.get("/tree", response_model=AttributeTreeResponse)
def get_attribute_tree(db: Session = Depends(get_db)) -> AttributeTreeResponse:
    """Whole catalog nested by parent, with values, XDM details, datasets and lineage."""
    return attribute_service.list_tree(db)


@router.get("/export")
def export_attributes(
    keyword: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> StreamingResponse:
    return attribute_service.export(db, keyword=keyword)


@router.post("", response_model=AttributeMutationResponse)
def create_attribute(payload: AttributeCreateRequest, db: Session = Depends(get_db)) -> AttributeMutationResponse:
    return attribute_service.create_attribute(db, payload=payload.model_dump())


@router.get("/{attribute_id}", response_model=AttributeDetailResponse)
def get_attribute(attribute_id: int, db: Session = Depends(get_db)) -> AttributeDetailResponse:
    return attribute_service.get_attribute(db, attribute_id=attribute_id)


@router.put("/{attribute_id}", response_model=AttributeMutationResponse)
def update_attribute(
    attribute_id: int,
    payload: AttributeUpdateRequest,
    db: Session = Depends(get_db),
) -> AttributeMutationResponse:
    return attribute_service.update_attribute(
        db, attribute_id=attribute_id, payload=payload.model_dump(exclude_unset=True)
    )


@router.delete("/{attribute_id}", response_model=DeletionResponse)
def delete_attribute(attribute_id: int, db: Session = Depends(get_db)) -> DeletionResponse:
    """Delete a leaf attribute together with its values, XDM details, datasets and lineage."""
    return attribute_service.delete_attribute(db, attribute_id=attribute_id)


@router.get("/{attribute_id}/lineage", response_model=LineageListResponse)
def list_attribute_lineage(attribute_id: int, db: Session = Depends(get_db)) -> LineageListResponse:
    return lineage_service.list_for_attribute(db, attribute_id=attribute_id)


# ---------------------------------------------------------------------------
# values
# ---------------------------------------------------------------------------


@router.get("/{attribute_id}/values", response_model=AttributeValueListResponse)
def list_attribute_values(attribute_id: int, db: Session = Depends(get_db)) -> AttributeValueListResponse:
    return attribute_service.list_values(db, attribute_id=attribute_id)


@router.post("/{attribute_id}/values", response_model=AttributeValueMutationResponse)
def create_attribute_value(
    attribute_id: int,
    payload: AttributeValueCreateRequest,
    db: Session = Depends(get_db),
) -> AttributeValueMutationResponse:
    return attribute_service.create_value(
        db, attribute_id=attribute_id, value=payload.value, is_sample=payload.is_sample
    )


@router.delete("/{attribute_id}/values/{value_id}", response_model=DeletionResponse)
def delete_attribute_value(attribute_id: int, value_id: int, db: Session = Depends(get_db)) -> DeletionResponse:
    return attribute_service.delete_value(db, attribute_id=attribute_id, value_id=value_id)


# ---------------------------------------------------------------------------
# XDM details
# ---------------------------------------------------------------------------


@router.get("/{attribute_id}/xdm-details", response_model=XdmDetailListResponse)
def list_xdm_details(attribute_id: int, db: Session = Depends(get_db)) -> XdmDetailListResponse:
    return attribute_service.list_xdm_details(db, attribute_id=attribute_id)


@router.post("/{attribute_id}/xdm-details", response_model=XdmDetailMutationResponse)
def create_xdm_detail(
    attribute_id: int,
    payload: XdmDetailCreateRequest,
    db: Session = Depends(get_db),
) -> XdmDetailMutationResponse:
    return attribute_service.create_xdm_detail(db, attribute_id=attribute_id, payload=payload.model_dump())


@router.delete("/{attribute_id}/xdm-details/{detail_id}", response_model=DeletionResponse)
def delete_xdm_detail(attribute_id: int, detail_id: int, db: Session = Depends(get_db)) -> DeletionResponse:
    return attribute_service.delete_xdm_detail(db, attribute_id=attribute_id, detail_id=detail_id)


# ---------------------------------------------------------------------------
# datasets
# ---------------------------------------------------------------------------


@router.get("/{attribute_id}/datasets", response_model=DatasetListResponse)
def list_datasets(attribute_id: int, db: Session = Depends(get_db)) -> DatasetListResponse:
    return attribute_service.list_datasets(db, attribute_id=attribute_id)


@router.post("/{attribute_id}/datasets", response_model=DatasetMutationResponse)
def create_dataset(
    attribute_id: int,
    payload: DatasetCreateRequest,
    db: Session = Depends(get_db),
) -> DatasetMutationResponse:
    return attribute_service.create_dataset(db, attribute_id=attribute_id, dataset_name=payload.dataset_name)


@router.delete("/{attribute_id}/datasets/{dataset_id}", response_model=DeletionResponse)
def delete_dataset(attribute_id: int, dataset_id: int, db: Session = Depends(get_db)) -> DeletionResponse:
    return attribute_service.delete_dataset(db, attribute_id=attribute_id, dataset_id=dataset_id)
