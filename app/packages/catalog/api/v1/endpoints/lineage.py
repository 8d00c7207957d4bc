"""Attribute lineage routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.packages.catalog.api.v1.schemas.common import DeletionResponse
from app.packages.catalog.api.v1.schemas.lineage import (
    LineageCreateRequest,
    LineageMutationResponse,
    LineageStepCreateRequest,
    LineageStepListResponse,
    LineageStepMutationResponse,
    LineageSystemCreateRequest,
    LineageSystemListResponse,
    LineageSystemMutationResponse,
)
from app.packages.catalog.core.dependencies import get_db
from app.packages.catalog.services.lineage_service import lineage_service

router = APIRouter(prefix="/lineage", tags=["lineage"])


@router.post("", response_model=LineageMutationResponse)
def create_lineage(payload: LineageCreateRequest, db: Session = Depends(get_db)) -> LineageMutationResponse:
    return lineage_service.create_lineage(
        db,
        source_attribute_id=payload.source_attribute_id,
        target_attribute_id=payload.target_attribute_id,
        relationship_type=payload.relationship_type,
        transformation_logic=payload.transformation_logic,
    )


@router.get("/{lineage_id}", response_model=LineageMutationResponse)
def get_lineage(lineage_id: int, db: Session = Depends(get_db)) -> LineageMutationResponse:
    return lineage_service.get_lineage(db, lineage_id=lineage_id)


@router.delete("/{lineage_id}", response_model=DeletionResponse)
def delete_lineage(lineage_id: int, db: Session = Depends(get_db)) -> DeletionResponse:
    return lineage_service.delete_lineage(db, lineage_id=lineage_id)


@router.get("/{lineage_id}/steps", response_model=LineageStepListResponse)
def list_lineage_steps(lineage_id: int, db: Session = Depends(get_db)) -> LineageStepListResponse:
    return lineage_service.list_steps(db, lineage_id=lineage_id)


@router.post("/{lineage_id}/steps", response_model=LineageStepMutationResponse)
def create_lineage_step(
    lineage_id: int,
    payload: LineageStepCreateRequest,
    db: Session = Depends(get_db),
) -> LineageStepMutationResponse:
    return lineage_service.create_step(db, lineage_id=lineage_id, payload=payload.model_dump())


@router.get("/{lineage_id}/systems", response_model=LineageSystemListResponse)
def list_lineage_systems(lineage_id: int, db: Session = Depends(get_db)) -> LineageSystemListResponse:
    return lineage_service.list_systems(db, lineage_id=lineage_id)


@router.post("/{lineage_id}/systems", response_model=LineageSystemMutationResponse)
def create_lineage_system(
    lineage_id: int,
    payload: LineageSystemCreateRequest,
    db: Session = Depends(get_db),
) -> LineageSystemMutationResponse:
    return lineage_service.create_system(db, lineage_id=lineage_id, payload=payload.model_dump())
