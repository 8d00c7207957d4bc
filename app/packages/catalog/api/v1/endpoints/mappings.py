"""Raw → transformed path mapping routes backed by the in-memory workspace."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from app.packages.catalog.api.v1.schemas.mapping import (
    ApplyValueRequest,
    ApplyValueResponse,
    LevelsResponse,
    LevelValuesResponse,
    MappingCreateRequest,
    MappingListResponse,
    MappingMutationResponse,
    MappingUpdateRequest,
    RawPathListResponse,
    ResolvedPathResponse,
    TransformRequest,
    TransformResponse,
)
from app.packages.catalog.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_CONFLICT, HTTP_STATUS_NOT_FOUND, XLSX_MEDIA_TYPE
from app.packages.catalog.core.dependencies import get_workspace
from app.packages.catalog.core.enums import PathLevelEnum
from app.packages.catalog.core.exceptions import AppException
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.core.timezone import export_filename
from app.packages.catalog.services.workspace import CatalogWorkspace

router = APIRouter(prefix="/path-mappings", tags=["path-mappings"])


@router.get("", response_model=MappingListResponse)
def list_mappings(
    level: Optional[PathLevelEnum] = Query(None, description="Filter on this level column"),
    value: Optional[str] = Query(None, description="Exact level value, required with level"),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> MappingListResponse:
    service = workspace.mapping_service
    if level is not None:
        if value is None:
            raise AppException("value is required when filtering by level", HTTP_STATUS_BAD_REQUEST)
        mappings = service.get_mappings_by_level(level, value)
    else:
        mappings = service.get_all_mappings()
    return create_response("Path mappings fetched", [mapping.as_dict() for mapping in mappings])


@router.get("/levels/{level}/values", response_model=LevelValuesResponse)
def list_level_values(
    level: PathLevelEnum,
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> LevelValuesResponse:
    """Distinct non-empty values of one level column, sorted."""
    return create_response("Level values fetched", workspace.mapping_service.get_unique_values_for_level(level))


@router.get("/resolve", response_model=ResolvedPathResponse)
def resolve_path(
    raw_path: str = Query(..., min_length=1),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> ResolvedPathResponse:
    """Exact mapping first, then the longest mapped prefix, otherwise the path itself."""
    service = workspace.mapping_service
    transformed = service.resolve(raw_path)
    mapping = service.get_mapping_by_raw_path(raw_path)
    payload = {
        "raw_path": raw_path,
        "transformed_path": transformed,
        "levels": service.split_into_levels(transformed).as_dict(),
        "mapping_id": mapping.id if mapping else None,
    }
    return create_response("Path resolved", payload)


@router.get("/split", response_model=LevelsResponse)
def split_path(
    path: str = Query(..., description="Transformed path to split into level columns"),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> LevelsResponse:
    return create_response("Path split", workspace.mapping_service.split_into_levels(path).as_dict())


@router.get("/lookup", response_model=MappingMutationResponse)
def lookup_mapping(
    raw_path: Optional[str] = Query(None),
    transformed_path: Optional[str] = Query(None),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> MappingMutationResponse:
    service = workspace.mapping_service
    if raw_path:
        mapping = service.get_mapping_by_raw_path(raw_path)
    elif transformed_path:
        mapping = service.get_mapping_by_transformed_path(transformed_path)
    else:
        raise AppException("raw_path or transformed_path is required", HTTP_STATUS_BAD_REQUEST)
    if mapping is None:
        raise AppException("Path mapping not found", HTTP_STATUS_NOT_FOUND)
    return create_response("Path mapping fetched", mapping.as_dict())


@router.get("/raw-paths", response_model=RawPathListResponse)
def list_raw_paths(
    leaf_only: bool = Query(True),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> RawPathListResponse:
    """Every path of the raw user document with where it lands after mapping."""
    rows = workspace.mapping_service.describe_raw_paths(workspace.raw_user_data, leaf_only=leaf_only)
    return create_response("Raw paths fetched", rows)


@router.post("/transform", response_model=TransformResponse)
def transform_raw_data(
    payload: TransformRequest,
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> TransformResponse:
    raw = payload.data if payload.data is not None else workspace.raw_user_data
    return create_response("Raw data transformed", workspace.mapping_service.transform_raw_data(raw))


@router.post("/apply-value", response_model=ApplyValueResponse)
def apply_value(
    payload: ApplyValueRequest,
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> ApplyValueResponse:
    """Write a value into the transformed schema at the target of ``raw_path``'s mapping."""
    service = workspace.mapping_service
    mapping = service.get_mapping_by_raw_path(payload.raw_path)
    if mapping is None:
        raise AppException("Path mapping not found", HTTP_STATUS_NOT_FOUND)
    applied = service.apply_value_to_transformed_schema(payload.raw_path, payload.value)
    return create_response(
        "Value applied" if applied else "Value not applied",
        {"raw_path": payload.raw_path, "transformed_path": mapping.transformed_path, "applied": applied},
    )


@router.get("/export")
def export_mappings(workspace: CatalogWorkspace = Depends(get_workspace)) -> StreamingResponse:
    buffer = workspace.mapping_service.export_workbook()
    filename = export_filename("path-mappings")
    response = StreamingResponse(buffer, media_type=XLSX_MEDIA_TYPE)
    response.headers["Content-Disposition"] = f"attachment; filename={filename}"
    return response


@router.post("", response_model=MappingMutationResponse)
def create_mapping(
    payload: MappingCreateRequest,
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> MappingMutationResponse:
    service = workspace.mapping_service
    if service.get_mapping_by_raw_path(payload.raw_path) is not None:
        raise AppException(f"Raw path is already mapped: {payload.raw_path}", HTTP_STATUS_CONFLICT)
    created = service.add_mapping(
        payload.raw_path,
        payload.levels.to_levels(),
        description=payload.description,
        data_type=payload.data_type,
    )
    if created is None:
        raise AppException(f"Raw path does not exist in the raw schema: {payload.raw_path}", HTTP_STATUS_BAD_REQUEST)
    return create_response("Path mapping created", created.as_dict())


@router.get("/{mapping_id}", response_model=MappingMutationResponse)
def get_mapping(mapping_id: str, workspace: CatalogWorkspace = Depends(get_workspace)) -> MappingMutationResponse:
    mapping = workspace.mapping_service.get_mapping_by_id(mapping_id)
    if mapping is None:
        raise AppException("Path mapping not found", HTTP_STATUS_NOT_FOUND)
    return create_response("Path mapping fetched", mapping.as_dict())


@router.put("/{mapping_id}", response_model=MappingMutationResponse)
def update_mapping(
    mapping_id: str,
    payload: MappingUpdateRequest,
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> MappingMutationResponse:
    """Replace the levels of a mapping; the transformed path follows from them."""
    updated = workspace.mapping_service.update_mapping(mapping_id, payload.levels.to_levels())
    if updated is None:
        raise AppException("Path mapping not found", HTTP_STATUS_NOT_FOUND)
    return create_response("Path mapping updated", updated.as_dict())


@router.delete("/{mapping_id}", response_model=MappingMutationResponse)
def delete_mapping(mapping_id: str, workspace: CatalogWorkspace = Depends(get_workspace)) -> MappingMutationResponse:
    removed = workspace.mapping_service.delete_mapping(mapping_id)
    if removed is None:
        raise AppException("Path mapping not found", HTTP_STATUS_NOT_FOUND)
    return create_response("Path mapping deleted", removed.as_dict())
