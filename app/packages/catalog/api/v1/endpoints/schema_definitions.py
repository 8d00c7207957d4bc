"""Raw and transformed schema document routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.packages.catalog.api.v1.schemas.schema_definition import SchemaDocumentResponse, SchemaValueResponse
from app.packages.catalog.core.dependencies import get_workspace
from app.packages.catalog.core.responses import create_response
from app.packages.catalog.services.workspace import CatalogWorkspace

router = APIRouter(prefix="/schemas", tags=["schemas"])


@router.get("/raw", response_model=SchemaDocumentResponse)
def get_raw_schema(workspace: CatalogWorkspace = Depends(get_workspace)) -> SchemaDocumentResponse:
    return create_response("Raw schema fetched", workspace.schema_service.get_raw_schema())


@router.get("/raw/value", response_model=SchemaValueResponse)
def get_raw_schema_value(
    path: str = Query(..., min_length=1),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> SchemaValueResponse:
    service = workspace.schema_service
    payload = {"path": path, "exists": service.raw_path_exists(path), "value": service.get_raw_schema_value_at(path)}
    return create_response("Raw schema value fetched", payload)


@router.get("/transformed", response_model=SchemaDocumentResponse)
def get_transformed_schema(workspace: CatalogWorkspace = Depends(get_workspace)) -> SchemaDocumentResponse:
    return create_response("Transformed schema fetched", workspace.schema_service.get_transformed_schema())


@router.get("/transformed/value", response_model=SchemaValueResponse)
def get_transformed_schema_value(
    path: str = Query(..., min_length=1),
    workspace: CatalogWorkspace = Depends(get_workspace),
) -> SchemaValueResponse:
    service = workspace.schema_service
    payload = {
        "path": path,
        "exists": service.transformed_path_exists(path),
        "value": service.get_transformed_schema_value_at(path),
    }
    return create_response("Transformed schema value fetched", payload)


@router.post("/reset", response_model=SchemaDocumentResponse)
def reset_schemas(workspace: CatalogWorkspace = Depends(get_workspace)) -> SchemaDocumentResponse:
    """Discard edits made through mapping changes and restore both seed schemas."""
    workspace.schema_service.reset_schemas()
    return create_response("Schemas reset", workspace.schema_service.get_transformed_schema())
