"""API v1 router: mounts every versioned catalog route."""

from fastapi import APIRouter

from app.packages.catalog.api.v1.endpoints import attributes, lineage, mappings, schema_definitions, tree

api_router = APIRouter()
api_router.include_router(attributes.router)
api_router.include_router(lineage.router)
api_router.include_router(mappings.router)
api_router.include_router(tree.router)
api_router.include_router(schema_definitions.router)
