"""Response models for the raw and transformed schema documents."""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from app.packages.catalog.api.v1.schemas.common import ResponseEnvelope


class SchemaValueItem(BaseModel):
    path: str
    exists: bool
    value: Optional[Any] = None


SchemaDocumentResponse = ResponseEnvelope[Dict[str, Any]]
SchemaValueResponse = ResponseEnvelope[SchemaValueItem]
