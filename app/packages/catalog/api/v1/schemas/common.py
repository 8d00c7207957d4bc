"""Shared response envelope."""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """Outer structure of every JSON response: ``msg``, ``data`` and ``code``."""

    msg: str
    data: Optional[T] = None
    code: int
    meta: Optional[Dict[str, Any]] = None


class DeletionPayload(BaseModel):
    id: int


DeletionResponse = ResponseEnvelope[DeletionPayload]
