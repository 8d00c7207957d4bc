"""Response helpers: build the unified return structure."""

from typing import Any

from app.packages.catalog.core.constants import HTTP_STATUS_OK


def create_response(msg: str, data: Any = None, code: int = HTTP_STATUS_OK) -> dict[str, Any]:
    """Combine ``msg``, ``data`` and ``code`` into the response body."""
    return {"msg": msg, "data": data, "code": code}
