"""Exception handling: the business exception type and the global response converters."""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.packages.catalog.core.logger import logger


class AppException(HTTPException):
    """Business exception carrying the unified response fields, converted by the global handler."""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render ``HTTPException`` (and ``AppException``) with the unified envelope."""
    payload = {"msg": exc.detail, "data": getattr(exc, "data", None), "code": exc.status_code}
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback: log the unexpected error and answer with a standard 500 envelope."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    payload = {
        "msg": "Internal server error",
        "data": None,
        "code": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
