"""FastAPI dependencies shared by the catalog endpoints."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from app.packages.catalog.db.session import SessionLocal
from app.packages.catalog.services.workspace import CatalogWorkspace


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it once the request is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_workspace(request: Request) -> CatalogWorkspace:
    """The in-memory mapping/tree workspace owned by the running application."""
    return request.app.state.workspace
