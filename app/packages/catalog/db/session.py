"""Database engine and session factory configuration."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.packages.catalog.core.config import get_settings

settings = get_settings()


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    # ``pool_pre_ping`` keeps long-lived PostgreSQL pools healthy
    return {"pool_pre_ping": True}


engine = create_engine(
    settings.sql_database_url,
    echo=settings.database_echo,
    **_engine_kwargs(settings.sql_database_url),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
