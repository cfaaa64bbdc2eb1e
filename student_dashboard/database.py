"""Database engine and helpers."""

from __future__ import annotations

from functools import lru_cache

from sqlmodel import Session, SQLModel, create_engine

from .config import get_settings


@lru_cache
def _get_engine():
    settings = get_settings()
    connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
    return create_engine(settings.database_url, echo=False, connect_args=connect_args)


def init_db(engine=None) -> None:
    """Create database tables if they do not exist."""
    from . import models  # noqa: F401  Registers the tables on the metadata

    SQLModel.metadata.create_all(engine or _get_engine())


def get_session():  # pragma: no cover - FastAPI dependency wrapper
    """FastAPI dependency that yields a DB session."""
    engine = _get_engine()
    with Session(engine) as session:
        yield session
