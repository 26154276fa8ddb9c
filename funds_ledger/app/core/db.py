from __future__ import annotations

from collections.abc import Generator
from typing import Any, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..models import db as _db_models  # noqa: F401 - ensure tables register with metadata
from .config import get_settings


def create_engine_for_url(database_url: str, echo: bool = False) -> Engine:
    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(database_url, echo=echo, connect_args=connect_args)


engine = create_engine_for_url(get_settings().database_url)


def init_db(bind: Optional[Engine] = None) -> None:
    SQLModel.metadata.create_all(bind or engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def set_engine(new_engine: Engine) -> Engine:
    """Swap the module engine, returning the previous one so callers can restore it."""
    global engine
    previous, engine = engine, new_engine
    return previous
