from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Generic, Optional, TypeVar
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from ..core.errors import StorageUnavailableError


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)

# (attribute name, descending)
SortClause = tuple[str, bool]


class RecordRepository(Generic[ModelT]):
    """Thin data access layer around the SQLModel session for one table."""

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception(
                "storage.failed",
                extra={"table": self.model.__tablename__, "operation": operation},
            )
            self.session.rollback()
            raise StorageUnavailableError(
                f"Storage failed during {operation} on {self.model.__tablename__}"
            ) from exc

    def _where(self, stmt, filters: Mapping[str, Any]):
        for attribute, value in filters.items():
            stmt = stmt.where(getattr(self.model, attribute) == value)
        return stmt

    # Single records -----------------------------------------------------
    def insert(self, record: ModelT) -> ModelT:
        with self._guard("insert"):
            self.session.add(record)
            self.session.flush()
            self.session.refresh(record)
        return record

    def find_by_id(self, record_id: UUID) -> Optional[ModelT]:
        with self._guard("find_by_id"):
            return self.session.get(self.model, record_id)

    def save(self, record: ModelT) -> ModelT:
        with self._guard("save"):
            self.session.add(record)
            self.session.flush()
            self.session.refresh(record)
        return record

    def delete(self, record: ModelT) -> None:
        with self._guard("delete"):
            self.session.delete(record)
            self.session.flush()

    def commit(self) -> None:
        with self._guard("commit"):
            self.session.commit()

    # Collections --------------------------------------------------------
    def count(self, filters: Mapping[str, Any]) -> int:
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        with self._guard("count"):
            return int(self.session.exec(stmt).one())

    def find_many(
        self,
        filters: Mapping[str, Any],
        sort: Sequence[SortClause],
        skip: int,
        limit: int,
    ) -> list[ModelT]:
        stmt = self._where(select(self.model), filters)
        for attribute, descending in sort:
            column = getattr(self.model, attribute)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        stmt = stmt.offset(skip).limit(limit)
        with self._guard("find_many"):
            return list(self.session.exec(stmt))
