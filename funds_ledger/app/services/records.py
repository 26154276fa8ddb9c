from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel
from sqlmodel import Session, SQLModel

from ..core.errors import RecordNotFoundError
from ..models import Page as PageResponse
from ..models.schemas import as_utc
from .pagination import DEFAULT_LIMIT, paginate
from .repository import RecordRepository
from .resources import ResourceType


logger = logging.getLogger(__name__)


class RecordService:
    """Create/read/update/delete for one resource type.

    Holds no state between calls; every operation goes back to the
    repository. Updates and deletes are fetch-then-act, so concurrent writers
    to the same record get last-write-wins from the store.
    """

    def __init__(
        self,
        session: Session,
        resource: ResourceType,
        repository: Optional[RecordRepository] = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.resource = resource
        self.repository = repository or RecordRepository(session, resource.model)
        self.default_limit = default_limit

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _to_response(self, record: SQLModel) -> BaseModel:
        schema = self.resource.response_schema
        return schema.model_validate(
            {name: getattr(record, name) for name in schema.model_fields}
        )

    def _get_record(self, record_id: UUID) -> SQLModel:
        record = self.repository.find_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.resource.name} not found")
        return record

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def create(self, payload: BaseModel) -> BaseModel:
        now = datetime.now(UTC)
        record = self.resource.model(
            **payload.model_dump(),
            created_at=now,
            updated_at=now,
        )
        self.repository.insert(record)
        response = self._to_response(record)
        self.repository.commit()
        logger.info(
            f"{self.resource.event_prefix}.created",
            extra={"record_id": str(response.id), "account_id": response.account_id},
        )
        return response

    def query(self, filters: Mapping[str, Any], options: Mapping[str, Any]) -> PageResponse:
        page = paginate(
            self.repository,
            self.resource,
            filters,
            options,
            default_limit=self.default_limit,
        )
        return PageResponse[self.resource.response_schema](
            results=[self._to_response(record) for record in page.results],
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
            total_results=page.total_results,
        )

    def get_by_id(self, record_id: UUID) -> Optional[BaseModel]:
        record = self.repository.find_by_id(record_id)
        if record is None:
            return None
        return self._to_response(record)

    def update_by_id(self, record_id: UUID, patch: BaseModel) -> BaseModel:
        changes = patch.model_dump(exclude_unset=True)
        if not changes:
            raise ValueError("At least one field must be supplied")

        record = self._get_record(record_id)
        for name, value in changes.items():
            setattr(record, name, value)
        record.updated_at = max(datetime.now(UTC), as_utc(record.created_at))

        self.repository.save(record)
        response = self._to_response(record)
        self.repository.commit()
        logger.info(
            f"{self.resource.event_prefix}.updated",
            extra={"record_id": str(record_id), "fields": sorted(changes)},
        )
        return response

    def delete_by_id(self, record_id: UUID) -> BaseModel:
        record = self._get_record(record_id)
        snapshot = self._to_response(record)

        self.repository.delete(record)
        self.repository.commit()
        logger.info(
            f"{self.resource.event_prefix}.deleted",
            extra={"record_id": str(record_id)},
        )
        return snapshot
