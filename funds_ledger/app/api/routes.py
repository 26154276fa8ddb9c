from typing import Any, Callable
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from ..core.dependencies import get_credit_service, get_debit_service
from ..core.errors import RecordNotFoundError
from ..core.security import GET_RECORDS, MANAGE_RECORDS, require_capability
from ..models import Page, QueryOptions
from ..services import CREDITS, DEBITS, RecordService, ResourceType, split_query


def build_router(
    resource: ResourceType,
    get_service: Callable[..., RecordService],
) -> APIRouter:
    """Wire the create/list/get/update/delete routes for one resource type."""
    CreateSchema = resource.create_schema
    UpdateSchema = resource.update_schema
    ResponseSchema = resource.response_schema

    router = APIRouter(prefix=f"/{resource.path}", tags=[resource.path])
    can_read = [Depends(require_capability(GET_RECORDS))]
    can_manage = [Depends(require_capability(MANAGE_RECORDS))]

    @router.post(
        "",
        response_model=ResponseSchema,
        status_code=status.HTTP_201_CREATED,
        dependencies=can_manage,
    )
    def create_record(
        payload: CreateSchema,
        service: RecordService = Depends(get_service),
    ) -> Any:
        return service.create(payload)

    @router.get("", response_model=Page[ResponseSchema], dependencies=can_read)
    def list_records(
        request: Request,
        service: RecordService = Depends(get_service),
    ) -> Any:
        raw_filter, raw_options = split_query(resource, request.query_params)
        filters = resource.filter_schema.model_validate(raw_filter).model_dump(exclude_unset=True)
        options = QueryOptions.model_validate(raw_options).model_dump(
            by_alias=True, exclude_none=True
        )
        return service.query(filters, options)

    @router.get("/{record_id}", response_model=ResponseSchema, dependencies=can_read)
    def get_record(
        record_id: UUID,
        service: RecordService = Depends(get_service),
    ) -> Any:
        record = service.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(f"{resource.name} not found")
        return record

    @router.patch("/{record_id}", response_model=ResponseSchema, dependencies=can_manage)
    def update_record(
        record_id: UUID,
        payload: UpdateSchema,
        service: RecordService = Depends(get_service),
    ) -> Any:
        return service.update_by_id(record_id, payload)

    @router.delete(
        "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        dependencies=can_manage,
    )
    def delete_record(
        record_id: UUID,
        service: RecordService = Depends(get_service),
    ) -> Response:
        service.delete_by_id(record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


credits_router = build_router(CREDITS, get_credit_service)
debits_router = build_router(DEBITS, get_debit_service)

__all__ = ["build_router", "credits_router", "debits_router"]
