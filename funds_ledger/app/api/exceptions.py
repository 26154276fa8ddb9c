from __future__ import annotations

from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..core.errors import RecordNotFoundError, StorageUnavailableError


def _error_list(errors: Sequence[Any]) -> list[dict[str, Any]]:
    # ctx may hold the raw exception instance, which does not serialize
    return jsonable_encoder(
        [{key: value for key, value in error.items() if key != "ctx"} for error in errors]
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RecordNotFoundError)
    async def record_not_found_handler(
        request: Request, exc: RecordNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(
        request: Request, exc: StorageUnavailableError
    ) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": _error_list(exc.errors())})

    @app.exception_handler(ValidationError)
    async def query_validation_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": _error_list(exc.errors())})

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})
