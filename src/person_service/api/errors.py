"""Exception -> HTTP response mapping.

Every error body has the shape ``{error, message, timestamp, path}``;
validation failures add ``errors`` with per-field messages.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from ..domain.exceptions import (
    InvalidPersonDataError,
    PersonNotFoundError,
    PersonValidationError,
    ValidationSource,
)
from ..filtering.exceptions import FilterValidationError
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    errors: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        timestamp=datetime.now(timezone.utc),
        path=request.url.path,
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(exclude_none=True)),
    )


async def handle_not_found(request: Request, exc: Exception) -> JSONResponse:
    return error_response(request, status.HTTP_404_NOT_FOUND, "PERSON_NOT_FOUND", str(exc))


async def handle_person_validation(
    request: Request, exc: PersonValidationError
) -> JSONResponse:
    code = (
        status.HTTP_400_BAD_REQUEST
        if exc.source is ValidationSource.URL_PARAMETER
        else status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    return error_response(request, code, "VALIDATION_FAILED", exc.message, exc.errors)


async def handle_invalid_data(request: Request, exc: Exception) -> JSONResponse:
    return error_response(
        request, status.HTTP_422_UNPROCESSABLE_ENTITY, "INVALID_DATA", str(exc)
    )


async def handle_invalid_filter(
    request: Request, exc: FilterValidationError
) -> JSONResponse:
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "INVALID_FILTER",
        exc.message,
        exc.errors,
    )


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        errors.setdefault(field or "__root__", []).append(err.get("msg", "Invalid value"))
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_FAILED",
        "Request validation failed",
        errors,
    )


async def handle_integrity(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Data integrity violation on %s: %s", request.url.path, exc)
    return error_response(
        request,
        status.HTTP_409_CONFLICT,
        "DATA_INTEGRITY_VIOLATION",
        "Data integrity violation",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PersonNotFoundError, handle_not_found)
    app.add_exception_handler(PersonValidationError, handle_person_validation)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidPersonDataError, handle_invalid_data)
    app.add_exception_handler(FilterValidationError, handle_invalid_filter)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, handle_integrity)
