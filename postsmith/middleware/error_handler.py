"""Global exception handler for consistent error responses."""

import traceback
from datetime import datetime, timezone
from typing import Any, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from postsmith.exceptions import (
    BaseAPIException,
    DatabaseError,
    InternalServerError,
    NotFoundError,
    TooManyRequestsError,
)
from postsmith.schemas.errors import ErrorDetail, ErrorResponse
from postsmith.utils.logger import get_logger, get_request_id

log = get_logger(__name__)


def _request_id(request: Request) -> Optional[str]:
    # The context var is already reset when the outermost handler runs
    return get_request_id() or getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    error_response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        request_id=_request_id(request),
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
        headers=headers,
    )


async def base_exception_handler(request: Request, exc: BaseAPIException) -> JSONResponse:
    """Handle custom API exceptions. 5xx details are logged, never returned."""
    if exc.status_code >= 500:
        log.error(
            "api exception",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            traceback=traceback.format_exc(),
        )
        return _error_response(request, exc.status_code, exc.error_code, exc.client_message)

    log.info(
        "api exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
    )
    headers = None
    if isinstance(exc, TooManyRequestsError):
        headers = {"Retry-After": str(exc.retry_after)}
    return _error_response(
        request, exc.status_code, exc.error_code, exc.client_message, exc.details, headers
    )


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Handle Pydantic validation errors from request parsing."""
    log.warning("validation error", errors=exc.errors())

    # exc.errors() may contain non-serializable objects (e.g. ValueError in ctx),
    # so strip the ctx key which can hold raw exception instances.
    errors = [{k: v for k, v in e.items() if k not in ("ctx", "input")} for e in exc.errors()]
    field = None
    if errors and errors[0].get("loc"):
        field = str(errors[0]["loc"][-1])

    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "ValidationError",
        "Request validation failed",
        {"field": field, "errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and framework-level HTTP errors."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        not_found = NotFoundError()
        log.info("route not found", method=request.method, path=request.url.path)
        return _error_response(request, not_found.status_code, not_found.error_code, not_found.message)

    log.info("http error", status_code=exc.status_code, detail=exc.detail)
    return _error_response(
        request, exc.status_code, "HTTPError", str(exc.detail), headers=exc.headers
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy database errors."""
    log.error("database error", error=str(exc), traceback=traceback.format_exc())

    db_error = DatabaseError(message="Database operation failed")
    return _error_response(
        request, db_error.status_code, db_error.error_code, db_error.client_message
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    log.critical(
        "unhandled exception",
        error_type=type(exc).__name__,
        error=str(exc),
        traceback=traceback.format_exc(),
    )

    internal = InternalServerError(message=str(exc))
    return _error_response(
        request, internal.status_code, internal.error_code, internal.client_message
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application."""
    app.add_exception_handler(BaseAPIException, base_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)  # type: ignore[arg-type]

    log.info("exception handlers registered")
