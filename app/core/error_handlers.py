"""
Central translation of exceptions into the error envelope.

Every error leaving the API goes through one of the handlers registered in
``register_exception_handlers`` and is rendered as::

    {"error": <reason phrase>, "message": ..., "details": {"issues": [...],
     "method": ..., "url": ..., "stack": ...}}

``stack`` is only populated outside production.
"""
import logging
import traceback
from http import HTTPStatus
from typing import Any, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    InternalServerError,
)

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NOT_NULL_VIOLATION = "23502"
UNDEFINED_COLUMN = "42703"


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code
    # SQLite reports constraint classes only in the message
    message = str(orig).lower() if orig is not None else ""
    if "unique constraint failed" in message:
        return UNIQUE_VIOLATION
    if "foreign key constraint failed" in message:
        return FOREIGN_KEY_VIOLATION
    if "check constraint failed" in message:
        return CHECK_VIOLATION
    if "not null constraint failed" in message:
        return NOT_NULL_VIOLATION
    if "no such column" in message or "has no column named" in message:
        return UNDEFINED_COLUMN
    return None


def translate_db_error(exc: SQLAlchemyError) -> AppException:
    """Map a storage-layer error to a domain error by constraint class."""
    if not isinstance(exc, DBAPIError):
        return InternalServerError("An unexpected error occurred", [str(exc)])

    detail = str(getattr(exc, "orig", exc))
    code = _sqlstate(exc)
    if code == UNIQUE_VIOLATION:
        return ConflictError("This record already exists. Please try again.", [detail])
    if code == FOREIGN_KEY_VIOLATION:
        return BadRequestError("Foreign key constraint violation", [detail])
    if code == CHECK_VIOLATION:
        return BadRequestError("Check constraint violation", [detail])
    if code == NOT_NULL_VIOLATION:
        return BadRequestError("A required field was null", [detail])
    if code == UNDEFINED_COLUMN:
        return BadRequestError("Undefined column in the request", [detail])
    return InternalServerError("An unexpected error occurred", [detail])


def error_body(
    request: Request,
    status_code: int,
    message: str,
    issues: List[Any],
    exc: Optional[BaseException] = None,
) -> dict:
    details = {
        "issues": jsonable_encoder(issues),
        "method": request.method,
        "url": str(request.url),
    }
    settings = request.app.state.settings
    if exc is not None and not settings.is_production:
        details["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return {
        "error": HTTPStatus(status_code).phrase,
        "message": message,
        "details": details,
    }


def _respond(request: Request, error: AppException, exc: BaseException) -> JSONResponse:
    headers = None
    if error.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(request, error.status_code, error.message, error.issues, exc),
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _respond(request, exc, exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Input doesn't match the schema for this request",
            list(exc.errors()),
        ),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    error = translate_db_error(exc)
    if error.status_code >= 500:
        logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    else:
        logger.info("Constraint violation on %s %s: %s", request.method, request.url.path, exc)
    return _respond(request, error, exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Resource not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.status_code, message, []),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    settings = request.app.state.settings
    issues = [] if settings.is_production else [str(exc)]
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            issues,
            exc,
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
