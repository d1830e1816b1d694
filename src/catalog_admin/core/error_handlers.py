import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_admin.core.db_errors import classify_integrity_error

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def format_validation_error(exc: RequestValidationError) -> str:
    """First validation problem as ``field: message``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    message = str(first.get("msg", "Invalid value"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException detail under the ``error`` key."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as 400."""
    logger.warning(f"Validation error: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, format_validation_error(exc))


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violations no endpoint translated itself."""
    kind = classify_integrity_error(exc)
    logger.warning(f"Integrity error ({kind}) on {request.method} {request.url.path}: {exc.orig}")
    if kind == "unique":
        return error_response(status.HTTP_409_CONFLICT, "A record with these values already exists.")
    if kind == "foreign_key":
        return error_response(status.HTTP_409_CONFLICT, "The record is linked to other records.")
    return error_response(status.HTTP_409_CONFLICT, "The request conflicts with existing data.")


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy database errors."""
    logger.error(f"Database error: {str(exc)}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error occurred")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions."""
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")
