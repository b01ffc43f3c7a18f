"""Application errors and the exception handlers that expose them over HTTP.

Repositories never leak SQLAlchemy or driver exceptions. Every failure reaching a
caller is one of the types below, so the HTTP layer can map it to a status code
without inspecting storage-specific error shapes. Missing records are not errors:
lookups return ``None``.
"""

from collections.abc import Iterable

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.hrms.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors raised by the data-access layer."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Payload or query refers to missing required fields or unknown columns."""

    status_code = 422

    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields = list(fields)


class StorageError(AppError):
    """Normalized storage failure (connection, constraint violation, bad query)."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str, operation: str | None = None, table: str | None = None):
        super().__init__(message)
        self.operation = operation
        self.table = table


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        content: dict = {
            "detail": exc.message,
            "request_id": correlation_id.get(),
        }
        if isinstance(exc, ValidationError) and exc.fields:
            content["fields"] = exc.fields
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
