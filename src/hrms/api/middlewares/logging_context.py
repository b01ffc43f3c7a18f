"""Per-request log context: correlation id, method and path."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.hrms.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request context for the duration of the request and log failures by status."""
    clear_request_context()
    bind_request_context(correlation_id.get(), request.method, request.url.path)
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            logger.warning("Request failed", status_code=response.status_code)
        return response
    finally:
        clear_request_context()
