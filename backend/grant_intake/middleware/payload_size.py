"""Payload Size Validation Middleware.

Rejects submissions whose declared Content-Length exceeds the configured
limit before the body is read.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.config import settings
from ..core.logging import get_logger

logger = get_logger(__name__)

BODY_METHODS = ("POST", "PUT", "PATCH")


class PayloadSizeMiddleware(BaseHTTPMiddleware):
    """Reject oversized request bodies with 413.

    Args:
        app: The ASGI application
        max_size_bytes: Limit in bytes (defaults to settings.MAX_PAYLOAD_SIZE_MB)
    """

    def __init__(self, app, max_size_bytes: int | None = None):
        super().__init__(app)
        self.max_size_bytes = (
            max_size_bytes
            if max_size_bytes is not None
            else settings.MAX_PAYLOAD_SIZE_MB * 1024 * 1024
        )

    async def dispatch(self, request: Request, call_next):
        if request.method not in BODY_METHODS:
            return await call_next(request)

        content_length = request.headers.get("content-length")
        if not content_length:
            return await call_next(request)

        try:
            declared = int(content_length)
        except ValueError:
            logger.debug(
                "Invalid Content-Length header format",
                extra={'path': request.url.path, 'content_length': content_length}
            )
            return await call_next(request)

        if declared <= self.max_size_bytes:
            return await call_next(request)

        logger.warning(
            "Request payload too large (rejected by middleware)",
            extra={
                'method': request.method,
                'path': request.url.path,
                'content_length': declared,
                'max_size_bytes': self.max_size_bytes,
            }
        )
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={
                "success": False,
                "error": f"Request payload exceeds maximum size of {self.max_size_bytes} bytes",
            }
        )
