import time

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.constants import ErrorMessages, HttpHeaders
from ..core.logging import get_logger, set_request_id

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ID for log correlation.

    An incoming X-Request-ID header is reused so IDs survive a proxy hop;
    otherwise a new one is generated. The ID is stored in the logging context
    var and echoed back in the response headers.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = set_request_id(request.headers.get(HttpHeaders.REQUEST_ID) or None)

        logger.info(
            "Request started",
            extra={
                'method': request.method,
                'path': request.url.path,
                'client': request.client.host if request.client else 'unknown'
            }
        )

        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                extra={
                    'error': str(e),
                    'process_time': process_time
                },
                exc_info=True
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "success": False,
                    "error": ErrorMessages.INTERNAL_SERVER_ERROR,
                    "request_id": request_id
                },
                headers={HttpHeaders.REQUEST_ID: request_id}
            )

        process_time = time.time() - start_time
        response.headers[HttpHeaders.REQUEST_ID] = request_id
        response.headers[HttpHeaders.PROCESS_TIME] = str(process_time)

        logger.info(
            "Request completed",
            extra={
                'status_code': response.status_code,
                'process_time': process_time
            }
        )

        return response
