"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ....core.constants import ErrorMessages, SuccessMessages
from ....core.exceptions import DatabaseConnectionError
from ....core.logging import get_logger
from ....db.database import DatabaseConnectionManager, get_connection_manager
from ....schemas.application import DatabaseHealthResponse

logger = get_logger(__name__)

router = APIRouter()


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


@router.get(
    "/db",
    response_model=DatabaseHealthResponse,
    response_model_exclude_none=True,
    responses={500: {"model": DatabaseHealthResponse, "description": "Database unreachable"}}
)
async def database_health(
    manager: DatabaseConnectionManager = Depends(get_connection_manager)
):
    """Check that the application store answers a live query."""
    try:
        await manager.ping()
    except DatabaseConnectionError as e:
        logger.error(
            "Database connection test failed",
            extra={'error': str(e)}
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=DatabaseHealthResponse(
                success=False,
                error=str(e) or ErrorMessages.UNKNOWN_ERROR,
                timestamp=_timestamp()
            ).model_dump(exclude_none=True)
        )

    return DatabaseHealthResponse(
        success=True,
        message=SuccessMessages.DATABASE_CONNECTED,
        timestamp=_timestamp()
    )
