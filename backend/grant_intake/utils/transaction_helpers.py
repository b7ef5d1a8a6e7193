"""Transaction Helper Utilities.

Provides safe transaction management with automatic rollback on errors.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import PersistenceError
from ..core.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def safe_transaction(
    db: AsyncSession
) -> AsyncGenerator[AsyncSession, None]:
    """Context manager for safe database transactions.

    Commits on success and rolls back on any exception. Driver errors raised
    by the commit itself surface as PersistenceError; other exceptions are
    re-raised unchanged after the rollback.

    Usage:
        ```python
        async with manager.session() as db:
            async with safe_transaction(db):
                await repository.create(application)
        ```
    """
    try:
        yield db
        await db.commit()
        logger.debug("Transaction committed successfully")
    except Exception as e:
        await _rollback_quietly(db, e)
        logger.error(
            "Transaction rolled back due to error",
            extra={
                'error': describe_db_error(e) if isinstance(e, SQLAlchemyError) else str(e),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        if isinstance(e, SQLAlchemyError):
            raise PersistenceError(f"Transaction failed: {describe_db_error(e)}") from e
        raise


async def _rollback_quietly(db: AsyncSession, error: Exception) -> None:
    """Rollback that tolerates a session whose connection is already gone."""
    try:
        await db.rollback()
    except SQLAlchemyError as rollback_error:
        logger.warning(
            "Rollback failed (transaction may already be closed)",
            extra={
                'rollback_error': describe_db_error(rollback_error),
                'original_error_type': type(error).__name__
            }
        )


def describe_db_error(error: SQLAlchemyError) -> str:
    """Short description of a driver error without the statement or its values.

    SQLAlchemy's own message embeds the SQL and, unless the engine hides them,
    the bound parameters, which carry applicant data.
    """
    orig = getattr(error, 'orig', None)
    if orig is None:
        return type(error).__name__
    return f"{type(error).__name__} ({type(orig).__module__}.{type(orig).__name__})"
