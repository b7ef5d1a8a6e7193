"""Application Repository.

Data access layer for Application entities.
Separates data access logic from business logic (Repository Pattern).
"""

from __future__ import annotations

import time

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import Listing
from ..core.exceptions import PersistenceError
from ..core.logging import get_logger
from ..core.metrics import db_queries_total, db_query_duration_seconds
from ..models.application import Application
from ..utils.transaction_helpers import describe_db_error

logger = get_logger(__name__)


class ApplicationRepository:
    """Repository for Application data access operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, application: Application) -> Application:
        """Insert a new application.

        The row is flushed, not committed; the caller owns the transaction.

        Args:
            application: Application entity to create

        Returns:
            Created application

        Raises:
            PersistenceError: On constraint violation or storage failure
        """
        start_time = time.time()
        try:
            self.db.add(application)
            await self.db.flush()
        except IntegrityError as e:
            self._record('insert', 'failure', start_time)
            raise PersistenceError(
                f"Application {application.application_id} violates a store constraint"
            ) from e
        except SQLAlchemyError as e:
            self._record('insert', 'failure', start_time)
            raise PersistenceError(
                f"Failed to insert application: {describe_db_error(e)}"
            ) from e

        self._record('insert', 'success', start_time)
        return application

    async def list(
        self,
        status: str | None = None,
        limit: int = Listing.DEFAULT_LIMIT
    ) -> list[Application]:
        """List applications, newest submission first.

        Args:
            status: Exact status to match (all statuses when None or empty)
            limit: Maximum number of rows to return

        Returns:
            List of applications

        Raises:
            PersistenceError: If the query fails
        """
        query = select(Application)

        if status:
            query = query.where(Application.status == status)

        query = query.order_by(
            Application.submitted_at.desc(),
            Application.id.desc()
        ).limit(limit)

        start_time = time.time()
        try:
            result = await self.db.execute(query)
            applications = result.scalars().all()
        except SQLAlchemyError as e:
            self._record('select', 'failure', start_time)
            raise PersistenceError(f"Failed to query applications: {describe_db_error(e)}") from e

        self._record('select', 'success', start_time)
        return list(applications)

    async def find_by_application_id(self, application_id: str) -> Application | None:
        """Find an application by its public identifier.

        Raises:
            PersistenceError: If the query fails
        """
        query = select(Application).where(Application.application_id == application_id)

        start_time = time.time()
        try:
            result = await self.db.execute(query)
            application = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self._record('select', 'failure', start_time)
            raise PersistenceError(
                f"Failed to query application {application_id}: {describe_db_error(e)}"
            ) from e

        self._record('select', 'success', start_time)
        return application

    @staticmethod
    def _record(operation: str, status: str, start_time: float) -> None:
        db_queries_total.labels(operation=operation, status=status).inc()
        db_query_duration_seconds.labels(operation=operation).observe(time.time() - start_time)
