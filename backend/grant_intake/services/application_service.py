"""Application Service Layer.

Handles submission and listing of grant applications.
Separates business logic from API controllers (clean architecture).
Uses Repository Pattern for data access.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.constants import ApplicationStatus, Listing
from ..core.exceptions import MalformedRequestError
from ..core.logging import get_logger
from ..core.metrics import applications_submitted_total
from ..infrastructure.messaging import TelegramNotifier, notifier as default_notifier
from ..models.application import Application
from ..repositories.application_repository import ApplicationRepository
from ..schemas.application import ApplicationCreate
from ..utils import generate_application_id, sanitize_log_data
from ..utils.transaction_helpers import safe_transaction

logger = get_logger(__name__)


def parse_application_payload(body: bytes) -> ApplicationCreate:
    """Parse a raw request body into a validated submission.

    Args:
        body: Raw request body

    Returns:
        Validated submission

    Raises:
        MalformedRequestError: If the body is not a JSON object with the
            expected application fields
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRequestError(f"Request body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedRequestError(
            f"Request body must be a JSON object, got {type(data).__name__}"
        )

    try:
        return ApplicationCreate.model_validate(data)
    except ValidationError as e:
        errors = [
            {'field': '.'.join(str(part) for part in err['loc']), 'type': err['type']}
            for err in e.errors()
        ]
        raise MalformedRequestError(
            f"Request body does not match the application shape ({len(errors)} errors)",
            errors=errors
        ) from e


class ApplicationService:
    """Service for submitting and listing grant applications."""

    def __init__(self, db: AsyncSession, notifier: TelegramNotifier | None = None):
        self.db = db
        self.repository = ApplicationRepository(db)
        self.notifier = notifier or default_notifier

    async def submit_application(self, application_data: ApplicationCreate) -> Application:
        """Persist a new application and notify the support chat.

        This method:
        1. Generates the public application ID
        2. Inserts the application in pending status and commits
        3. Sends the notification (best-effort, never fails the submission)

        Args:
            application_data: Validated submission

        Returns:
            Persisted application

        Raises:
            PersistenceError: If the insert or commit fails
        """
        now = datetime.now(UTC)
        application = Application(
            application_id=generate_application_id(),
            status=ApplicationStatus.DEFAULT_STATUS,
            submitted_at=now,
            updated_at=now,
            **application_data.model_dump()
        )

        async with safe_transaction(self.db):
            await self.repository.create(application)

        applications_submitted_total.inc()
        logger.info(
            "Grant application submitted successfully",
            extra=sanitize_log_data({
                'application_id': application.application_id,
                'email': application.email,
                'project_field': application.project_field
            })
        )

        # Outcome is only observable through logs and metrics
        await self.notifier.notify(application)

        return application

    async def list_applications(
        self,
        status: str | None = None,
        limit: int = Listing.DEFAULT_LIMIT
    ) -> list[Application]:
        """List applications, newest first, optionally filtered by status.

        Raises:
            PersistenceError: If the query fails
        """
        applications = await self.repository.list(status=status, limit=limit)

        logger.debug(
            "Applications listed",
            extra={'status': status, 'limit': limit, 'count': len(applications)}
        )

        return applications
