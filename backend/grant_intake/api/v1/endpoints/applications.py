"""Application Endpoints.

Public submission and admin listing of grant applications.
"""

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from ....core.config import settings
from ....core.constants import ApplicationStatus, ErrorMessages, SuccessMessages
from ....core.exceptions import GrantIntakeError, MalformedRequestError
from ....core.logging import get_logger
from ....core.metrics import application_submission_failures_total
from ....core.rate_limiting import apply_rate_limit_if_needed
from ....db.database import DatabaseConnectionManager, get_connection_manager
from ....infrastructure.messaging import TelegramNotifier, get_notifier
from ....schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationRecord,
    ErrorResponse,
    SubmissionResponse,
)
from ....services.application_service import ApplicationService, parse_application_payload
from ....utils import parse_limit

logger = get_logger(__name__)

router = APIRouter()


def failure_response(message: str) -> JSONResponse:
    """Uniform 500 body; causes are logged, never returned."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=message).model_dump()
    )


@router.post(
    "",
    response_model=SubmissionResponse,
    summary="Submit a grant application",
    responses={
        200: {"description": "Application persisted"},
        413: {"description": "Payload too large"},
        429: {"description": "Too many requests - rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Submission failed"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": ApplicationCreate.model_json_schema(),
                    "example": {
                        "firstName": "Ana",
                        "lastName": "Silva",
                        "email": "ana.silva@example.com",
                        "phone": "+351912345678",
                        "dateOfBirth": "1990-04-12",
                        "country": "Portugal",
                        "city": "Porto",
                        "projectTitle": "Community Solar Workshop",
                        "projectDescription": "Hands-on workshops teaching residents to install small solar kits.",
                        "projectField": "Environment",
                        "targetAudience": "Low-income households in the city centre",
                        "requestedAmount": "12000",
                        "projectDuration": "12 months",
                        "fundingUse": "Equipment, venue rental and trainer fees",
                        "expectedImpact": "200 households with lower energy bills",
                        "previousExperience": "Ran two pilot workshops in 2023",
                        "whyDeserving": "Proven demand and a volunteer team ready to scale"
                    }
                }
            }
        }
    }
)
@apply_rate_limit_if_needed(settings.SUBMISSION_RATE_LIMIT)
async def submit_application(
    request: Request,
    manager: DatabaseConnectionManager = Depends(get_connection_manager),
    notifier: TelegramNotifier = Depends(get_notifier)
):
    """Submit a new grant application.

    Steps, in order:
    1. Make sure the store is reachable
    2. Parse and validate the JSON body
    3. Generate the application ID and persist the record in pending status
    4. Notify the support chat (best-effort, never affects the response)

    Any failure in steps 1-3 returns a generic 500 without field details.
    """
    try:
        await manager.ensure_connected()

        application_data = parse_application_payload(await request.body())

        async with manager.session() as db:
            service = ApplicationService(db, notifier)
            application = await service.submit_application(application_data)

    except MalformedRequestError as e:
        logger.warning(
            "Rejected malformed application submission",
            extra={'error': str(e), 'validation_errors': e.errors}
        )
        application_submission_failures_total.labels(reason=type(e).__name__).inc()
        return failure_response(ErrorMessages.SUBMISSION_FAILED)
    except GrantIntakeError as e:
        logger.error(
            "Error processing application",
            extra={'error': str(e), 'error_type': type(e).__name__},
            exc_info=True
        )
        application_submission_failures_total.labels(reason=type(e).__name__).inc()
        return failure_response(ErrorMessages.SUBMISSION_FAILED)
    except Exception as e:
        logger.error(
            "Unexpected error processing application",
            extra={'error': str(e), 'error_type': type(e).__name__},
            exc_info=True
        )
        application_submission_failures_total.labels(reason="unexpected").inc()
        return failure_response(ErrorMessages.SUBMISSION_FAILED)

    return SubmissionResponse(
        message=SuccessMessages.APPLICATION_SUBMITTED,
        application_id=application.application_id
    )


@router.get(
    "",
    response_model=ApplicationListResponse,
    summary="List grant applications",
    responses={
        500: {"model": ErrorResponse, "description": "Listing failed"},
    }
)
async def list_applications(
    status_filter: str | None = Query(
        None,
        alias="status",
        description=f"Exact status to match, one of: {', '.join(ApplicationStatus.ALL_STATUSES)}"
    ),
    limit: str | None = Query(None, description="Maximum number of applications (default 50, max 500)"),
    manager: DatabaseConnectionManager = Depends(get_connection_manager)
):
    """List applications, most recently submitted first.

    **Query parameters:**
    - status: only applications whose status equals this value
    - limit: row cap; missing or unusable values fall back to 50
    """
    row_limit = parse_limit(limit)

    try:
        await manager.ensure_connected()

        async with manager.session() as db:
            service = ApplicationService(db)
            applications = await service.list_applications(
                status=status_filter or None,
                limit=row_limit
            )
            records = [ApplicationRecord.model_validate(app) for app in applications]

    except Exception as e:
        logger.error(
            "Error fetching applications",
            extra={
                'error': str(e),
                'error_type': type(e).__name__,
                'status': status_filter,
                'limit': row_limit
            },
            exc_info=True
        )
        return failure_response(ErrorMessages.LISTING_FAILED)

    return ApplicationListResponse(applications=records)
