"""Custom Exceptions for Request Handling.

Every failure that can stop a submission or a listing before it reaches the
caller is one of these. Handlers catch them at the endpoint boundary and turn
them into the uniform failure response; none of them are retried.

Notification failures never leave the dispatcher: NotificationError is raised
by the send step and caught by the dispatcher itself.
"""


class GrantIntakeError(Exception):
    """Base exception for all service errors."""
    pass


class DatabaseConnectionError(GrantIntakeError):
    """The application store is unreachable."""
    pass


class PersistenceError(GrantIntakeError):
    """A write or query failed at the store (constraint violation, lost connection)."""
    pass


class MalformedRequestError(GrantIntakeError):
    """Request body is not JSON or does not have the application shape.

    Attributes:
        errors: Validation error details, kept for logging only
    """

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []


class NotificationError(GrantIntakeError):
    """Outbound notification call failed."""
    pass
