"""ID generation utilities."""

import secrets
import time
import uuid

from ..core.constants import ApplicationId


def generate_request_id(prefix: str | None = None) -> str:
    """Generate a unique request ID.

    Args:
        prefix: Optional prefix for the request ID (e.g., "API")

    Returns:
        Request ID string (UUID)

    Examples:
        >>> generate_request_id()
        "a1b2c3d4-e5f6-7890-abcd-ef1234567890"
        >>> generate_request_id("API")
        "API-a1b2c3d4-e5f6-7890-abcd-ef1234567890"
    """
    request_id = str(uuid.uuid4())
    if prefix:
        return f"{prefix}-{request_id}"
    return request_id


def generate_application_id(now_ms: int | None = None) -> str:
    """Generate a grant application identifier.

    Format is ``APP-<epoch millis>-<6 uppercase alphanumerics>``. Uniqueness
    is probabilistic; the unique index on the column catches the rare clash.

    Args:
        now_ms: Epoch milliseconds to embed (defaults to the current time)

    Returns:
        Application ID string

    Examples:
        >>> generate_application_id(1700000000000)
        "APP-1700000000000-K3Z9QD"
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000

    suffix = ''.join(
        secrets.choice(ApplicationId.SUFFIX_ALPHABET)
        for _ in range(ApplicationId.SUFFIX_LENGTH)
    )
    return f"{ApplicationId.PREFIX}-{now_ms}-{suffix}"
