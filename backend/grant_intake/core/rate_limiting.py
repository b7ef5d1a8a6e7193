"""Rate Limiting Utilities.

Submissions are anonymous, so the limit key is the client address.
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import settings
from .logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Get rate limiting key for a request.

    Uses the first address of X-Forwarded-For when the service runs behind a
    proxy, and the socket peer address otherwise.

    Returns:
        Rate limiting key string in format "ip:<ip_address>"
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        ip_address = forwarded_for.split(",")[0].strip()
    else:
        ip_address = get_remote_address(request)

    logger.debug(
        "Rate limit key (IP only)",
        extra={"ip": ip_address}
    )
    return f"ip:{ip_address}"


limiter = Limiter(key_func=get_rate_limit_key)


def apply_rate_limit_if_needed(limit: str):
    """Apply rate limiting only if not in test environment.

    Uses settings.ENVIRONMENT to check the current environment.
    Since conftest.py sets ENVIRONMENT="test" in os.environ before
    importing application code, settings will correctly capture this value.
    """
    def decorator(func):
        if settings.ENVIRONMENT == "test":
            return func
        return limiter.limit(limit)(func)

    return decorator
