"""Type conversion utilities."""

import re

from ..core.constants import Listing


def parse_limit(raw: str | None, default: int = Listing.DEFAULT_LIMIT, maximum: int = Listing.MAX_LIMIT) -> int:
    """Parse a ``limit`` query parameter into a usable row cap.

    Missing, non-integer, zero and negative values fall back to ``default``.
    Values above ``maximum`` are clamped.

    Examples:
        >>> parse_limit(None)
        50
        >>> parse_limit("abc")
        50
        >>> parse_limit("2")
        2
        >>> parse_limit("100000")
        500
    """
    if raw is None:
        return default

    try:
        limit = int(str(raw).strip())
    except ValueError:
        return default

    if limit < 1:
        return default

    return min(limit, maximum)


def normalize_path(path: str) -> str:
    """Normalize API path by replacing application IDs with placeholders.

    Useful for metrics and logging to avoid high cardinality.

    Args:
        path: API path to normalize

    Returns:
        Normalized path with IDs replaced

    Examples:
        >>> normalize_path("/applications/APP-1700000000000-K3Z9QD")
        "/applications/{id}"
        >>> normalize_path("/applications/123")
        "/applications/{id}"
    """
    if not path:
        return path

    path = re.sub(r'APP-\d+-[A-Z0-9]+', '{id}', path)

    return re.sub(r'/\d+(?=/|$)', '/{id}', path)
