"""String manipulation utilities."""

import re
from typing import Any

from ..core.constants import Notification, Security

# Characters with meaning in Telegram's legacy Markdown parse mode
_MARKDOWN_SPECIAL = re.compile(r'([_*`\[])')


def mask_value(value: str, visible_chars: int | None = None) -> str:
    """Mask a sensitive value, keeping only the last N characters.

    Args:
        value: The string to mask
        visible_chars: Number of characters to show at the end

    Returns:
        Masked string

    Examples:
        >>> mask_value("+34600111222")
        "********1222"
        >>> mask_value("abc")
        "****"
    """
    if not value:
        return Security.MASK_FULL

    visible = visible_chars or Security.VISIBLE_CHARS

    if len(value) <= visible:
        return Security.MASK_FULL

    return Security.MASK_CHAR * (len(value) - visible) + value[-visible:]


def mask_email(email: str) -> str:
    """Mask the local part of an email address.

    Examples:
        >>> mask_email("jane.doe@example.com")
        "j****@example.com"
    """
    if not email or '@' not in email:
        return Security.MASK_FULL

    local, _, domain = email.partition('@')
    return f"{local[:1]}{Security.MASK_FULL}@{domain}"


def sanitize_string(value: str, max_length: int | None = None) -> str:
    """Sanitize string by trimming whitespace and optionally truncating.

    Args:
        value: String to sanitize
        max_length: Optional maximum length

    Returns:
        Sanitized string

    Examples:
        >>> sanitize_string("  hello world  ")
        "hello world"
        >>> sanitize_string("hello world", max_length=5)
        "hello"
    """
    if not value:
        return ""

    sanitized = value.strip()

    if max_length and len(sanitized) > max_length:
        return sanitized[:max_length]

    return sanitized


def excerpt(value: str, max_length: int, suffix: str = Notification.EXCERPT_SUFFIX) -> str:
    """Keep the first ``max_length`` characters and mark the cut with a suffix.

    The suffix is appended after the kept characters, so a truncated result
    is ``max_length + len(suffix)`` characters long.

    Examples:
        >>> excerpt("Hello world", 5)
        "Hello..."
        >>> excerpt("Hi", 5)
        "Hi"
    """
    if not value or len(value) <= max_length:
        return value or ""

    return value[:max_length] + suffix


def escape_markdown(value: str) -> str:
    """Escape Telegram legacy Markdown control characters.

    Examples:
        >>> escape_markdown("solar_panels *now*")
        "solar\\_panels \\*now\\*"
    """
    if not value:
        return ""
    return _MARKDOWN_SPECIAL.sub(r'\\\1', value)


def sanitize_log_data(data: dict[str, Any]) -> dict[str, Any]:
    """Sanitize log data by masking applicant contact details.

    Fields treated as PII:
    - email / email address: local part masked
    - phone: all but the last 4 digits masked
    - date_of_birth / dateOfBirth: fully masked

    Args:
        data: Dictionary containing log data that may include PII

    Returns:
        Dictionary with PII fields masked

    Examples:
        >>> sanitize_log_data({'email': 'jane@example.com', 'country': 'ES'})
        {'email': 'j****@example.com', 'country': 'ES'}
    """
    if not data or not isinstance(data, dict):
        return data

    sanitized = data.copy()

    if sanitized.get('email'):
        sanitized['email'] = mask_email(str(sanitized['email']))

    if sanitized.get('phone'):
        sanitized['phone'] = mask_value(str(sanitized['phone']))

    for key in ('date_of_birth', 'dateOfBirth'):
        if sanitized.get(key):
            sanitized[key] = Security.MASK_FULL

    for key, value in sanitized.items():
        if isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)

    return sanitized
