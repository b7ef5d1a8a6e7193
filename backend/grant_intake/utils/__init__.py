"""Utility functions organized by domain.

For convenience, all functions are re-exported here.
However, prefer importing from specific modules for better clarity:
    from grant_intake.utils.strings import excerpt
    from grant_intake.utils.generators import generate_application_id
"""

# Converters
from .converters import normalize_path, parse_limit

# Generators
from .generators import generate_application_id, generate_request_id

# Strings
from .strings import (
    escape_markdown,
    excerpt,
    mask_email,
    mask_value,
    sanitize_log_data,
    sanitize_string,
)

__all__ = [
    # Converters
    "normalize_path",
    "parse_limit",
    # Generators
    "generate_application_id",
    "generate_request_id",
    # Strings
    "escape_markdown",
    "excerpt",
    "mask_email",
    "mask_value",
    "sanitize_log_data",
    "sanitize_string",
]
