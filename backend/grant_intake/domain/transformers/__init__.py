"""Data transformers.

Responsible for converting between different data representations:
- ORM models → notification text
"""

from .notification import admin_base_url, render_application_message

__all__ = [
    "admin_base_url",
    "render_application_message",
]
