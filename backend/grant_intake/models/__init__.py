"""Models package.

Export all models for easy importing
"""

from .application import Application

__all__ = [
    "Application",
]
