"""Messaging infrastructure.

Outbound notifications to external messaging services:
- telegram.py: Telegram Bot API dispatcher
"""

from .telegram import TelegramNotifier, get_notifier, notifier

__all__ = [
    "TelegramNotifier",
    "get_notifier",
    "notifier",
]
