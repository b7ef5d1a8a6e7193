"""Telegram notification dispatcher.

Sends one summary message per submitted application to the support chat.
Delivery is best-effort: at most one attempt, failures are logged and
swallowed, and the caller's result never depends on the outcome.
"""

import time

import httpx

from ...core.config import Settings, settings as default_settings
from ...core.constants import Notification
from ...core.exceptions import NotificationError
from ...core.logging import get_logger
from ...core.metrics import notification_duration_seconds, notifications_total
from ...domain.transformers import render_application_message
from ...models.application import Application

logger = get_logger(__name__)


class TelegramNotifier:
    """Best-effort dispatcher for the Telegram Bot API.

    Args:
        config: Settings holding the bot token, chat id and API base URL
        transport: Optional httpx transport (tests inject a MockTransport)
    """

    def __init__(
        self,
        config: Settings = default_settings,
        transport: httpx.AsyncBaseTransport | None = None
    ):
        self.config = config
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self.config.telegram_configured

    @property
    def endpoint(self) -> str:
        return (
            f"{self.config.TELEGRAM_API_URL.rstrip('/')}"
            f"/bot{self.config.TELEGRAM_BOT_TOKEN}/{Notification.SEND_MESSAGE_METHOD}"
        )

    def build_payload(self, application: Application) -> dict:
        return {
            'chat_id': self.config.TELEGRAM_SUPPORT_CHAT_ID,
            'text': render_application_message(application, self.config),
            'parse_mode': Notification.PARSE_MODE,
            'disable_web_page_preview': True,
        }

    async def notify(self, application: Application) -> str:
        """Send the summary for ``application``.

        Never raises. Returns the outcome (sent, skipped or failed) for
        metrics and tests only.
        """
        if not self.is_configured:
            logger.info(
                "Telegram configuration missing, skipping notification",
                extra={'application_id': application.application_id}
            )
            notifications_total.labels(outcome=Notification.OUTCOME_SKIPPED).inc()
            return Notification.OUTCOME_SKIPPED

        start_time = time.time()
        try:
            await self._send(self.build_payload(application))
        except NotificationError as e:
            logger.error(
                "Failed to send Telegram notification",
                extra={
                    'application_id': application.application_id,
                    'error': str(e)
                },
                exc_info=True
            )
            notifications_total.labels(outcome=Notification.OUTCOME_FAILED).inc()
            return Notification.OUTCOME_FAILED
        except Exception as e:
            logger.error(
                "Unexpected error while sending Telegram notification",
                extra={
                    'application_id': application.application_id,
                    'error': str(e),
                    'error_type': type(e).__name__
                },
                exc_info=True
            )
            notifications_total.labels(outcome=Notification.OUTCOME_FAILED).inc()
            return Notification.OUTCOME_FAILED
        finally:
            notification_duration_seconds.observe(time.time() - start_time)

        logger.info(
            "Telegram notification sent",
            extra={'application_id': application.application_id}
        )
        notifications_total.labels(outcome=Notification.OUTCOME_SENT).inc()
        return Notification.OUTCOME_SENT

    async def _send(self, payload: dict) -> None:
        try:
            async with httpx.AsyncClient(
                timeout=self.config.TELEGRAM_TIMEOUT,
                transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, json=payload)
        except httpx.HTTPError as e:
            # The exception text can carry the request URL, which embeds the token
            raise NotificationError(f"Telegram API request failed: {type(e).__name__}") from None

        if not response.is_success:
            raise NotificationError(
                f"Telegram API error: {response.status_code} {response.reason_phrase}"
            )


notifier = TelegramNotifier()


def get_notifier() -> TelegramNotifier:
    """Dependency returning the process-wide notifier."""
    return notifier
