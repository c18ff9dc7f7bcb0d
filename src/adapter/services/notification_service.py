"""Invoice notification adapters

Without a delivery provider configured, notifications are only logged.
With one, they are posted to its webhook; the provider later confirms
delivery with the same resource_id.
"""

import logging
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService, NotifyData

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """Writes the notification to the log and reports it as dispatched"""

    async def notify(self, data: NotifyData) -> bool:
        logger.info(
            "Invoice notification for %s queued to %s (%s)",
            data.resource_id, data.to_email, data.subject,
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Posts notifications to a delivery provider webhook

    Args:
        webhook_url: Provider endpoint receiving the JSON payload
        timeout: Request timeout in seconds
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        self.webhook_url = webhook_url
        self.timeout = timeout

    @staticmethod
    def build_payload(data: NotifyData) -> dict:
        return {
            "type": "invoice_notification",
            "resource_id": str(data.resource_id),
            "to_email": data.to_email,
            "subject": data.subject,
            "message": data.message,
        }

    async def notify(self, data: NotifyData) -> bool:
        """
        Hand the notification to the provider

        Returns:
            True when the provider accepted it, False on any HTTP failure
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=self.build_payload(data))
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Delivery provider rejected invoice %s: %s", data.resource_id, e)
            return False

        logger.info("Invoice %s handed to delivery provider", data.resource_id)
        return True


def create_notification_service(
    webhook_url: Optional[str] = None, timeout: float = 10.0
) -> NotificationService:
    """Webhook delivery when a provider URL is configured, log-only otherwise"""
    if webhook_url:
        return WebhookNotificationService(webhook_url, timeout=timeout)
    return LoggingNotificationService()
