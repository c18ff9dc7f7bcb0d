"""Notification Service Interface

Defines the contract for telling a customer that an invoice was dispatched.
"""

from abc import ABC, abstractmethod
from uuid import UUID
from pydantic import BaseModel, Field


class NotifyData(BaseModel):
    """
    Notification payload

    resource_id identifies the invoice so a later delivery confirmation
    can be routed back to it.
    """

    resource_id: UUID = Field(
        ...,
        description="Identifier of the notified resource (invoice ID)"
    )

    to_email: str = Field(
        ...,
        description="Destination email address"
    )

    subject: str = Field(
        ...,
        description="Message subject"
    )

    message: str = Field(
        ...,
        description="Message body"
    )

    class Config:
        frozen = True


class NotificationService(ABC):
    """
    Abstract notification service for invoice dispatch messages

    Implementations can deliver via:
    - Logging (development)
    - Webhook (HTTP POST to a delivery provider)
    """

    @abstractmethod
    async def notify(self, data: NotifyData) -> bool:
        """
        Send a notification

        Fire-and-forget: implementations must not raise.

        Args:
            data: NotifyData with destination, subject and message

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
