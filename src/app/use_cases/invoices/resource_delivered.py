"""ResourceDeliveredListener

Routes delivery confirmations from the notification channel back to the
invoice they refer to.
"""

from typing import Optional
from .dtos import InvoiceDTO, ResourceDeliveredEvent
from .invoice_service import InvoiceService


class ResourceDeliveredListener:
    """Marks the delivered invoice as sent to the client"""

    def __init__(self, invoice_service: InvoiceService):
        self.invoice_service = invoice_service

    async def handle(self, event: ResourceDeliveredEvent) -> Optional[InvoiceDTO]:
        return await self.invoice_service.mark_as_sent_to_client(event.resource_id)
