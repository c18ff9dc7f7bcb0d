"""Invoice domain use cases"""
from .invoice_service import InvoiceService
from .resource_delivered import ResourceDeliveredListener
from .dtos import (
    InvoiceDTO,
    ProductLineDTO,
    ResourceDeliveredEvent,
)

__all__ = [
    "InvoiceService",
    "ResourceDeliveredListener",
    "InvoiceDTO",
    "ProductLineDTO",
    "ResourceDeliveredEvent",
]
