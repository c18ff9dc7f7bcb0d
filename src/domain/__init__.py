from .exceptions import (
    InvoiceDomainError,
    InvalidStatusTransition,
    InvalidProductLine,
    ProductLineError,
)
from .product_line import ProductLine
from .invoice import Invoice, InvoiceStatus

__all__ = [
    "InvoiceDomainError",
    "InvalidStatusTransition",
    "InvalidProductLine",
    "ProductLineError",
    "ProductLine",
    "Invoice",
    "InvoiceStatus",
]
