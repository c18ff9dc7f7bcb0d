from .models import InvoiceModel, ProductLineModel
from .invoice_repository import SqlAlchemyInvoiceRepository

__all__ = [
    "InvoiceModel",
    "ProductLineModel",
    "SqlAlchemyInvoiceRepository",
]
