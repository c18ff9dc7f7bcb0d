"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from uuid import UUID
from src.domain.invoice import Invoice


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    The invoice header and its full product line set are stored and loaded
    together as one aggregate.
    """

    @abstractmethod
    async def save(self, invoice: Invoice) -> None:
        """
        Insert or update an invoice

        Upsert keyed by invoice id. The stored product lines are replaced by
        the invoice's current lines.

        Args:
            invoice: Invoice aggregate to persist
        """
        pass

    @abstractmethod
    async def find_by_id(self, invoice_id: UUID, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the invoice row until the transaction ends

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Invoice]:
        """
        Retrieve all invoices

        Returns:
            List of invoices in storage order
        """
        pass
