"""InvoiceService

Orchestrates the invoice lifecycle: create, add product lines, send, and
confirm delivery. The only component that persists invoice changes.
"""

from typing import Optional, List
from uuid import UUID, uuid4
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.notification_service import NotificationService, NotifyData
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice
from src.domain.product_line import ProductLine
from .dtos import InvoiceDTO


class InvoiceService:
    """
    Use Cases: Invoice lifecycle

    Business Rules:
    1. Every operation is load -> mutate -> save -> commit
    2. Unknown invoice IDs return None; nothing is written
    3. Domain errors (InvalidStatusTransition, InvalidProductLine) propagate
       unchanged after the transaction is rolled back
    4. Sending notifies the customer once, after send() succeeds and before
       the invoice is saved

    Flow (send_invoice):
    1. Load invoice with row lock
    2. Transition draft -> sending
    3. Notify customer
    4. Save invoice
    5. Commit transaction
    6. Return snapshot
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        notification_service: NotificationService,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.notification_service = notification_service

    async def create_invoice(self, customer_name: str, customer_email: str) -> InvoiceDTO:
        """
        Create and persist a new draft invoice

        Args:
            customer_name: Customer name (pre-validated)
            customer_email: Customer email (pre-validated)

        Returns:
            InvoiceDTO of the draft invoice
        """
        try:
            invoice = Invoice.create(uuid4(), customer_name, customer_email)

            await self.invoice_repo.save(invoice)
            await self.uow.commit()

            return InvoiceDTO.from_entity(invoice)
        except Exception:
            await self.uow.rollback()
            raise

    async def get_invoice(self, invoice_id: UUID) -> Optional[InvoiceDTO]:
        invoice = await self.invoice_repo.find_by_id(invoice_id)

        if not invoice:
            return None

        return InvoiceDTO.from_entity(invoice)

    async def get_all_invoices(self) -> List[InvoiceDTO]:
        invoices = await self.invoice_repo.find_all()
        return [InvoiceDTO.from_entity(invoice) for invoice in invoices]

    async def add_product_line(
        self,
        invoice_id: UUID,
        name: str,
        quantity: int,
        unit_price: int,
    ) -> Optional[InvoiceDTO]:
        """
        Append a product line to an invoice

        Args:
            invoice_id: Invoice ID
            name: Product name
            quantity: Number of units (must be > 0)
            unit_price: Price per unit in minor units (must be > 0)

        Returns:
            Updated InvoiceDTO, or None if the invoice does not exist

        Raises:
            ProductLineError: quantity or unit_price is not positive
        """
        try:
            invoice = await self.invoice_repo.find_by_id(invoice_id, for_update=True)

            if not invoice:
                return None

            product_line = ProductLine(
                id=uuid4(),
                name=name,
                quantity=quantity,
                unit_price=unit_price,
            )
            invoice.add_product_line(product_line)

            await self.invoice_repo.save(invoice)
            await self.uow.commit()

            return InvoiceDTO.from_entity(invoice)
        except Exception:
            await self.uow.rollback()
            raise

    async def send_invoice(self, invoice_id: UUID) -> Optional[InvoiceDTO]:
        """
        Send an invoice to its customer

        Args:
            invoice_id: Invoice ID

        Returns:
            Updated InvoiceDTO (status=sending), or None if the invoice does not exist

        Raises:
            InvalidStatusTransition: invoice is not in draft status
            InvalidProductLine: invoice has no lines or an invalid line
        """
        try:
            invoice = await self.invoice_repo.find_by_id(invoice_id, for_update=True)

            if not invoice:
                return None

            invoice.send()

            await self.notification_service.notify(
                NotifyData(
                    resource_id=invoice.id,
                    to_email=invoice.customer_email,
                    subject=f"Invoice #{invoice.id}",
                    message=f"Dear {invoice.customer_name}, your invoice has been sent.",
                )
            )

            await self.invoice_repo.save(invoice)
            await self.uow.commit()

            return InvoiceDTO.from_entity(invoice)
        except Exception:
            await self.uow.rollback()
            raise

    async def mark_as_sent_to_client(self, invoice_id: UUID) -> Optional[InvoiceDTO]:
        """
        Confirm delivery of a sent invoice

        Driven by a delivery confirmation, never by an end user.

        Args:
            invoice_id: Invoice ID

        Returns:
            Updated InvoiceDTO (status=sent-to-client), or None if the invoice does not exist

        Raises:
            InvalidStatusTransition: invoice is not in sending status
        """
        try:
            invoice = await self.invoice_repo.find_by_id(invoice_id, for_update=True)

            if not invoice:
                return None

            invoice.mark_as_sent_to_client()

            await self.invoice_repo.save(invoice)
            await self.uow.commit()

            return InvoiceDTO.from_entity(invoice)
        except Exception:
            await self.uow.rollback()
            raise
