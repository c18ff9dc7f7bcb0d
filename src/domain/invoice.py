"""Invoice Domain Entity

Aggregate root for invoice lifecycle: owns product lines, derives the total
price, and guards the status workflow.
"""

from enum import Enum
from typing import Iterable, List, Tuple
from uuid import UUID
from src.domain.exceptions import InvalidProductLine, InvalidStatusTransition
from src.domain.product_line import ProductLine


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENDING = "sending"
    SENT_TO_CLIENT = "sent-to-client"


class Invoice:
    """
    Invoice - Customer invoice and its product lines

    Domain Rules:
    - Created in draft status with no product lines and a zero total
    - Status transitions: draft -> sending -> sent-to-client, never backwards
    - total_price is the sum of all product_lines.total_price
    - Product lines are append-only and kept in insertion order
    - Only draft invoices with at least one valid line can be sent
    """

    def __init__(
        self,
        id: UUID,
        customer_name: str,
        customer_email: str,
        status: InvoiceStatus,
    ):
        self._id = id
        self._customer_name = customer_name
        self._customer_email = customer_email
        self._status = status
        self._product_lines: List[ProductLine] = []
        self._total_price = 0

    @classmethod
    def create(cls, id: UUID, customer_name: str, customer_email: str) -> "Invoice":
        """Create a new draft invoice"""
        return cls(id, customer_name, customer_email, InvoiceStatus.DRAFT)

    @classmethod
    def restore(
        cls,
        id: UUID,
        customer_name: str,
        customer_email: str,
        status: InvoiceStatus,
        product_lines: Iterable[ProductLine],
    ) -> "Invoice":
        """
        Rebuild an invoice from persisted state

        Used by repository adapters only. Status is taken as stored, without
        replaying the transitions that produced it.
        """
        invoice = cls(id, customer_name, customer_email, InvoiceStatus(status))
        invoice._product_lines = list(product_lines)
        invoice._recalculate_total_price()
        return invoice

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def customer_name(self) -> str:
        return self._customer_name

    @property
    def customer_email(self) -> str:
        return self._customer_email

    @property
    def status(self) -> InvoiceStatus:
        return self._status

    @property
    def product_lines(self) -> Tuple[ProductLine, ...]:
        return tuple(self._product_lines)

    @property
    def total_price(self) -> int:
        return self._total_price

    def add_product_line(self, product_line: ProductLine) -> None:
        """
        Append a product line and recompute the total

        No status guard: lines are accepted in every status.
        """
        self._product_lines.append(product_line)
        self._recalculate_total_price()

    def _recalculate_total_price(self) -> None:
        self._total_price = sum(line.total_price for line in self._product_lines)

    def send(self) -> None:
        """
        Move the invoice from draft to sending

        Raises:
            InvalidStatusTransition: invoice is not in draft status
            InvalidProductLine: invoice has no lines, or a line is invalid
        """
        if self._status != InvoiceStatus.DRAFT:
            raise InvalidStatusTransition("invalid_status_transition_send")

        if not self._product_lines:
            raise InvalidProductLine("no_product_lines")

        if not all(line.is_valid() for line in self._product_lines):
            raise InvalidProductLine("invalid_product_lines")

        self._status = InvoiceStatus.SENDING

    def mark_as_sent_to_client(self) -> None:
        """
        Move the invoice from sending to sent-to-client

        Raises:
            InvalidStatusTransition: invoice is not in sending status
        """
        if self._status != InvoiceStatus.SENDING:
            raise InvalidStatusTransition("invalid_status_transition_mark_sent")

        self._status = InvoiceStatus.SENT_TO_CLIENT

    def __repr__(self) -> str:
        return (
            f"Invoice(id={self._id}, status={self._status.value}, "
            f"lines={len(self._product_lines)}, total_price={self._total_price})"
        )
