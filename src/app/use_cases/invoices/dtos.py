"""Data Transfer Objects for Invoice Use Cases

Immutable Pydantic snapshots of the invoice aggregate. These are the only
representation of an invoice returned past the service boundary.
"""

from typing import Tuple
from uuid import UUID
from pydantic import BaseModel, Field
from src.domain.invoice import Invoice
from src.domain.product_line import ProductLine


class ProductLineDTO(BaseModel):
    """Snapshot of a single product line"""

    id: str = Field(
        ...,
        description="Product line identifier (UUID)"
    )

    name: str = Field(
        ...,
        description="Product name"
    )

    quantity: int = Field(
        ...,
        description="Number of units"
    )

    unit_price: int = Field(
        ...,
        description="Price per unit in minor currency units"
    )

    total_price: int = Field(
        ...,
        description="quantity * unit_price"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "0b6f0a55-3bd4-4f7e-a1b6-9f5c6f0b7b21",
                "name": "Widget",
                "quantity": 2,
                "unit_price": 500,
                "total_price": 1000
            }
        }

    @classmethod
    def from_entity(cls, product_line: ProductLine) -> "ProductLineDTO":
        return cls(
            id=str(product_line.id),
            name=product_line.name,
            quantity=product_line.quantity,
            unit_price=product_line.unit_price,
            total_price=product_line.total_price,
        )


class InvoiceDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by every InvoiceService operation that yields an invoice.
    """

    id: str = Field(
        ...,
        description="Invoice identifier (UUID)"
    )

    status: str = Field(
        ...,
        description="Invoice status (draft, sending, sent-to-client)"
    )

    customer_name: str = Field(
        ...,
        description="Customer name"
    )

    customer_email: str = Field(
        ...,
        description="Customer email address"
    )

    product_lines: Tuple[ProductLineDTO, ...] = Field(
        default=(),
        description="Product lines in insertion order"
    )

    total_price: int = Field(
        ...,
        description="Sum of all product line totals in minor currency units"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "3f2c1e9a-8d7b-4c6a-9e5f-1a2b3c4d5e6f",
                "status": "draft",
                "customer_name": "Jane Doe",
                "customer_email": "jane@example.com",
                "product_lines": [
                    {
                        "id": "0b6f0a55-3bd4-4f7e-a1b6-9f5c6f0b7b21",
                        "name": "Widget",
                        "quantity": 2,
                        "unit_price": 500,
                        "total_price": 1000
                    }
                ],
                "total_price": 1000
            }
        }

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceDTO":
        return cls(
            id=str(invoice.id),
            status=invoice.status.value,
            customer_name=invoice.customer_name,
            customer_email=invoice.customer_email,
            product_lines=tuple(
                ProductLineDTO.from_entity(line) for line in invoice.product_lines
            ),
            total_price=invoice.total_price,
        )


class ResourceDeliveredEvent(BaseModel):
    """Delivery confirmation for a previously notified resource"""

    resource_id: UUID = Field(
        ...,
        description="Identifier carried by the original notification (invoice ID)"
    )

    class Config:
        frozen = True
