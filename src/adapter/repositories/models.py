"""SQLModel table models for invoice persistence

Storage representation of the invoice aggregate. Kept apart from the domain
entities in src/domain, which carry the business rules; the repository maps
between the two.
"""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Integer, String


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InvoiceModel(SQLModel, table=True):
    """Invoice header row"""

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_created_at', 'created_at'),
    )

    id: str = Field(
        sa_column=Column(String(36), primary_key=True),
        description="Invoice identifier (UUID string)"
    )

    customer_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Customer name"
    )

    customer_email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Customer email address"
    )

    status: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Invoice status (draft, sending, sent-to-client)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last update timestamp"
    )


class ProductLineModel(SQLModel, table=True):
    """Product line row, ordered within its invoice by position"""

    __tablename__ = "product_lines"
    __table_args__ = (
        Index('ix_product_lines_invoice_id', 'invoice_id'),
    )

    id: str = Field(
        sa_column=Column(String(36), primary_key=True),
        description="Product line identifier (UUID string)"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Zero-based insertion order within the invoice"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Product name"
    )

    quantity: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Number of units"
    )

    unit_price: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Price per unit in minor currency units"
    )
