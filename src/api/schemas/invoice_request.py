"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests.
"""

from pydantic import BaseModel, EmailStr, Field


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    customer_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Customer name (required, non-empty)"
    )

    customer_email: EmailStr = Field(
        ...,
        description="Customer email address"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "customer_name": "Jane Doe",
                "customer_email": "jane@example.com"
            }
        }


class AddProductLineRequestSchema(BaseModel):
    """
    Request schema for adding a product line

    Used for POST /invoices/{invoice_id}/product-lines endpoint.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Product name (required, non-empty)"
    )

    quantity: int = Field(
        ...,
        ge=1,
        description="Number of units (must be >= 1)"
    )

    unit_price: int = Field(
        ...,
        ge=1,
        description="Price per unit in minor currency units (must be >= 1)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Widget",
                "quantity": 2,
                "unit_price": 500
            }
        }
