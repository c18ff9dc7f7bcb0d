"""Invoice API Routes

FastAPI routes for invoice lifecycle operations.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status

from src.api.error import not_found_error
from src.api.schemas.invoice_request import CreateInvoiceRequestSchema, AddProductLineRequestSchema
from src.app.use_cases.invoices import InvoiceService, InvoiceDTO
from src.depends import get_invoice_service

router = APIRouter(prefix="/invoices", tags=["Invoices"])

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Invoice not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVOICE_NOT_FOUND",
                        "message": "Invoice not found."
                    }
                }
            }
        }
    }
}


@router.get(
    "",
    response_model=List[InvoiceDTO],
    status_code=status.HTTP_200_OK,
)
async def list_invoices(service: InvoiceService = Depends(get_invoice_service)):
    """
    List all invoices with their product lines.

    **Returns:**
    - 200: Invoices in storage order
    """
    return await service.get_all_invoices()


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def get_invoice(
    invoice_id: UUID,
    service: InvoiceService = Depends(get_invoice_service),
):
    """
    Fetch a single invoice.

    **Path parameters:**
    - `invoice_id` (required): Invoice ID (UUID)

    **Returns:**
    - 200: Invoice found
    - 404: Invoice not found
    """
    invoice = await service.get_invoice(invoice_id)

    if invoice is None:
        raise not_found_error()

    return invoice


@router.post(
    "",
    response_model=InvoiceDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    service: InvoiceService = Depends(get_invoice_service),
):
    """
    Create a draft invoice.

    **Request body:**
    - `customer_name` (required): Customer name
    - `customer_email` (required): Customer email address

    **Returns:**
    - 201: Draft invoice created with no product lines
    - 422: Invalid request parameters
    """
    return await service.create_invoice(request.customer_name, str(request.customer_email))


@router.post(
    "/{invoice_id}/product-lines",
    response_model=InvoiceDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        **NOT_FOUND_RESPONSE,
        400: {
            "description": "Invalid product line",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "product_line",
                            "message": "Product line error: quantity must be greater than zero"
                        }
                    }
                }
            }
        },
    },
)
async def add_product_line(
    invoice_id: UUID,
    request: AddProductLineRequestSchema,
    service: InvoiceService = Depends(get_invoice_service),
):
    """
    Append a product line to an invoice.

    **Path parameters:**
    - `invoice_id` (required): Invoice ID (UUID)

    **Request body:**
    - `name` (required): Product name
    - `quantity` (required): Number of units (>= 1)
    - `unit_price` (required): Price per unit in minor currency units (>= 1)

    **Returns:**
    - 201: Product line added, updated invoice returned
    - 400: Product line rejected by the domain
    - 404: Invoice not found
    """
    invoice = await service.add_product_line(
        invoice_id,
        request.name,
        request.quantity,
        request.unit_price,
    )

    if invoice is None:
        raise not_found_error()

    return invoice


@router.post(
    "/{invoice_id}/send",
    response_model=InvoiceDTO,
    status_code=status.HTTP_200_OK,
    responses={
        **NOT_FOUND_RESPONSE,
        400: {
            "description": "Invoice cannot be sent",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "no_product_lines",
                            "message": "Cannot send invoice: no product lines added."
                        }
                    }
                }
            }
        },
    },
)
async def send_invoice(
    invoice_id: UUID,
    service: InvoiceService = Depends(get_invoice_service),
):
    """
    Send a draft invoice to its customer.

    Moves the invoice to `sending` and notifies the customer. Delivery is
    confirmed later by the notification channel.

    **Path parameters:**
    - `invoice_id` (required): Invoice ID (UUID)

    **Returns:**
    - 200: Invoice is being sent
    - 400: Invoice is not a draft, or has no valid product lines
    - 404: Invoice not found
    """
    invoice = await service.send_invoice(invoice_id)

    if invoice is None:
        raise not_found_error()

    return invoice
