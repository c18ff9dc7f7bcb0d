"""API error handling

Translates domain error codes into client-facing messages and HTTP
statuses. Every error response has the shape
{"error": {"code": ..., "message": ...}}.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from src.domain.exceptions import InvalidProductLine, InvalidStatusTransition

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    "not_found": "Invoice not found.",
    "generic": "An error occurred while processing the invoice.",
    "invalid_status_transition_send": "Cannot send invoice: invoice must be in draft status.",
    "invalid_status_transition_mark_sent": "Cannot mark invoice as sent: invoice must be in sending status.",
    "invalid_status_transition": "Invalid status transition: {message}",
    "no_product_lines": "Cannot send invoice: no product lines added.",
    "invalid_product_lines": "Cannot send invoice: one or more product lines are invalid.",
    "product_line": "Product line error: {message}",
}


class ErrorDetail(BaseModel):
    code: str
    message: str


class ClientError(Exception):
    """Error returned to the client as-is with the given status code"""

    def __init__(self, error: ErrorDetail, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


def not_found_error() -> ClientError:
    return ClientError(
        ErrorDetail(code="INVOICE_NOT_FOUND", message=ERROR_MESSAGES["not_found"]),
        status_code=status.HTTP_404_NOT_FOUND,
    )


def translate(code: str, fallback: str) -> ErrorDetail:
    """
    Look up the message for a domain error code

    Codes without an entry (free-text reasons) use the fallback entry with
    the reason interpolated.
    """
    if code in ERROR_MESSAGES:
        return ErrorDetail(code=code, message=ERROR_MESSAGES[code])
    return ErrorDetail(code=fallback, message=ERROR_MESSAGES[fallback].format(message=code))


def _error_response(error: ErrorDetail, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error.model_dump()})


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return _error_response(exc.error, exc.status_code)


async def invalid_status_transition_handler(
    request: Request, exc: InvalidStatusTransition
) -> JSONResponse:
    logger.info(f"Rejected status transition on {request.url.path}: {exc.code}")
    error = translate(exc.code, "invalid_status_transition")
    return _error_response(error, status.HTTP_400_BAD_REQUEST)


async def invalid_product_line_handler(request: Request, exc: InvalidProductLine) -> JSONResponse:
    logger.info(f"Rejected product line on {request.url.path}: {exc.code}")
    error = translate(exc.code, "product_line")
    return _error_response(error, status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    error = ErrorDetail(code="INTERNAL_ERROR", message=ERROR_MESSAGES["generic"])
    return _error_response(error, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(InvalidStatusTransition, invalid_status_transition_handler)
    app.add_exception_handler(InvalidProductLine, invalid_product_line_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
