"""Invoice Domain Exceptions

Errors raised by the invoice aggregate when a business rule is violated.
Each error carries a short code that the API layer uses to look up the
client-facing message.
"""


class InvoiceDomainError(Exception):
    """Base class for invoice business-rule violations"""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code


class InvalidStatusTransition(InvoiceDomainError):
    """
    Raised when a status transition does not start from the required status

    Codes:
    - invalid_status_transition_send
    - invalid_status_transition_mark_sent
    """


class InvalidProductLine(InvoiceDomainError):
    """
    Raised when product lines prevent an operation

    Codes:
    - no_product_lines
    - invalid_product_lines
    """


class ProductLineError(InvalidProductLine):
    """Raised by ProductLine construction; the code is a free-text reason"""
