"""Product Line Domain Entity

Individual priced item attached to an invoice.
"""

from dataclasses import dataclass
from uuid import UUID
from src.domain.exceptions import ProductLineError


@dataclass(frozen=True)
class ProductLine:
    """
    Product Line - Immutable line item owned by exactly one invoice

    Domain Rules:
    - quantity must be > 0
    - unit_price must be > 0 (minor currency units)
    - total_price = quantity * unit_price
    - Never mutated after construction
    - name is not checked here; the API request schema requires it non-empty
    """

    id: UUID
    name: str
    quantity: int
    unit_price: int

    def __post_init__(self):
        if self.quantity <= 0:
            raise ProductLineError("quantity must be greater than zero")

        if self.unit_price <= 0:
            raise ProductLineError("unit price must be greater than zero")

    @property
    def total_price(self) -> int:
        return self.quantity * self.unit_price

    def is_valid(self) -> bool:
        return self.quantity > 0 and self.unit_price > 0
