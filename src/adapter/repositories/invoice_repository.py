"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.product_line import ProductLine
from .models import InvoiceModel, ProductLineModel, utc_now


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Maps the Invoice aggregate to the invoices and product_lines tables.
    Writes are flushed but not committed; the unit of work commits.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: InvoiceModel, line_models: List[ProductLineModel]) -> Invoice:
        product_lines = [
            ProductLine(
                id=UUID(line.id),
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in sorted(line_models, key=lambda line: line.position)
        ]
        return Invoice.restore(
            id=UUID(model.id),
            customer_name=model.customer_name,
            customer_email=model.customer_email,
            status=InvoiceStatus(model.status),
            product_lines=product_lines,
        )

    async def _get_lines(self, invoice_ids: List[str]) -> Dict[str, List[ProductLineModel]]:
        lines_by_invoice: Dict[str, List[ProductLineModel]] = defaultdict(list)
        if not invoice_ids:
            return lines_by_invoice

        statement = (
            select(ProductLineModel)
            .where(ProductLineModel.invoice_id.in_(invoice_ids))
            .order_by(ProductLineModel.position)
        )
        result = await self.session.execute(statement)
        for line in result.scalars().all():
            lines_by_invoice[line.invoice_id].append(line)
        return lines_by_invoice

    async def save(self, invoice: Invoice) -> None:
        """
        Insert or update an invoice with its product lines

        Stored lines missing from the aggregate are deleted and new ones are
        inserted, so the stored set ends up equal to invoice.product_lines.

        Args:
            invoice: Invoice aggregate to persist
        """
        invoice_id = str(invoice.id)

        model = await self.session.get(InvoiceModel, invoice_id)
        if model is None:
            model = InvoiceModel(
                id=invoice_id,
                customer_name=invoice.customer_name,
                customer_email=invoice.customer_email,
                status=invoice.status.value,
            )
        else:
            model.status = invoice.status.value
            model.updated_at = utc_now()
        self.session.add(model)

        result = await self.session.execute(
            select(ProductLineModel.id).where(ProductLineModel.invoice_id == invoice_id)
        )
        stored_ids = set(result.scalars().all())
        current_ids = {str(line.id) for line in invoice.product_lines}

        stale_ids = stored_ids - current_ids
        if stale_ids:
            await self.session.execute(
                delete(ProductLineModel).where(ProductLineModel.id.in_(list(stale_ids)))
            )

        for position, line in enumerate(invoice.product_lines):
            if str(line.id) in stored_ids:
                continue
            self.session.add(
                ProductLineModel(
                    id=str(line.id),
                    invoice_id=invoice_id,
                    position=position,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
            )

        await self.session.flush()

    async def find_by_id(self, invoice_id: UUID, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID with optional row-level locking

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(InvoiceModel).where(InvoiceModel.id == str(invoice_id))

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        model = result.scalar_one_or_none()
        if not model:
            return None

        lines = await self._get_lines([model.id])
        return self._to_entity(model, lines[model.id])

    async def find_all(self) -> List[Invoice]:
        """
        Retrieve all invoices, oldest first, ties broken by id

        Returns:
            List of invoices
        """
        statement = select(InvoiceModel).order_by(InvoiceModel.created_at, InvoiceModel.id)
        result = await self.session.execute(statement)
        models = list(result.scalars().all())

        lines = await self._get_lines([model.id for model in models])
        return [self._to_entity(model, lines[model.id]) for model in models]
