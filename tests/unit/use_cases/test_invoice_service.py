"""Unit tests for InvoiceService

Tests cover:
- Invoice creation and retrieval
- Adding product lines
- Sending (transition, notification, ordering)
- Delivery confirmation
- Not-found handling without writes
- Rollback and propagation of domain errors
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

from src.app.services.notification_service import NotifyData
from src.app.use_cases.invoices.invoice_service import InvoiceService
from src.app.use_cases.invoices.dtos import InvoiceDTO
from src.domain.exceptions import InvalidProductLine, InvalidStatusTransition, ProductLineError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.product_line import ProductLine


@pytest.fixture
def invoice_service(mock_uow, mock_invoice_repo, mock_notification_service):
    """InvoiceService instance with mocked dependencies"""
    return InvoiceService(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        notification_service=mock_notification_service,
    )


@pytest.fixture
def draft_invoice():
    return Invoice.create(uuid4(), "Jane Doe", "jane@example.com")


@pytest.fixture
def invoice_with_line(draft_invoice):
    draft_invoice.add_product_line(
        ProductLine(id=uuid4(), name="Widget", quantity=2, unit_price=500)
    )
    return draft_invoice


@pytest.mark.asyncio
class TestCreateInvoice:
    """Test invoice creation"""

    async def test_create_invoice_persists_draft(
        self, invoice_service, mock_invoice_repo, mock_uow
    ):
        """
        Given: Customer name and email
        When: create_invoice is called
        Then: A draft invoice is saved, committed, and returned as a snapshot
        """
        # Act
        result = await invoice_service.create_invoice("Jane Doe", "jane@example.com")

        # Assert
        assert isinstance(result, InvoiceDTO)
        assert result.customer_name == "Jane Doe"
        assert result.customer_email == "jane@example.com"
        assert result.status == "draft"
        assert result.product_lines == ()
        assert result.total_price == 0
        UUID(result.id)

        mock_invoice_repo.save.assert_called_once()
        saved = mock_invoice_repo.save.call_args.args[0]
        assert str(saved.id) == result.id
        assert saved.status == InvoiceStatus.DRAFT
        mock_uow.commit.assert_called_once()

    async def test_each_invoice_gets_new_id(self, invoice_service):
        first = await invoice_service.create_invoice("A", "a@example.com")
        second = await invoice_service.create_invoice("B", "b@example.com")

        assert first.id != second.id

    async def test_rollback_on_storage_failure(
        self, invoice_service, mock_invoice_repo, mock_uow
    ):
        # Arrange
        mock_invoice_repo.save = AsyncMock(side_effect=RuntimeError("Database error"))

        # Act & Assert
        with pytest.raises(RuntimeError, match="Database error"):
            await invoice_service.create_invoice("Jane Doe", "jane@example.com")

        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestGetInvoices:
    """Test read-only lookups"""

    async def test_get_invoice_returns_snapshot(
        self, invoice_service, mock_invoice_repo, invoice_with_line
    ):
        mock_invoice_repo.find_by_id = AsyncMock(return_value=invoice_with_line)

        result = await invoice_service.get_invoice(invoice_with_line.id)

        assert result.id == str(invoice_with_line.id)
        assert len(result.product_lines) == 1
        assert result.product_lines[0].name == "Widget"
        assert result.product_lines[0].total_price == 1000
        assert result.total_price == 1000
        mock_invoice_repo.find_by_id.assert_called_once_with(invoice_with_line.id)
        mock_invoice_repo.save.assert_not_called()

    async def test_get_invoice_not_found(self, invoice_service, mock_invoice_repo):
        result = await invoice_service.get_invoice(uuid4())

        assert result is None

    async def test_get_all_invoices_keeps_repository_order(
        self, invoice_service, mock_invoice_repo
    ):
        first = Invoice.create(uuid4(), "A", "a@example.com")
        second = Invoice.create(uuid4(), "B", "b@example.com")
        mock_invoice_repo.find_all = AsyncMock(return_value=[first, second])

        result = await invoice_service.get_all_invoices()

        assert [dto.id for dto in result] == [str(first.id), str(second.id)]

    async def test_get_all_invoices_empty(self, invoice_service):
        assert await invoice_service.get_all_invoices() == []


@pytest.mark.asyncio
class TestAddProductLine:
    """Test appending product lines"""

    async def test_add_product_line_success(
        self, invoice_service, mock_invoice_repo, mock_uow, draft_invoice
    ):
        """
        Given: A draft invoice with no lines
        When: add_product_line is called with valid values
        Then: The line is appended, total recomputed, invoice saved and committed
        """
        # Arrange
        mock_invoice_repo.find_by_id = AsyncMock(return_value=draft_invoice)

        # Act
        result = await invoice_service.add_product_line(draft_invoice.id, "Widget", 2, 500)

        # Assert
        assert len(result.product_lines) == 1
        line = result.product_lines[0]
        assert line.name == "Widget"
        assert line.quantity == 2
        assert line.unit_price == 500
        assert line.total_price == 1000
        assert result.total_price == 1000

        mock_invoice_repo.find_by_id.assert_called_once_with(draft_invoice.id, for_update=True)
        mock_invoice_repo.save.assert_called_once_with(draft_invoice)
        mock_uow.commit.assert_called_once()

    async def test_add_product_line_invalid_quantity(
        self, invoice_service, mock_invoice_repo, mock_uow, draft_invoice
    ):
        """
        Given: A draft invoice
        When: add_product_line is called with quantity=0
        Then: ProductLineError propagates and nothing is saved
        """
        # Arrange
        mock_invoice_repo.find_by_id = AsyncMock(return_value=draft_invoice)

        # Act & Assert
        with pytest.raises(ProductLineError) as exc_info:
            await invoice_service.add_product_line(draft_invoice.id, "Widget", 0, 500)

        assert exc_info.value.code == "quantity must be greater than zero"
        assert draft_invoice.product_lines == ()
        assert draft_invoice.total_price == 0
        mock_invoice_repo.save.assert_not_called()
        mock_uow.commit.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_add_product_line_not_found(
        self, invoice_service, mock_invoice_repo, mock_uow
    ):
        result = await invoice_service.add_product_line(uuid4(), "Widget", 1, 100)

        assert result is None
        mock_invoice_repo.save.assert_not_called()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestSendInvoice:
    """Test sending invoices"""

    async def test_send_invoice_success(
        self,
        invoice_service,
        mock_invoice_repo,
        mock_notification_service,
        mock_uow,
        invoice_with_line,
    ):
        """
        Given: A draft invoice with one valid line
        When: send_invoice is called
        Then: Status becomes sending, customer is notified, invoice saved
        """
        # Arrange
        mock_invoice_repo.find_by_id = AsyncMock(return_value=invoice_with_line)

        # Act
        result = await invoice_service.send_invoice(invoice_with_line.id)

        # Assert
        assert result.status == "sending"

        mock_notification_service.notify.assert_called_once()
        data = mock_notification_service.notify.call_args.args[0]
        assert isinstance(data, NotifyData)
        assert data.resource_id == invoice_with_line.id
        assert data.to_email == "jane@example.com"
        assert data.subject == f"Invoice #{invoice_with_line.id}"
        assert "Jane Doe" in data.message

        mock_invoice_repo.save.assert_called_once_with(invoice_with_line)
        mock_uow.commit.assert_called_once()

    async def test_notification_happens_before_save(
        self, invoice_service, mock_invoice_repo, mock_notification_service, invoice_with_line
    ):
        # Arrange
        calls = []
        mock_invoice_repo.find_by_id = AsyncMock(return_value=invoice_with_line)
        mock_notification_service.notify = AsyncMock(side_effect=lambda data: calls.append("notify"))
        mock_invoice_repo.save = AsyncMock(side_effect=lambda invoice: calls.append("save"))

        # Act
        await invoice_service.send_invoice(invoice_with_line.id)

        # Assert
        assert calls == ["notify", "save"]

    async def test_send_invoice_without_lines(
        self,
        invoice_service,
        mock_invoice_repo,
        mock_notification_service,
        mock_uow,
        draft_invoice,
    ):
        # Arrange
        mock_invoice_repo.find_by_id = AsyncMock(return_value=draft_invoice)

        # Act & Assert
        with pytest.raises(InvalidProductLine) as exc_info:
            await invoice_service.send_invoice(draft_invoice.id)

        assert exc_info.value.code == "no_product_lines"
        mock_notification_service.notify.assert_not_called()
        mock_invoice_repo.save.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_send_invoice_twice(
        self,
        invoice_service,
        mock_invoice_repo,
        mock_notification_service,
        invoice_with_line,
    ):
        # Arrange
        mock_invoice_repo.find_by_id = AsyncMock(return_value=invoice_with_line)
        await invoice_service.send_invoice(invoice_with_line.id)
        mock_invoice_repo.save.reset_mock()
        mock_notification_service.notify.reset_mock()

        # Act & Assert
        with pytest.raises(InvalidStatusTransition) as exc_info:
            await invoice_service.send_invoice(invoice_with_line.id)

        assert exc_info.value.code == "invalid_status_transition_send"
        mock_notification_service.notify.assert_not_called()
        mock_invoice_repo.save.assert_not_called()

    async def test_send_invoice_when_notification_fails(
        self, invoice_service, mock_invoice_repo, mock_notification_service, invoice_with_line
    ):
        # Arrange
        mock_invoice_repo.find_by_id = AsyncMock(return_value=invoice_with_line)
        mock_notification_service.notify = AsyncMock(return_value=False)

        # Act
        result = await invoice_service.send_invoice(invoice_with_line.id)

        # Assert
        assert result.status == "sending"
        mock_invoice_repo.save.assert_called_once()

    async def test_send_invoice_not_found(
        self, invoice_service, mock_invoice_repo, mock_notification_service, mock_uow
    ):
        result = await invoice_service.send_invoice(uuid4())

        assert result is None
        mock_notification_service.notify.assert_not_called()
        mock_invoice_repo.save.assert_not_called()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestMarkAsSentToClient:
    """Test delivery confirmation"""

    async def test_mark_as_sent_to_client_success(
        self, invoice_service, mock_invoice_repo, mock_uow, invoice_with_line
    ):
        # Arrange
        invoice_with_line.send()
        mock_invoice_repo.find_by_id = AsyncMock(return_value=invoice_with_line)

        # Act
        result = await invoice_service.mark_as_sent_to_client(invoice_with_line.id)

        # Assert
        assert result.status == "sent-to-client"
        mock_invoice_repo.save.assert_called_once_with(invoice_with_line)
        mock_uow.commit.assert_called_once()

    async def test_mark_as_sent_to_client_on_draft(
        self, invoice_service, mock_invoice_repo, mock_uow, invoice_with_line
    ):
        # Arrange
        mock_invoice_repo.find_by_id = AsyncMock(return_value=invoice_with_line)

        # Act & Assert
        with pytest.raises(InvalidStatusTransition) as exc_info:
            await invoice_service.mark_as_sent_to_client(invoice_with_line.id)

        assert exc_info.value.code == "invalid_status_transition_mark_sent"
        mock_invoice_repo.save.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_mark_as_sent_to_client_not_found(
        self, invoice_service, mock_invoice_repo, mock_uow
    ):
        result = await invoice_service.mark_as_sent_to_client(uuid4())

        assert result is None
        mock_invoice_repo.save.assert_not_called()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_full_lifecycle(mock_uow, mock_notification_service):
    """
    Given: An in-memory store behind the repository mock
    When: create -> add line -> send -> confirm delivery
    Then: total is 1000, the customer is notified, final status is sent-to-client
    """
    # Arrange
    store = {}
    repo = MagicMock()

    async def save(invoice):
        store[invoice.id] = invoice

    async def find_by_id(invoice_id, for_update=False):
        return store.get(invoice_id)

    repo.save = AsyncMock(side_effect=save)
    repo.find_by_id = AsyncMock(side_effect=find_by_id)
    service = InvoiceService(mock_uow, repo, mock_notification_service)

    # Act
    created = await service.create_invoice("Jane Doe", "jane@example.com")
    invoice_id = UUID(created.id)
    with_line = await service.add_product_line(invoice_id, "Widget", 2, 500)
    sent = await service.send_invoice(invoice_id)
    confirmed = await service.mark_as_sent_to_client(invoice_id)

    # Assert
    assert with_line.total_price == 1000
    assert sent.status == "sending"
    data = mock_notification_service.notify.call_args.args[0]
    assert data.to_email == "jane@example.com"
    assert created.id in data.subject
    assert confirmed.status == "sent-to-client"
    assert confirmed.total_price == 1000
