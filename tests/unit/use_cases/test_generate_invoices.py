"""Unit tests for GenerateMonthlyInvoices use case"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.generate_invoices import GenerateMonthlyInvoices
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def mock_lease_repo():
    repo = MagicMock()
    repo.list_active = AsyncMock(
        return_value=[MagicMock(id=1, rent_cents=10000), MagicMock(id=2, rent_cents=7500)]
    )
    return repo


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.exists_for_period = AsyncMock(return_value=False)
    repo.create = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.mark.asyncio
class TestGenerateMonthlyInvoices:

    async def test_one_open_invoice_per_active_lease(self, mock_uow, mock_lease_repo, mock_invoice_repo):
        """
        Given: Two active leases and no invoices yet
        When: Invoices are generated on 2025-04-17
        Then: Two open invoices for April, due April 5th, at each lease's rent
        """
        # Act
        result = await GenerateMonthlyInvoices(mock_uow, mock_lease_repo, mock_invoice_repo).execute(
            date(2025, 4, 17)
        )

        # Assert
        assert result.is_ok()
        assert result.value.created == 2
        assert result.value.skipped == 0
        assert result.value.period_start == date(2025, 4, 1)
        assert result.value.period_end == date(2025, 4, 30)

        invoices = [c.args[0] for c in mock_invoice_repo.create.await_args_list]
        assert [i.lease_id for i in invoices] == [1, 2]
        assert [i.total_cents for i in invoices] == [10000, 7500]
        assert all(i.status == InvoiceStatus.OPEN for i in invoices)
        assert all(i.due_date == date(2025, 4, 5) for i in invoices)
        mock_uow.commit.assert_awaited_once()

    async def test_skips_leases_already_invoiced(self, mock_uow, mock_lease_repo, mock_invoice_repo):
        """
        Given: Lease 1 already has an April invoice
        When: Invoices are generated again
        Then: Only lease 2 gets a new invoice
        """
        # Arrange
        mock_invoice_repo.exists_for_period = AsyncMock(side_effect=[True, False])

        # Act
        result = await GenerateMonthlyInvoices(mock_uow, mock_lease_repo, mock_invoice_repo).execute(
            date(2025, 4, 2)
        )

        # Assert
        assert result.value.created == 1
        assert result.value.skipped == 1
        mock_invoice_repo.exists_for_period.assert_any_await(1, date(2025, 4, 1))

    async def test_due_day_clamped_to_month_length(self, mock_uow, mock_lease_repo, mock_invoice_repo):
        # Arrange
        use_case = GenerateMonthlyInvoices(mock_uow, mock_lease_repo, mock_invoice_repo, due_day=31)

        # Act
        await use_case.execute(date(2025, 2, 10))

        # Assert
        invoice = mock_invoice_repo.create.await_args.args[0]
        assert invoice.due_date == date(2025, 2, 28)
        assert invoice.period_end == date(2025, 2, 28)

    async def test_store_error_rolls_back(self, mock_uow, mock_lease_repo, mock_invoice_repo):
        # Arrange
        mock_invoice_repo.create = AsyncMock(side_effect=RuntimeError("duplicate key"))

        # Act
        result = await GenerateMonthlyInvoices(mock_uow, mock_lease_repo, mock_invoice_repo).execute(
            date(2025, 4, 2)
        )

        # Assert
        assert result.error.code == "GENERATE_INVOICES_FAILED"
        mock_uow.rollback.assert_awaited_once()
        mock_uow.commit.assert_not_awaited()
