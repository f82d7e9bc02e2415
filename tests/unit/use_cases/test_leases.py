"""Unit tests for lease use cases

Tests cover:
- Lease preview (prorated first charge, next due date)
- Lease creation (due date anchor, unit occupancy)
- Saving a card on file (customer creation, autopay)
- Ending a lease
"""

import pytest
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return, Error
from src.app.services.payment_gateway import GatewayCustomer, GatewayCard, GATEWAY_ERROR
from src.app.use_cases.rentals.leases import PreviewLease, CreateLease, SaveLeaseCard, EndLease
from src.app.use_cases.rentals.dtos import CreateLeaseCommandDTO, SaveCardCommandDTO
from src.domain.unit import Unit, UnitStatus
from src.domain.tenant import Tenant
from src.domain.lease import Lease, LeaseStatus


@pytest.fixture
def sample_unit():
    return Unit(id=1, number="A-101", size="10x10", rate_cents=10000, status=UnitStatus.VACANT)


@pytest.fixture
def sample_tenant():
    return Tenant(id=7, name="Pat Doe", email="pat@example.com")


@pytest.fixture
def sample_lease():
    return Lease(
        id=3,
        unit_id=1,
        tenant_id=7,
        start_date=date(2025, 3, 15),
        rent_cents=10000,
        status=LeaseStatus.ACTIVE,
        next_due_date=date(2025, 4, 1),
        created_at=datetime(2025, 3, 15, 12, 0, 0),
    )


@pytest.fixture
def mock_unit_repo(sample_unit):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_unit)
    repo.set_status = AsyncMock()
    return repo


@pytest.fixture
def mock_tenant_repo(sample_tenant):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_tenant)
    repo.set_square_customer_id = AsyncMock()
    return repo


@pytest.fixture
def mock_lease_repo():
    return MagicMock()


@pytest.mark.asyncio
class TestPreviewLease:

    async def test_preview_mid_month(self, mock_unit_repo):
        """
        Given: A $100.00 unit
        When: A lease starting 2025-03-15 is previewed
        Then: 5484 cents now, next due 2025-04-01
        """
        # Act
        result = await PreviewLease(mock_unit_repo).execute(1, date(2025, 3, 15))

        # Assert
        assert result.is_ok()
        assert result.value.amount_cents == 5484
        assert result.value.next_due_date == date(2025, 4, 1)
        assert result.value.monthly_cents == 10000
        assert result.value.billing_anchor_day == 1

    async def test_preview_unknown_unit(self, mock_unit_repo):
        # Arrange
        mock_unit_repo.get_by_id = AsyncMock(return_value=None)

        # Act
        result = await PreviewLease(mock_unit_repo).execute(99, date(2025, 3, 15))

        # Assert
        assert result.is_err()
        assert result.error.code == "UNIT_NOT_FOUND"


@pytest.mark.asyncio
class TestCreateLease:

    @pytest.fixture
    def command(self):
        return CreateLeaseCommandDTO(
            unit_id=1,
            tenant_id=7,
            start_date=date(2025, 12, 20),
            rent_cents=9300,
            autopay=True,
            square_card_id="ccof:abc",
        )

    async def test_create_sets_next_due_date_and_occupies_unit(
        self, mock_uow, mock_unit_repo, mock_tenant_repo, mock_lease_repo, command
    ):
        """
        Given: Existing unit and tenant
        When: A lease starting 2025-12-20 is created
        Then: next_due_date wraps to 2026-01-01, unit is occupied, first charge is prorated
        """
        # Arrange
        def assign_id(lease):
            lease.id = 11
            return lease

        mock_lease_repo.create = AsyncMock(side_effect=assign_id)
        use_case = CreateLease(mock_uow, mock_unit_repo, mock_tenant_repo, mock_lease_repo)

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_ok()
        lease = mock_lease_repo.create.await_args.args[0]
        assert lease.next_due_date == date(2026, 1, 1)
        assert lease.billing_anchor_day == 1
        assert lease.status == LeaseStatus.ACTIVE
        mock_unit_repo.set_status.assert_awaited_once_with(1, UnitStatus.OCCUPIED)
        mock_uow.commit.assert_awaited_once()

        response = result.value
        assert response.id == 11
        assert response.has_saved_card is True
        # 12 of 31 days of 9300
        assert response.first_charge_cents == 3600

    async def test_create_with_unknown_tenant(
        self, mock_uow, mock_unit_repo, mock_tenant_repo, mock_lease_repo, command
    ):
        # Arrange
        mock_tenant_repo.get_by_id = AsyncMock(return_value=None)
        mock_lease_repo.create = AsyncMock()
        use_case = CreateLease(mock_uow, mock_unit_repo, mock_tenant_repo, mock_lease_repo)

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.error.code == "TENANT_NOT_FOUND"
        mock_lease_repo.create.assert_not_awaited()
        mock_uow.commit.assert_not_awaited()

    async def test_create_rolls_back_on_store_error(
        self, mock_uow, mock_unit_repo, mock_tenant_repo, mock_lease_repo, command
    ):
        # Arrange
        mock_lease_repo.create = AsyncMock(side_effect=RuntimeError("constraint"))
        use_case = CreateLease(mock_uow, mock_unit_repo, mock_tenant_repo, mock_lease_repo)

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.error.code == "CREATE_LEASE_FAILED"
        mock_uow.rollback.assert_awaited_once()


@pytest.mark.asyncio
class TestSaveLeaseCard:

    @pytest.fixture
    def mock_gateway(self):
        gateway = MagicMock()
        gateway.create_customer = AsyncMock(return_value=Return.ok(GatewayCustomer(customer_id="cust_7")))
        gateway.save_card = AsyncMock(
            return_value=Return.ok(GatewayCard(card_id="ccof:new", brand="VISA", last_4="1111"))
        )
        return gateway

    async def test_creates_customer_then_saves_card(
        self, mock_uow, mock_lease_repo, mock_tenant_repo, mock_gateway, sample_lease
    ):
        """
        Given: A tenant without a Square customer
        When: A card nonce is saved for their lease
        Then: The customer is created and stored, the card is saved and autopay enabled
        """
        # Arrange
        mock_lease_repo.get_by_id = AsyncMock(return_value=sample_lease)
        mock_lease_repo.save_card = AsyncMock(return_value=MagicMock(autopay=True))
        use_case = SaveLeaseCard(mock_uow, mock_lease_repo, mock_tenant_repo, mock_gateway)

        # Act
        result = await use_case.execute(SaveCardCommandDTO(lease_id=3, source_id="cnon:ok"))

        # Assert
        assert result.is_ok()
        assert result.value.autopay is True
        assert result.value.card_last_4 == "1111"
        mock_tenant_repo.set_square_customer_id.assert_awaited_once_with(7, "cust_7")
        assert mock_gateway.save_card.await_args.kwargs["customer_id"] == "cust_7"
        mock_lease_repo.save_card.assert_awaited_once_with(3, "ccof:new")

    async def test_reuses_existing_customer(
        self, mock_uow, mock_lease_repo, mock_tenant_repo, mock_gateway, sample_lease, sample_tenant
    ):
        # Arrange
        sample_tenant.square_customer_id = "cust_existing"
        mock_lease_repo.get_by_id = AsyncMock(return_value=sample_lease)
        mock_lease_repo.save_card = AsyncMock(return_value=MagicMock(autopay=True))
        use_case = SaveLeaseCard(mock_uow, mock_lease_repo, mock_tenant_repo, mock_gateway)

        # Act
        await use_case.execute(SaveCardCommandDTO(lease_id=3, source_id="cnon:ok"))

        # Assert
        mock_gateway.create_customer.assert_not_awaited()
        assert mock_gateway.save_card.await_args.kwargs["customer_id"] == "cust_existing"

    async def test_card_rejected(
        self, mock_uow, mock_lease_repo, mock_tenant_repo, mock_gateway, sample_lease
    ):
        """
        Given: Square rejects the card nonce
        When: The card is saved
        Then: GATEWAY_ERROR and the lease is left unchanged
        """
        # Arrange
        mock_lease_repo.get_by_id = AsyncMock(return_value=sample_lease)
        mock_lease_repo.save_card = AsyncMock()
        mock_gateway.save_card = AsyncMock(
            return_value=Return.err(Error(code=GATEWAY_ERROR, message="Card nonce already used"))
        )
        use_case = SaveLeaseCard(mock_uow, mock_lease_repo, mock_tenant_repo, mock_gateway)

        # Act
        result = await use_case.execute(SaveCardCommandDTO(lease_id=3, source_id="cnon:used"))

        # Assert
        assert result.error.code == GATEWAY_ERROR
        mock_lease_repo.save_card.assert_not_awaited()

    async def test_gateway_not_configured(self, mock_uow, mock_lease_repo, mock_tenant_repo):
        use_case = SaveLeaseCard(mock_uow, mock_lease_repo, mock_tenant_repo, gateway=None)

        result = await use_case.execute(SaveCardCommandDTO(lease_id=3, source_id="cnon:ok"))

        assert result.error.code == "CONFIGURATION_ERROR"

    async def test_unknown_lease(self, mock_uow, mock_lease_repo, mock_tenant_repo, mock_gateway):
        mock_lease_repo.get_by_id = AsyncMock(return_value=None)
        use_case = SaveLeaseCard(mock_uow, mock_lease_repo, mock_tenant_repo, mock_gateway)

        result = await use_case.execute(SaveCardCommandDTO(lease_id=404, source_id="cnon:ok"))

        assert result.error.code == "LEASE_NOT_FOUND"
        mock_gateway.create_customer.assert_not_awaited()


@pytest.mark.asyncio
class TestEndLease:

    async def test_end_frees_unit(self, mock_uow, mock_lease_repo, mock_unit_repo, sample_lease):
        # Arrange
        sample_lease.status = LeaseStatus.ENDED
        mock_lease_repo.end = AsyncMock(return_value=sample_lease)

        # Act
        result = await EndLease(mock_uow, mock_lease_repo, mock_unit_repo).execute(3)

        # Assert
        assert result.value.status == LeaseStatus.ENDED
        mock_unit_repo.set_status.assert_awaited_once_with(1, UnitStatus.VACANT)
        mock_uow.commit.assert_awaited_once()

    async def test_end_unknown_lease(self, mock_uow, mock_lease_repo, mock_unit_repo):
        mock_lease_repo.end = AsyncMock(return_value=None)

        result = await EndLease(mock_uow, mock_lease_repo, mock_unit_repo).execute(404)

        assert result.error.code == "LEASE_NOT_FOUND"
