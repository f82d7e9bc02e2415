"""Unit tests for payment use cases

Tests cover:
- Ledger listing with limit clamping
- One-off card payments (paid, declined, invoice settlement)
- Refunds (state checks, partial and full amounts)
- PayPal capture
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return, Error
from src.app.services.payment_gateway import GatewayPayment, GatewayRefund, GATEWAY_ERROR
from src.app.use_cases.billing.payments import ListPayments, ChargeCard, RefundPayment
from src.app.use_cases.billing.paypal import CapturePayPalOrder, CreatePayPalOrder
from src.app.use_cases.billing.dtos import (
    ChargeCardCommandDTO,
    RefundCommandDTO,
    PayPalCaptureCommandDTO,
    PayPalOrderCommandDTO,
)
from src.domain.payment import Payment, PaymentGatewayName, PaymentMethod, PaymentStatus


@pytest.fixture
def mock_payment_repo():
    repo = MagicMock()

    def assign_id(payment):
        payment.id = 501
        return payment

    repo.create = AsyncMock(side_effect=assign_id)
    repo.list_recent = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.mark_paid = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_gateway():
    gateway = MagicMock()
    gateway.create_payment = AsyncMock(
        return_value=Return.ok(GatewayPayment(payment_id="sq_99", status="COMPLETED", amount_cents=4200))
    )
    gateway.refund_payment = AsyncMock(
        return_value=Return.ok(GatewayRefund(refund_id="rf_1", status="PENDING", amount_cents=4200))
    )
    return gateway


@pytest.fixture
def paid_square_payment():
    return Payment(
        id=12,
        gateway=PaymentGatewayName.SQUARE,
        gateway_payment_id="sq_12",
        amount_cents=4200,
        method=PaymentMethod.CARD,
        status=PaymentStatus.PAID,
        idempotency_key="key-12",
    )


@pytest.mark.asyncio
class TestListPayments:

    @pytest.mark.parametrize("requested,expected", [(0, 1), (-5, 1), (50, 50), (10_000, 500)])
    async def test_limit_is_clamped(self, mock_payment_repo, requested, expected):
        # Act
        await ListPayments(mock_payment_repo).execute(requested)

        # Assert
        mock_payment_repo.list_recent.assert_awaited_once_with(expected)


@pytest.mark.asyncio
class TestChargeCard:

    async def test_paid_charge_settles_invoice(self, mock_uow, mock_payment_repo, mock_invoice_repo, mock_gateway):
        """
        Given: A valid card nonce and an open invoice
        When: The card is charged
        Then: A paid ledger entry is written and the invoice is marked paid
        """
        # Arrange
        command = ChargeCardCommandDTO(source_id="cnon:ok", amount_cents=4200, invoice_id=8)

        # Act
        result = await ChargeCard(mock_uow, mock_payment_repo, mock_invoice_repo, mock_gateway).execute(command)

        # Assert
        assert result.is_ok()
        assert result.value.payment_id == 501
        assert result.value.gateway_payment_id == "sq_99"
        entry = mock_payment_repo.create.await_args.args[0]
        assert entry.status == PaymentStatus.PAID
        assert entry.method == PaymentMethod.CARD
        assert entry.idempotency_key == mock_gateway.create_payment.await_args.kwargs["idempotency_key"]
        mock_invoice_repo.mark_paid.assert_awaited_once_with(8)
        mock_uow.commit.assert_awaited_once()

    async def test_declined_charge_is_recorded_as_failed(
        self, mock_uow, mock_payment_repo, mock_invoice_repo, mock_gateway
    ):
        # Arrange
        mock_gateway.create_payment = AsyncMock(
            return_value=Return.err(Error(code=GATEWAY_ERROR, message="Card declined"))
        )
        command = ChargeCardCommandDTO(source_id="cnon:declined", amount_cents=4200, invoice_id=8)

        # Act
        result = await ChargeCard(mock_uow, mock_payment_repo, mock_invoice_repo, mock_gateway).execute(command)

        # Assert
        assert result.error.code == GATEWAY_ERROR
        entry = mock_payment_repo.create.await_args.args[0]
        assert entry.status == PaymentStatus.FAILED
        assert entry.note == "Card declined"
        mock_invoice_repo.mark_paid.assert_not_awaited()

    async def test_gateway_not_configured(self, mock_uow, mock_payment_repo, mock_invoice_repo):
        command = ChargeCardCommandDTO(source_id="cnon:ok", amount_cents=4200)

        result = await ChargeCard(mock_uow, mock_payment_repo, mock_invoice_repo, None).execute(command)

        assert result.error.code == "CONFIGURATION_ERROR"
        mock_payment_repo.create.assert_not_awaited()


@pytest.mark.asyncio
class TestRefundPayment:

    async def test_full_refund_by_default(self, mock_payment_repo, mock_gateway, paid_square_payment):
        # Arrange
        mock_payment_repo.get_by_id = AsyncMock(return_value=paid_square_payment)

        # Act
        result = await RefundPayment(mock_payment_repo, mock_gateway).execute(RefundCommandDTO(payment_id=12))

        # Assert
        assert result.is_ok()
        assert result.value.refund_id == "rf_1"
        kwargs = mock_gateway.refund_payment.await_args.kwargs
        assert kwargs["payment_id"] == "sq_12"
        assert kwargs["amount_cents"] == 4200

    async def test_partial_refund(self, mock_payment_repo, mock_gateway, paid_square_payment):
        mock_payment_repo.get_by_id = AsyncMock(return_value=paid_square_payment)

        await RefundPayment(mock_payment_repo, mock_gateway).execute(
            RefundCommandDTO(payment_id=12, amount_cents=1000)
        )

        assert mock_gateway.refund_payment.await_args.kwargs["amount_cents"] == 1000

    async def test_refund_more_than_paid(self, mock_payment_repo, mock_gateway, paid_square_payment):
        mock_payment_repo.get_by_id = AsyncMock(return_value=paid_square_payment)

        result = await RefundPayment(mock_payment_repo, mock_gateway).execute(
            RefundCommandDTO(payment_id=12, amount_cents=5000)
        )

        assert result.error.code == "VALIDATION_ERROR"
        mock_gateway.refund_payment.assert_not_awaited()

    async def test_failed_payment_cannot_be_refunded(self, mock_payment_repo, mock_gateway, paid_square_payment):
        """
        Given: A failed ledger entry
        When: A refund is requested
        Then: INVALID_PAYMENT_STATE and the gateway is not called
        """
        # Arrange
        paid_square_payment.status = PaymentStatus.FAILED
        mock_payment_repo.get_by_id = AsyncMock(return_value=paid_square_payment)

        # Act
        result = await RefundPayment(mock_payment_repo, mock_gateway).execute(RefundCommandDTO(payment_id=12))

        # Assert
        assert result.error.code == "INVALID_PAYMENT_STATE"
        mock_gateway.refund_payment.assert_not_awaited()

    async def test_unknown_payment(self, mock_payment_repo, mock_gateway):
        mock_payment_repo.get_by_id = AsyncMock(return_value=None)

        result = await RefundPayment(mock_payment_repo, mock_gateway).execute(RefundCommandDTO(payment_id=404))

        assert result.error.code == "PAYMENT_NOT_FOUND"


@pytest.mark.asyncio
class TestPayPal:

    @pytest.fixture
    def mock_checkout(self):
        checkout = MagicMock()
        checkout.create_order = AsyncMock(return_value=Return.ok({"id": "ORDER-1", "status": "CREATED"}))
        checkout.capture_order = AsyncMock(return_value=Return.ok({"id": "ORDER-1", "status": "COMPLETED"}))
        return checkout

    async def test_create_order_describes_invoice(self, mock_checkout):
        result = await CreatePayPalOrder(mock_checkout).execute(
            PayPalOrderCommandDTO(amount_cents=4200, invoice_id=8)
        )

        assert result.value["id"] == "ORDER-1"
        mock_checkout.create_order.assert_awaited_once_with(4200, "Invoice 8")

    async def test_completed_capture_records_and_settles(
        self, mock_uow, mock_payment_repo, mock_invoice_repo, mock_checkout
    ):
        # Arrange
        command = PayPalCaptureCommandDTO(order_id="ORDER-1", amount_cents=4200, invoice_id=8)

        # Act
        result = await CapturePayPalOrder(mock_uow, mock_payment_repo, mock_invoice_repo, mock_checkout).execute(
            command
        )

        # Assert
        assert result.is_ok()
        entry = mock_payment_repo.create.await_args.args[0]
        assert entry.gateway == PaymentGatewayName.PAYPAL
        assert entry.status == PaymentStatus.PAID
        assert entry.gateway_payment_id == "ORDER-1"
        mock_invoice_repo.mark_paid.assert_awaited_once_with(8)

    async def test_completed_capture_stores_payer_on_tenant(
        self, mock_uow, mock_payment_repo, mock_invoice_repo, mock_checkout
    ):
        """
        Given: A completed capture for lease 3 whose body names payer PAYER-9
        When: The capture is recorded
        Then: The payer id is stored on the lease's tenant before the commit
        """
        # Arrange
        mock_checkout.capture_order = AsyncMock(
            return_value=Return.ok({"id": "ORDER-1", "status": "COMPLETED", "payer": {"payer_id": "PAYER-9"}})
        )
        lease_repo = MagicMock()
        lease_repo.get_by_id = AsyncMock(return_value=MagicMock(tenant_id=77))
        tenant_repo = MagicMock()
        tenant_repo.set_paypal_payer_id = AsyncMock()
        command = PayPalCaptureCommandDTO(order_id="ORDER-1", amount_cents=4200, lease_id=3)

        # Act
        result = await CapturePayPalOrder(
            mock_uow, mock_payment_repo, mock_invoice_repo, mock_checkout,
            lease_repo=lease_repo, tenant_repo=tenant_repo,
        ).execute(command)

        # Assert
        assert result.is_ok()
        lease_repo.get_by_id.assert_awaited_once_with(3)
        tenant_repo.set_paypal_payer_id.assert_awaited_once_with(77, "PAYER-9")
        mock_uow.commit.assert_awaited_once()

    async def test_incomplete_capture_does_not_store_payer(
        self, mock_uow, mock_payment_repo, mock_invoice_repo, mock_checkout
    ):
        # Arrange
        mock_checkout.capture_order = AsyncMock(
            return_value=Return.ok({"id": "ORDER-1", "status": "PENDING", "payer": {"payer_id": "PAYER-9"}})
        )
        lease_repo = MagicMock()
        lease_repo.get_by_id = AsyncMock()
        tenant_repo = MagicMock()
        tenant_repo.set_paypal_payer_id = AsyncMock()
        command = PayPalCaptureCommandDTO(order_id="ORDER-1", amount_cents=4200, lease_id=3)

        # Act
        await CapturePayPalOrder(
            mock_uow, mock_payment_repo, mock_invoice_repo, mock_checkout,
            lease_repo=lease_repo, tenant_repo=tenant_repo,
        ).execute(command)

        # Assert
        tenant_repo.set_paypal_payer_id.assert_not_awaited()

    async def test_incomplete_capture_is_recorded_as_failed(
        self, mock_uow, mock_payment_repo, mock_invoice_repo, mock_checkout
    ):
        # Arrange
        mock_checkout.capture_order = AsyncMock(return_value=Return.ok({"id": "ORDER-1", "status": "PENDING"}))
        command = PayPalCaptureCommandDTO(order_id="ORDER-1", amount_cents=4200, invoice_id=8)

        # Act
        result = await CapturePayPalOrder(mock_uow, mock_payment_repo, mock_invoice_repo, mock_checkout).execute(
            command
        )

        # Assert
        assert result.error.code == GATEWAY_ERROR
        assert mock_payment_repo.create.await_args.args[0].status == PaymentStatus.FAILED
        mock_invoice_repo.mark_paid.assert_not_awaited()

    async def test_not_configured(self, mock_uow, mock_payment_repo, mock_invoice_repo):
        command = PayPalCaptureCommandDTO(order_id="ORDER-1", amount_cents=4200)

        result = await CapturePayPalOrder(mock_uow, mock_payment_repo, mock_invoice_repo, None).execute(command)

        assert result.error.code == "CONFIGURATION_ERROR"
