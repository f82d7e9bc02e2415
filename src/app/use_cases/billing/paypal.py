"""PayPal Checkout Use Cases"""

import logging
from typing import Any, Dict, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.paypal_checkout import PayPalCheckout
from src.app.services.payment_gateway import GATEWAY_ERROR
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.lease_repository import LeaseRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.domain.base import generate_uuid
from src.domain.payment import Payment, PaymentGatewayName, PaymentMethod, PaymentStatus
from .dtos import PayPalOrderCommandDTO, PayPalCaptureCommandDTO

logger = logging.getLogger(__name__)

NOT_CONFIGURED = Error(code="CONFIGURATION_ERROR", message="PayPal is not configured")


class CreatePayPalOrder:
    def __init__(self, checkout: Optional[PayPalCheckout]):
        self.checkout = checkout

    async def execute(self, command: PayPalOrderCommandDTO) -> Result[Dict[str, Any]]:
        if self.checkout is None:
            return Return.err(NOT_CONFIGURED)

        description = f"Invoice {command.invoice_id}" if command.invoice_id else "Storage rent"
        return await self.checkout.create_order(command.amount_cents, description)


class CapturePayPalOrder:
    """
    Use Case: Capture an approved PayPal order

    A completed capture appends a paid ledger entry and settles the invoice.
    Anything else appends a failed entry. When the capture names a lease and
    PayPal reports a payer, the payer id is stored on the lease's tenant.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        payment_repo: PaymentRepository,
        invoice_repo: InvoiceRepository,
        checkout: Optional[PayPalCheckout],
        lease_repo: Optional[LeaseRepository] = None,
        tenant_repo: Optional[TenantRepository] = None,
    ):
        self.uow = uow
        self.payment_repo = payment_repo
        self.invoice_repo = invoice_repo
        self.checkout = checkout
        self.lease_repo = lease_repo
        self.tenant_repo = tenant_repo

    async def execute(self, command: PayPalCaptureCommandDTO) -> Result[Dict[str, Any]]:
        if self.checkout is None:
            return Return.err(NOT_CONFIGURED)

        capture = await self.checkout.capture_order(command.order_id)
        completed = capture.is_ok() and capture.value.get("status") == "COMPLETED"

        entry = Payment(
            lease_id=command.lease_id,
            invoice_id=command.invoice_id,
            gateway=PaymentGatewayName.PAYPAL,
            gateway_payment_id=command.order_id,
            amount_cents=command.amount_cents,
            method=PaymentMethod.PAYPAL,
            status=PaymentStatus.PAID if completed else PaymentStatus.FAILED,
            note=f"paypal order:{command.order_id}",
            idempotency_key=generate_uuid(),
        )

        try:
            await self.payment_repo.create(entry)
            if completed and command.invoice_id is not None:
                await self.invoice_repo.mark_paid(command.invoice_id)
            if completed:
                await self._remember_payer(command.lease_id, capture.value)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="STORE_ERROR", message="Payment could not be recorded", reason=str(e))
            )

        if capture.is_err():
            return capture
        if not completed:
            status = capture.value.get("status")
            logger.warning(f"PayPal order {command.order_id} not completed: {status}")
            return Return.err(
                Error(code=GATEWAY_ERROR, message=f"PayPal capture not completed (status {status})")
            )

        logger.info(f"PayPal order {command.order_id} captured for {command.amount_cents} cents")
        return Return.ok(capture.value)

    async def _remember_payer(self, lease_id: Optional[int], body: Dict[str, Any]) -> None:
        payer_id = (body.get("payer") or {}).get("payer_id")
        if not payer_id or lease_id is None or self.lease_repo is None or self.tenant_repo is None:
            return

        lease = await self.lease_repo.get_by_id(lease_id)
        if lease:
            await self.tenant_repo.set_paypal_payer_id(lease.tenant_id, payer_id)
