"""Payment Use Cases

List the payment ledger, take one-off card payments and refund recorded ones.
"""

import logging
from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.payment_gateway import PaymentGateway
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import generate_uuid
from src.domain.payment import Payment, PaymentGatewayName, PaymentMethod, PaymentStatus
from .dtos import (
    PaymentDTO,
    ChargeCardCommandDTO,
    ChargeCardResponseDTO,
    RefundCommandDTO,
    RefundResponseDTO,
)

logger = logging.getLogger(__name__)


class ListPayments:
    """
    Use case: View the payment ledger

    Entries are ordered most recent first; limit is clamped to [1, max_limit].
    """

    def __init__(self, payment_repo: PaymentRepository, max_limit: int = 500):
        self.payment_repo = payment_repo
        self.max_limit = max_limit

    async def execute(self, limit: int = 100) -> Result[List[PaymentDTO]]:
        limit = max(1, min(limit, self.max_limit))
        payments = await self.payment_repo.list_recent(limit)
        return Return.ok([PaymentDTO.model_validate(p) for p in payments])


class ChargeCard:
    """
    Use Case: One-off card payment through Square

    Flow:
    1. Charge the card with a fresh idempotency key
    2. Append a ledger entry for the attempt (paid or failed)
    3. Mark the invoice paid when one is given and the charge succeeded
    """

    def __init__(
        self,
        uow: UnitOfWork,
        payment_repo: PaymentRepository,
        invoice_repo: InvoiceRepository,
        gateway: Optional[PaymentGateway],
    ):
        self.uow = uow
        self.payment_repo = payment_repo
        self.invoice_repo = invoice_repo
        self.gateway = gateway

    async def execute(self, command: ChargeCardCommandDTO) -> Result[ChargeCardResponseDTO]:
        if self.gateway is None:
            return Return.err(
                Error(code="CONFIGURATION_ERROR", message="Payment gateway is not configured")
            )

        idempotency_key = generate_uuid()
        note = f"invoice:{command.invoice_id}" if command.invoice_id else "ad-hoc"

        charge = await self.gateway.create_payment(
            idempotency_key=idempotency_key,
            source_id=command.source_id,
            amount_cents=command.amount_cents,
            note=note,
        )

        try:
            if charge.is_err():
                await self.payment_repo.create(
                    Payment(
                        lease_id=command.lease_id,
                        invoice_id=command.invoice_id,
                        gateway=PaymentGatewayName.SQUARE,
                        amount_cents=command.amount_cents,
                        method=PaymentMethod.CARD,
                        status=PaymentStatus.FAILED,
                        note=charge.error.message,
                        idempotency_key=idempotency_key,
                    )
                )
                await self.uow.commit()
                return charge

            entry = await self.payment_repo.create(
                Payment(
                    lease_id=command.lease_id,
                    invoice_id=command.invoice_id,
                    gateway=PaymentGatewayName.SQUARE,
                    gateway_payment_id=charge.value.payment_id,
                    amount_cents=command.amount_cents,
                    method=PaymentMethod.CARD,
                    status=PaymentStatus.PAID,
                    note=note,
                    idempotency_key=idempotency_key,
                )
            )
            if command.invoice_id is not None:
                await self.invoice_repo.mark_paid(command.invoice_id)
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="STORE_ERROR",
                    message="Payment could not be recorded",
                    reason=str(e),
                )
            )

        return Return.ok(
            ChargeCardResponseDTO(
                payment_id=entry.id,
                gateway_payment_id=charge.value.payment_id,
                status=PaymentStatus.PAID,
                amount_cents=command.amount_cents,
                invoice_id=command.invoice_id,
            )
        )


class RefundPayment:
    """
    Use Case: Refund a paid Square ledger entry

    The ledger entry itself is left untouched (append-only); the refund lives
    in Square and is logged here.
    """

    def __init__(self, payment_repo: PaymentRepository, gateway: Optional[PaymentGateway]):
        self.payment_repo = payment_repo
        self.gateway = gateway

    async def execute(self, command: RefundCommandDTO) -> Result[RefundResponseDTO]:
        if self.gateway is None:
            return Return.err(
                Error(code="CONFIGURATION_ERROR", message="Payment gateway is not configured")
            )

        payment = await self.payment_repo.get_by_id(command.payment_id)
        if not payment:
            return Return.err(
                Error(code="PAYMENT_NOT_FOUND", message=f"Payment {command.payment_id} not found")
            )

        if (
            payment.status != PaymentStatus.PAID
            or payment.gateway != PaymentGatewayName.SQUARE
            or not payment.gateway_payment_id
        ):
            return Return.err(
                Error(
                    code="INVALID_PAYMENT_STATE",
                    message="Only paid Square payments can be refunded",
                    reason=f"status={payment.status}, gateway={payment.gateway}",
                )
            )

        amount_cents = command.amount_cents or payment.amount_cents
        if amount_cents > payment.amount_cents:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Refund exceeds the original payment amount",
                )
            )

        result = await self.gateway.refund_payment(
            idempotency_key=generate_uuid(),
            payment_id=payment.gateway_payment_id,
            amount_cents=amount_cents,
            reason=command.reason,
        )
        if result.is_err():
            return result

        logger.info(
            f"Refunded {amount_cents} cents of payment {payment.id} (refund {result.value.refund_id})"
        )
        return Return.ok(
            RefundResponseDTO(
                payment_id=payment.id,
                refund_id=result.value.refund_id,
                status=result.value.status,
                amount_cents=result.value.amount_cents,
            )
        )
