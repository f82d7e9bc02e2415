"""RunAutopay Use Case

Charges the saved card of every lease due on a given date, records each
attempt in the payment ledger and advances the due date of leases that paid.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.payment_gateway import PaymentGateway, GatewayPayment, GATEWAY_ERROR
from src.app.repositories.lease_repository import LeaseRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.domain.base import generate_uuid
from src.domain.billing_dates import next_anchor
from src.domain.lease import Lease
from src.domain.payment import Payment, PaymentGatewayName, PaymentMethod, PaymentStatus
from .dtos import AutopayLeaseResultDTO, AutopayRunResultDTO

logger = logging.getLogger(__name__)

DEFAULT_CHARGE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class DueLease:
    """Snapshot of the lease fields a run needs, detached from the session"""

    id: int
    tenant_id: int
    rent_cents: int
    card_id: str
    due_date: date

    @classmethod
    def from_lease(cls, lease: Lease) -> "DueLease":
        return cls(
            id=lease.id,
            tenant_id=lease.tenant_id,
            rent_cents=lease.rent_cents,
            card_id=lease.square_card_id,
            due_date=lease.next_due_date,
        )


class RunAutopay:
    """
    Use Case: Charge all autopay leases due on a date

    Business Rules:
    1. Only active leases with autopay on, a saved card and
       next_due_date == as_of are charged; tokenless leases are skipped silently
    2. Each lease is charged, recorded and advanced before the next one starts
    3. Every attempt appends exactly one ledger entry (paid or failed)
    4. The due date moves to the next anchor only after a successful charge, and
       only after its ledger entry is written
    5. A failing lease never stops the run; its failure becomes its result
    6. Missing gateway or unreachable lease store fails the whole run up front

    Re-running for the same date is safe: paid leases no longer match, failed
    ones are retried.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        lease_repo: LeaseRepository,
        payment_repo: PaymentRepository,
        tenant_repo: TenantRepository,
        gateway: Optional[PaymentGateway],
        charge_timeout: float = DEFAULT_CHARGE_TIMEOUT_SECONDS,
    ):
        self.uow = uow
        self.lease_repo = lease_repo
        self.payment_repo = payment_repo
        self.tenant_repo = tenant_repo
        self.gateway = gateway
        self.charge_timeout = charge_timeout

    async def execute(self, as_of: date) -> Result[AutopayRunResultDTO]:
        """
        Execute an autopay run

        Args:
            as_of: Due date to charge for

        Returns:
            Result[AutopayRunResultDTO]: Per-lease results, or CONFIGURATION_ERROR
        """
        if self.gateway is None:
            return Return.err(
                Error(
                    code="CONFIGURATION_ERROR",
                    message="Payment gateway is not configured",
                    reason="no PaymentGateway supplied",
                )
            )

        try:
            leases = await self.lease_repo.get_due_for_autopay(as_of)
            due_leases = [DueLease.from_lease(lease) for lease in leases]
        except Exception as e:
            logger.error(f"Autopay {as_of}: lease store unavailable: {e}")
            return Return.err(
                Error(
                    code="CONFIGURATION_ERROR",
                    message="Lease store is unavailable",
                    reason=str(e),
                )
            )

        logger.info(f"Autopay {as_of}: {len(due_leases)} leases due")

        results = []
        for lease in due_leases:
            results.append(await self._process_lease(lease, as_of))

        summary = AutopayRunResultDTO(date=as_of, count=len(results), results=results)
        logger.info(
            f"Autopay {as_of} complete: {summary.succeeded} paid, {summary.failed} failed"
        )
        return Return.ok(summary)

    async def _process_lease(self, lease: DueLease, as_of: date) -> AutopayLeaseResultDTO:
        """Charge, record and advance one lease; every outcome is a result"""
        customer_id = await self._resolve_customer_id(lease.tenant_id)
        idempotency_key = self._generate_idempotency_key()
        note = f"autopay lease:{lease.id} date:{as_of.isoformat()}"

        charge = await self._charge(lease, idempotency_key, note, customer_id)

        if charge.is_err():
            logger.warning(f"Autopay lease {lease.id}: charge failed: {charge.error.message}")
            recorded = await self._record_failure(lease, idempotency_key, charge.error)
            error = charge.error.message
            if recorded.is_err():
                error = f"{error}; {recorded.error.message}"
            return AutopayLeaseResultDTO(lease_id=lease.id, ok=False, error=error)

        payment = charge.value
        recorded = await self._record_success(lease, idempotency_key, note, payment)
        if recorded.is_err():
            logger.error(
                f"Autopay lease {lease.id}: charged {payment.payment_id} "
                f"(idempotency key {idempotency_key}) but could not record it: {recorded.error.reason}"
            )
            return AutopayLeaseResultDTO(
                lease_id=lease.id,
                ok=False,
                payment_id=payment.payment_id,
                error=recorded.error.message,
            )

        logger.info(
            f"Autopay lease {lease.id}: paid {lease.rent_cents} cents, next due {recorded.value}"
        )
        return AutopayLeaseResultDTO(
            lease_id=lease.id,
            ok=True,
            payment_id=payment.payment_id,
            next_due_date=recorded.value,
        )

    async def _resolve_customer_id(self, tenant_id: int) -> Optional[str]:
        """Best effort: a missing customer id does not block the charge"""
        try:
            tenant = await self.tenant_repo.get_by_id(tenant_id)
        except Exception as e:
            logger.warning(f"Autopay: could not load tenant {tenant_id}: {e}")
            return None
        return tenant.square_customer_id if tenant else None

    async def _charge(
        self,
        lease: DueLease,
        idempotency_key: str,
        note: str,
        customer_id: Optional[str],
    ) -> Result[GatewayPayment]:
        try:
            return await asyncio.wait_for(
                self.gateway.create_payment(
                    idempotency_key=idempotency_key,
                    source_id=lease.card_id,
                    amount_cents=lease.rent_cents,
                    note=note,
                    customer_id=customer_id,
                ),
                timeout=self.charge_timeout,
            )
        except asyncio.TimeoutError:
            return Return.err(
                Error(
                    code=GATEWAY_ERROR,
                    message="Payment gateway timed out",
                    reason=f"no response within {self.charge_timeout}s",
                )
            )
        except Exception as e:
            return Return.err(
                Error(
                    code=GATEWAY_ERROR,
                    message=f"Payment gateway error ({type(e).__name__})",
                    reason=str(e),
                )
            )

    async def _record_success(
        self,
        lease: DueLease,
        idempotency_key: str,
        note: str,
        payment: GatewayPayment,
    ) -> Result[Optional[date]]:
        """
        Write the paid entry, then advance the due date, in one commit

        Returns:
            Result with the new due date (None if a concurrent run already
            advanced it), or STORE_ERROR
        """
        try:
            await self.payment_repo.create(
                Payment(
                    lease_id=lease.id,
                    gateway=PaymentGatewayName.SQUARE,
                    gateway_payment_id=payment.payment_id,
                    amount_cents=lease.rent_cents,
                    method=PaymentMethod.CARD_ON_FILE,
                    status=PaymentStatus.PAID,
                    note=note,
                    idempotency_key=idempotency_key,
                )
            )

            new_due_date = next_anchor(lease.due_date)
            advanced = await self.lease_repo.advance_due_date(lease.id, lease.due_date, new_due_date)
            await self.uow.commit()
        except Exception as e:
            await self._rollback()
            return Return.err(
                Error(
                    code="STORE_ERROR",
                    message="Charge succeeded but could not be recorded",
                    reason=str(e),
                )
            )

        if not advanced:
            logger.warning(
                f"Autopay lease {lease.id}: due date {lease.due_date} was already advanced by another run"
            )
            return Return.ok(None)
        return Return.ok(new_due_date)

    async def _record_failure(self, lease: DueLease, idempotency_key: str, error: Error) -> Result[None]:
        try:
            await self.payment_repo.create(
                Payment(
                    lease_id=lease.id,
                    gateway=PaymentGatewayName.SQUARE,
                    amount_cents=lease.rent_cents,
                    method=PaymentMethod.CARD_ON_FILE,
                    status=PaymentStatus.FAILED,
                    note=error.message,
                    idempotency_key=idempotency_key,
                )
            )
            await self.uow.commit()
            return Return.ok(None)
        except Exception as e:
            await self._rollback()
            logger.error(f"Autopay lease {lease.id}: could not record failed attempt: {e}")
            return Return.err(
                Error(
                    code="STORE_ERROR",
                    message="Failed attempt could not be recorded",
                    reason=str(e),
                )
            )

    async def _rollback(self) -> None:
        try:
            await self.uow.rollback()
        except Exception as e:
            logger.error(f"Autopay rollback failed: {e}")

    def _generate_idempotency_key(self) -> str:
        """
        Generate an idempotency key for one charge attempt

        A fresh key per attempt: transport retries of the same request reuse
        it, while a later run retrying a declined lease gets a new one.
        """
        return generate_uuid()
