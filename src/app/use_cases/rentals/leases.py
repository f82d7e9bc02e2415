"""Lease Use Cases

Preview and create leases, keep a card on file for autopay, and end leases.
The first charge and the first recurring due date both come from
src.domain.billing_dates.
"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.payment_gateway import PaymentGateway
from src.app.repositories.unit_repository import UnitRepository
from src.app.repositories.tenant_repository import TenantRepository
from src.app.repositories.lease_repository import LeaseRepository
from src.domain.base import generate_uuid
from src.domain.billing_dates import prorate, next_anchor
from src.domain.lease import Lease, LeaseStatus, BILLING_ANCHOR_DAY
from src.domain.unit import UnitStatus
from .dtos import (
    CreateLeaseCommandDTO,
    LeasePreviewDTO,
    LeaseResponseDTO,
    SaveCardCommandDTO,
    SavedCardResponseDTO,
    to_lease_response,
)

logger = logging.getLogger(__name__)


class PreviewLease:
    """
    Use Case: Preview the first charge of a lease on a unit

    Uses the unit's current monthly rate.
    """

    def __init__(self, unit_repo: UnitRepository):
        self.unit_repo = unit_repo

    async def execute(self, unit_id: int, start_date: date) -> Result[LeasePreviewDTO]:
        unit = await self.unit_repo.get_by_id(unit_id)
        if not unit:
            return Return.err(
                Error(code="UNIT_NOT_FOUND", message=f"Unit {unit_id} not found")
            )

        return Return.ok(
            LeasePreviewDTO(
                amount_cents=prorate(start_date, unit.rate_cents),
                next_due_date=next_anchor(start_date),
                monthly_cents=unit.rate_cents,
                billing_anchor_day=BILLING_ANCHOR_DAY,
            )
        )


class CreateLease:
    """
    Use Case: Start a lease

    Business Rules:
    1. Unit and tenant must exist
    2. next_due_date is the 1st of the month after start_date
    3. The unit becomes occupied in the same transaction
    4. Response carries the prorated first-month charge
    """

    def __init__(
        self,
        uow: UnitOfWork,
        unit_repo: UnitRepository,
        tenant_repo: TenantRepository,
        lease_repo: LeaseRepository,
    ):
        self.uow = uow
        self.unit_repo = unit_repo
        self.tenant_repo = tenant_repo
        self.lease_repo = lease_repo

    async def execute(self, command: CreateLeaseCommandDTO) -> Result[LeaseResponseDTO]:
        try:
            unit = await self.unit_repo.get_by_id(command.unit_id)
            if not unit:
                return Return.err(
                    Error(code="UNIT_NOT_FOUND", message=f"Unit {command.unit_id} not found")
                )

            tenant = await self.tenant_repo.get_by_id(command.tenant_id)
            if not tenant:
                return Return.err(
                    Error(code="TENANT_NOT_FOUND", message=f"Tenant {command.tenant_id} not found")
                )

            lease = Lease(
                unit_id=command.unit_id,
                tenant_id=command.tenant_id,
                start_date=command.start_date,
                rent_cents=command.rent_cents,
                deposit_cents=command.deposit_cents,
                status=LeaseStatus.ACTIVE,
                autopay=command.autopay,
                square_card_id=command.square_card_id,
                billing_anchor_day=BILLING_ANCHOR_DAY,
                next_due_date=next_anchor(command.start_date),
            )
            created = await self.lease_repo.create(lease)
            await self.unit_repo.set_status(command.unit_id, UnitStatus.OCCUPIED)
            await self.uow.commit()

            logger.info(
                f"Lease {created.id} created for unit {command.unit_id}, "
                f"next due {created.next_due_date}"
            )
            return Return.ok(
                to_lease_response(created, prorate(command.start_date, command.rent_cents))
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_LEASE_FAILED",
                    message="Failed to create lease",
                    reason=str(e),
                )
            )


class SaveLeaseCard:
    """
    Use Case: Put a card on file for a lease and enable autopay

    Flow:
    1. Create the tenant's Square customer if it does not exist yet (committed
       right away so a later card failure does not orphan it)
    2. Save the card nonce against the customer
    3. Store the card id on the lease and turn autopay on
    """

    def __init__(
        self,
        uow: UnitOfWork,
        lease_repo: LeaseRepository,
        tenant_repo: TenantRepository,
        gateway: Optional[PaymentGateway],
    ):
        self.uow = uow
        self.lease_repo = lease_repo
        self.tenant_repo = tenant_repo
        self.gateway = gateway

    async def execute(self, command: SaveCardCommandDTO) -> Result[SavedCardResponseDTO]:
        if self.gateway is None:
            return Return.err(
                Error(code="CONFIGURATION_ERROR", message="Payment gateway is not configured")
            )

        try:
            lease = await self.lease_repo.get_by_id(command.lease_id)
            if not lease:
                return Return.err(
                    Error(code="LEASE_NOT_FOUND", message=f"Lease {command.lease_id} not found")
                )

            tenant = await self.tenant_repo.get_by_id(lease.tenant_id)
            if not tenant:
                return Return.err(
                    Error(code="TENANT_NOT_FOUND", message=f"Tenant {lease.tenant_id} not found")
                )

            tenant_id = tenant.id
            customer_id = tenant.square_customer_id
            if not customer_id:
                customer_result = await self.gateway.create_customer(
                    idempotency_key=generate_uuid(),
                    name=tenant.name,
                    email=tenant.email,
                    phone=tenant.phone,
                    reference_id=f"tenant:{tenant_id}",
                )
                if customer_result.is_err():
                    return customer_result
                customer_id = customer_result.value.customer_id
                await self.tenant_repo.set_square_customer_id(tenant_id, customer_id)
                await self.uow.commit()

            card_result = await self.gateway.save_card(
                idempotency_key=generate_uuid(),
                source_id=command.source_id,
                customer_id=customer_id,
            )
            if card_result.is_err():
                return card_result
            card = card_result.value

            updated = await self.lease_repo.save_card(command.lease_id, card.card_id)
            await self.uow.commit()

            logger.info(f"Card on file saved for lease {command.lease_id}; autopay enabled")
            return Return.ok(
                SavedCardResponseDTO(
                    lease_id=command.lease_id,
                    autopay=updated.autopay,
                    card_brand=card.brand,
                    card_last_4=card.last_4,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SAVE_CARD_FAILED",
                    message="Failed to save card",
                    reason=str(e),
                )
            )


class EndLease:

    def __init__(self, uow: UnitOfWork, lease_repo: LeaseRepository, unit_repo: UnitRepository):
        self.uow = uow
        self.lease_repo = lease_repo
        self.unit_repo = unit_repo

    async def execute(self, lease_id: int) -> Result[LeaseResponseDTO]:
        try:
            lease = await self.lease_repo.end(lease_id)
            if not lease:
                return Return.err(
                    Error(code="LEASE_NOT_FOUND", message=f"Lease {lease_id} not found")
                )
            await self.unit_repo.set_status(lease.unit_id, UnitStatus.VACANT)
            await self.uow.commit()
            return Return.ok(to_lease_response(lease))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="END_LEASE_FAILED",
                    message="Failed to end lease",
                    reason=str(e),
                )
            )
