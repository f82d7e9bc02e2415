"""GenerateMonthlyInvoices Use Case

Creates one open invoice per active lease for the month containing the run date.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.lease_repository import LeaseRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.billing_dates import days_in_month
from src.domain.invoice import Invoice, InvoiceStatus
from .dtos import GenerateInvoicesResultDTO

logger = logging.getLogger(__name__)


class GenerateMonthlyInvoices:
    """
    Use Case: Invoice every active lease for the current month

    Business Rules:
    1. Period runs from the 1st to the last day of the month
    2. Due date is due_day of the month (clamped to the month length)
    3. Idempotent per lease and period: existing invoices are skipped
    """

    def __init__(
        self,
        uow: UnitOfWork,
        lease_repo: LeaseRepository,
        invoice_repo: InvoiceRepository,
        due_day: int = 5,
    ):
        self.uow = uow
        self.lease_repo = lease_repo
        self.invoice_repo = invoice_repo
        self.due_day = due_day

    async def execute(self, today: date) -> Result[GenerateInvoicesResultDTO]:
        last_day = days_in_month(today)
        period_start = today.replace(day=1)
        period_end = today.replace(day=last_day)
        due_date = today.replace(day=min(self.due_day, last_day))

        created = 0
        skipped = 0
        try:
            leases = await self.lease_repo.list_active()
            for lease in leases:
                if await self.invoice_repo.exists_for_period(lease.id, period_start):
                    skipped += 1
                    continue

                await self.invoice_repo.create(
                    Invoice(
                        lease_id=lease.id,
                        period_start=period_start,
                        period_end=period_end,
                        due_date=due_date,
                        total_cents=lease.rent_cents,
                        status=InvoiceStatus.OPEN,
                    )
                )
                created += 1

            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="GENERATE_INVOICES_FAILED",
                    message="Failed to generate invoices",
                    reason=str(e),
                )
            )

        logger.info(
            f"Invoices for {period_start:%Y-%m}: {created} created, {skipped} already existed"
        )
        return Return.ok(
            GenerateInvoicesResultDTO(
                created=created,
                skipped=skipped,
                period_start=period_start,
                period_end=period_end,
            )
        )
