"""Invoice API Routes"""

from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.app.use_cases.billing import GenerateMonthlyInvoices, GenerateInvoicesResultDTO
from src.adapter.repositories.lease_repository import SqlAlchemyLeaseRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.post("/run", response_model=GenerateInvoicesResultDTO, status_code=status.HTTP_200_OK)
async def run_monthly_invoices(session: AsyncSession = Depends(get_session)):
    """
    Generate this month's invoices.

    Creates one open invoice per active lease for the current month (UTC),
    due on the configured day. Leases already invoiced for the month are
    skipped, so the call is safe to repeat.
    """
    use_case = GenerateMonthlyInvoices(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyLeaseRepository(session),
        SqlAlchemyInvoiceRepository(session),
        due_day=ApplicationConfig.INVOICE_DUE_DAY,
    )
    result = await use_case.execute(datetime.utcnow().date())

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value
