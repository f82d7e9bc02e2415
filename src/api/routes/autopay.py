"""Autopay API Routes

Manual triggers for the autopay run. The scheduled run lives in
src.worker.autopay_runner; all three share RunAutopay.
"""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.billing import RunAutopay, AutopayRunResultDTO
from src.adapter.repositories.lease_repository import SqlAlchemyLeaseRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.tenant_repository import SqlAlchemyTenantRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_payment_gateway
from src.api.error import ClientError

router = APIRouter(prefix="/autopay", tags=["Autopay"])

RUN_RESPONSES = {
    503: {
        "description": "Square is not configured or the lease store is unavailable",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "CONFIGURATION_ERROR",
                        "message": "Payment gateway is not configured"
                    }
                }
            }
        }
    }
}


async def _run_autopay(
    as_of: Optional[date],
    session: AsyncSession,
    gateway: Optional[PaymentGateway],
) -> AutopayRunResultDTO:
    use_case = RunAutopay(
        uow=SqlAlchemyUnitOfWork(session),
        lease_repo=SqlAlchemyLeaseRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        tenant_repo=SqlAlchemyTenantRepository(session),
        gateway=gateway,
        charge_timeout=ApplicationConfig.AUTOPAY_CHARGE_TIMEOUT_SECONDS,
    )
    result = await use_case.execute(as_of or datetime.utcnow().date())

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.post("/run", response_model=AutopayRunResultDTO, responses=RUN_RESPONSES)
async def run_autopay(
    as_of: Optional[date] = Query(default=None, alias="date", description="YYYY-MM-DD, default today (UTC)"),
    session: AsyncSession = Depends(get_session),
    gateway: Optional[PaymentGateway] = Depends(get_payment_gateway),
):
    """
    Charge every autopay lease due on `date`.

    Individual card failures do not fail the request: each lease reports its
    own result, and a failed lease is retried by the next run for the same
    date.

    **Example response:**
    ```json
    {
      "date": "2025-04-01",
      "count": 2,
      "results": [
        {"lease_id": 1, "ok": true, "payment_id": "sq_pay_1", "next_due_date": "2025-05-01"},
        {"lease_id": 2, "ok": false, "error": "Card declined"}
      ]
    }
    ```
    """
    return await _run_autopay(as_of, session, gateway)


@router.get("/run-test", response_model=AutopayRunResultDTO, responses=RUN_RESPONSES)
async def run_autopay_test(
    as_of: Optional[date] = Query(default=None, alias="date", description="YYYY-MM-DD, default today (UTC)"),
    session: AsyncSession = Depends(get_session),
    gateway: Optional[PaymentGateway] = Depends(get_payment_gateway),
):
    """Browser-friendly trigger for the same run as POST /run."""
    return await _run_autopay(as_of, session, gateway)
