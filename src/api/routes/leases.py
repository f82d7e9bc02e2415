"""Lease API Routes

FastAPI routes for previewing, starting and ending leases and for keeping a
card on file for autopay.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.payment_request import SaveCardRequestSchema
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.rentals import (
    PreviewLease,
    CreateLease,
    SaveLeaseCard,
    EndLease,
    CreateLeaseCommandDTO,
    LeasePreviewDTO,
    LeaseResponseDTO,
    SaveCardCommandDTO,
    SavedCardResponseDTO,
)
from src.adapter.repositories.unit_repository import SqlAlchemyUnitRepository
from src.adapter.repositories.tenant_repository import SqlAlchemyTenantRepository
from src.adapter.repositories.lease_repository import SqlAlchemyLeaseRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_payment_gateway
from src.api.error import ClientError

router = APIRouter(prefix="/leases", tags=["Leases"])


@router.get(
    "/preview",
    response_model=LeasePreviewDTO,
    responses={
        404: {
            "description": "Unit not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "UNIT_NOT_FOUND",
                            "message": "Unit 12 not found"
                        }
                    }
                }
            }
        }
    }
)
async def preview_lease(
    unit_id: int = Query(..., description="Unit to rent"),
    start_date: date = Query(..., description="First day of the rental (YYYY-MM-DD)"),
    session: AsyncSession = Depends(get_session)
):
    """
    Preview the prorated first charge for a unit.

    **Example:** a $100.00 unit starting 2025-03-15 covers 17 of 31 days:

    ```json
    {
      "amount_cents": 5484,
      "next_due_date": "2025-04-01",
      "monthly_cents": 10000,
      "billing_anchor_day": 1
    }
    ```

    **Returns:**
    - 200: Preview computed
    - 400: unit_id or start_date missing or malformed
    - 404: Unit not found
    """
    result = await PreviewLease(SqlAlchemyUnitRepository(session)).execute(unit_id, start_date)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.post(
    "",
    response_model=LeaseResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_lease(
    request: CreateLeaseCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Start a lease.

    Sets the first recurring due date to the 1st of the following month and
    marks the unit occupied. `first_charge_cents` is the prorated charge for
    the partial first month.

    **Returns:**
    - 201: Lease created
    - 404: Unit or tenant not found
    """
    use_case = CreateLease(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyUnitRepository(session),
        SqlAlchemyTenantRepository(session),
        SqlAlchemyLeaseRepository(session),
    )
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.post("/{lease_id}/card", response_model=SavedCardResponseDTO)
async def save_lease_card(
    lease_id: int,
    request: SaveCardRequestSchema,
    session: AsyncSession = Depends(get_session),
    gateway: Optional[PaymentGateway] = Depends(get_payment_gateway),
):
    """
    Save a card on file for the lease and enable autopay.

    **Returns:**
    - 200: Card saved
    - 402: Square rejected the customer or card
    - 404: Lease or tenant not found
    - 503: Square is not configured
    """
    use_case = SaveLeaseCard(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyLeaseRepository(session),
        SqlAlchemyTenantRepository(session),
        gateway,
    )
    result = await use_case.execute(
        SaveCardCommandDTO(lease_id=lease_id, source_id=request.source_id)
    )

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.post("/{lease_id}/end", response_model=LeaseResponseDTO)
async def end_lease(lease_id: int, session: AsyncSession = Depends(get_session)):
    use_case = EndLease(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyLeaseRepository(session),
        SqlAlchemyUnitRepository(session),
    )
    result = await use_case.execute(lease_id)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value
