"""Unit API Routes"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.rentals import (
    ListUnits,
    CreateUnit,
    UpdateUnit,
    CreateUnitCommandDTO,
    UpdateUnitCommandDTO,
    UnitResponseDTO,
)
from src.adapter.repositories.unit_repository import SqlAlchemyUnitRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/units", tags=["Units"])


@router.get("", response_model=List[UnitResponseDTO])
async def list_units(session: AsyncSession = Depends(get_session)):
    """List all units ordered by unit number."""
    result = await ListUnits(SqlAlchemyUnitRepository(session)).execute()
    return result.value


@router.post("", response_model=UnitResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_unit(
    request: CreateUnitCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    use_case = CreateUnit(SqlAlchemyUnitOfWork(session), SqlAlchemyUnitRepository(session))
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.patch(
    "/{unit_id}",
    response_model=UnitResponseDTO,
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
async def update_unit(
    unit_id: int,
    request: UpdateUnitCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Partially update a unit.

    Only the fields present in the request body are changed.

    **Returns:**
    - 200: Updated unit
    - 404: Unit not found
    """
    use_case = UpdateUnit(SqlAlchemyUnitOfWork(session), SqlAlchemyUnitRepository(session))
    result = await use_case.execute(unit_id, request)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value
