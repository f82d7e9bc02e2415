"""Tenant API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.rentals import (
    CreateTenant,
    GetTenant,
    CreateTenantCommandDTO,
    TenantResponseDTO,
)
from src.adapter.repositories.tenant_repository import SqlAlchemyTenantRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.post("", response_model=TenantResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    request: CreateTenantCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    use_case = CreateTenant(SqlAlchemyUnitOfWork(session), SqlAlchemyTenantRepository(session))
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.get("/{tenant_id}", response_model=TenantResponseDTO)
async def get_tenant(tenant_id: int, session: AsyncSession = Depends(get_session)):
    result = await GetTenant(SqlAlchemyTenantRepository(session)).execute(tenant_id)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
    return result.value
