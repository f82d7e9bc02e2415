"""Tenant Use Cases"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.tenant_repository import TenantRepository
from src.domain.tenant import Tenant
from .dtos import CreateTenantCommandDTO, TenantResponseDTO


class CreateTenant:

    def __init__(self, uow: UnitOfWork, tenant_repo: TenantRepository):
        self.uow = uow
        self.tenant_repo = tenant_repo

    async def execute(self, command: CreateTenantCommandDTO) -> Result[TenantResponseDTO]:
        try:
            tenant = await self.tenant_repo.create(Tenant(**command.model_dump()))
            await self.uow.commit()
            return Return.ok(TenantResponseDTO.model_validate(tenant))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_TENANT_FAILED",
                    message="Failed to create tenant",
                    reason=str(e),
                )
            )


class GetTenant:

    def __init__(self, tenant_repo: TenantRepository):
        self.tenant_repo = tenant_repo

    async def execute(self, tenant_id: int) -> Result[TenantResponseDTO]:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if not tenant:
            return Return.err(
                Error(code="TENANT_NOT_FOUND", message=f"Tenant {tenant_id} not found")
            )
        return Return.ok(TenantResponseDTO.model_validate(tenant))
