"""SQLAlchemy implementation of TenantRepository"""

from datetime import datetime
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.tenant_repository import TenantRepository
from src.domain.tenant import Tenant


class SqlAlchemyTenantRepository(TenantRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: int) -> Optional[Tenant]:
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, tenant: Tenant) -> Tenant:
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def set_square_customer_id(self, tenant_id: int, customer_id: str) -> None:
        tenant = await self.get_by_id(tenant_id)
        if tenant:
            tenant.square_customer_id = customer_id
            tenant.updated_at = datetime.utcnow()
            self.session.add(tenant)
            await self.session.flush()

    async def set_paypal_payer_id(self, tenant_id: int, payer_id: str) -> None:
        tenant = await self.get_by_id(tenant_id)
        if tenant:
            tenant.paypal_payer_id = payer_id
            tenant.updated_at = datetime.utcnow()
            self.session.add(tenant)
            await self.session.flush()
