"""Tenant Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.tenant import Tenant


class TenantRepository(ABC):
    """Repository interface for Tenant persistence"""

    @abstractmethod
    async def get_by_id(self, tenant_id: int) -> Optional[Tenant]:
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        pass

    @abstractmethod
    async def set_square_customer_id(self, tenant_id: int, customer_id: str) -> None:
        pass

    @abstractmethod
    async def set_paypal_payer_id(self, tenant_id: int, payer_id: str) -> None:
        pass
