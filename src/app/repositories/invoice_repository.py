"""Invoice Repository Interface"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, List
from src.domain.invoice import Invoice


class InvoiceRepository(ABC):
    """Repository interface for Invoice persistence"""

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        pass

    @abstractmethod
    async def exists_for_period(self, lease_id: int, period_start: date) -> bool:
        """Check whether the lease already has an invoice for the period"""
        pass

    @abstractmethod
    async def mark_paid(self, invoice_id: int) -> bool:
        """
        Mark invoice paid

        Returns:
            True if an invoice was updated
        """
        pass

    @abstractmethod
    async def list_created_between(self, start: date, end: date) -> List[Invoice]:
        """Invoices created on or between start and end (inclusive, whole days)"""
        pass
