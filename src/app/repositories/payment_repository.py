"""Payment Repository Interface

The payments table is the append-only payment ledger: there is no update or
delete operation.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """Repository interface for the payment ledger"""

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Append a ledger entry

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    async def list_recent(self, limit: int) -> List[Payment]:
        """Most recent entries first"""
        pass
