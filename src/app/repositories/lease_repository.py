"""Lease Repository Interface

Defines the contract for lease persistence, including the due-lease query and
the conditional due-date advance used by autopay.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, List
from src.domain.lease import Lease


class LeaseRepository(ABC):
    """Repository interface for Lease persistence"""

    @abstractmethod
    async def get_by_id(self, lease_id: int) -> Optional[Lease]:
        pass

    @abstractmethod
    async def create(self, lease: Lease) -> Lease:
        pass

    @abstractmethod
    async def list_active(self) -> List[Lease]:
        """Return all active leases ordered by id"""
        pass

    @abstractmethod
    async def get_due_for_autopay(self, due_date: date) -> List[Lease]:
        """
        Retrieve leases to charge on due_date

        Only active leases with autopay enabled, a saved card and
        next_due_date == due_date are returned, ordered by id.

        Args:
            due_date: The run's as-of date

        Returns:
            List of due leases
        """
        pass

    @abstractmethod
    async def advance_due_date(self, lease_id: int, expected_due_date: date, new_due_date: date) -> bool:
        """
        Move next_due_date forward if it still equals expected_due_date

        Compare-and-swap guard against two overlapping runs advancing the
        same lease twice.

        Returns:
            True if the row was updated, False if it had already moved
        """
        pass

    @abstractmethod
    async def save_card(self, lease_id: int, card_id: str) -> Optional[Lease]:
        """Store the saved card and enable autopay"""
        pass

    @abstractmethod
    async def end(self, lease_id: int) -> Optional[Lease]:
        """Transition the lease to ended"""
        pass
