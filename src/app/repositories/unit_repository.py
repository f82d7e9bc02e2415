"""Unit Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from src.domain.unit import Unit, UnitStatus


class UnitRepository(ABC):
    """Repository interface for Unit persistence"""

    @abstractmethod
    async def list_all(self) -> List[Unit]:
        """Return all units ordered by number"""
        pass

    @abstractmethod
    async def get_by_id(self, unit_id: int) -> Optional[Unit]:
        pass

    @abstractmethod
    async def create(self, unit: Unit) -> Unit:
        pass

    @abstractmethod
    async def update(self, unit_id: int, changes: Dict[str, Any]) -> Optional[Unit]:
        """
        Apply a partial update

        Args:
            unit_id: Unit ID
            changes: Field name -> new value

        Returns:
            Updated Unit, or None if the unit does not exist
        """
        pass

    @abstractmethod
    async def set_status(self, unit_id: int, status: UnitStatus) -> None:
        pass
