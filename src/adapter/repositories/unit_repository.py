"""SQLAlchemy implementation of UnitRepository"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.unit_repository import UnitRepository
from src.domain.unit import Unit, UnitStatus


class SqlAlchemyUnitRepository(UnitRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Unit]:
        stmt = select(Unit).order_by(Unit.number.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, unit_id: int) -> Optional[Unit]:
        stmt = select(Unit).where(Unit.id == unit_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, unit: Unit) -> Unit:
        self.session.add(unit)
        await self.session.flush()
        await self.session.refresh(unit)
        return unit

    async def update(self, unit_id: int, changes: Dict[str, Any]) -> Optional[Unit]:
        unit = await self.get_by_id(unit_id)
        if not unit:
            return None
        for field, value in changes.items():
            setattr(unit, field, value)
        unit.updated_at = datetime.utcnow()
        self.session.add(unit)
        await self.session.flush()
        await self.session.refresh(unit)
        return unit

    async def set_status(self, unit_id: int, status: UnitStatus) -> None:
        unit = await self.get_by_id(unit_id)
        if unit:
            unit.status = status
            unit.updated_at = datetime.utcnow()
            self.session.add(unit)
            await self.session.flush()
