"""SQLAlchemy implementation of LeaseRepository

Due-date advances are issued as a single conditional UPDATE so that two
overlapping autopay runs cannot both move the same lease forward.
"""

from datetime import date, datetime
from typing import Optional, List
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.lease_repository import LeaseRepository
from src.domain.lease import Lease, LeaseStatus


class SqlAlchemyLeaseRepository(LeaseRepository):
    """
    SQLAlchemy implementation of LeaseRepository

    Features:
    - Due-lease selection for autopay
    - Compare-and-swap due-date advance
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, lease_id: int) -> Optional[Lease]:
        stmt = select(Lease).where(Lease.id == lease_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, lease: Lease) -> Lease:
        self.session.add(lease)
        await self.session.flush()
        await self.session.refresh(lease)
        return lease

    async def list_active(self) -> List[Lease]:
        stmt = (
            select(Lease)
            .where(Lease.status == LeaseStatus.ACTIVE)
            .order_by(Lease.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_due_for_autopay(self, due_date: date) -> List[Lease]:
        """
        Retrieve active autopay leases due on due_date that have a saved card

        Args:
            due_date: Due date to match exactly

        Returns:
            Leases ordered by id
        """
        stmt = (
            select(Lease)
            .where(Lease.autopay == True)  # noqa: E712
            .where(Lease.status == LeaseStatus.ACTIVE)
            .where(Lease.next_due_date == due_date)
            .where(Lease.square_card_id.is_not(None))
            .order_by(Lease.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def advance_due_date(self, lease_id: int, expected_due_date: date, new_due_date: date) -> bool:
        """
        Conditionally advance next_due_date

        Args:
            lease_id: Lease ID
            expected_due_date: Due date the caller charged for
            new_due_date: Next anchor date

        Returns:
            True if exactly this call moved the due date
        """
        stmt = (
            update(Lease)
            .where(Lease.id == lease_id)
            .where(Lease.next_due_date == expected_due_date)
            .values(next_due_date=new_due_date, updated_at=datetime.utcnow())
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def save_card(self, lease_id: int, card_id: str) -> Optional[Lease]:
        lease = await self.get_by_id(lease_id)
        if not lease:
            return None
        lease.square_card_id = card_id
        lease.autopay = True
        lease.updated_at = datetime.utcnow()
        self.session.add(lease)
        await self.session.flush()
        await self.session.refresh(lease)
        return lease

    async def end(self, lease_id: int) -> Optional[Lease]:
        lease = await self.get_by_id(lease_id)
        if not lease:
            return None
        lease.status = LeaseStatus.ENDED
        lease.updated_at = datetime.utcnow()
        self.session.add(lease)
        await self.session.flush()
        await self.session.refresh(lease)
        return lease
