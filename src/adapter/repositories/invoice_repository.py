"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import date, datetime, time, timedelta
from sqlalchemy import update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.id == invoice_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def exists_for_period(self, lease_id: int, period_start: date) -> bool:
        """
        Check if invoice already exists for the given billing period

        Args:
            lease_id: Lease ID
            period_start: Start of billing period

        Returns:
            True if invoice exists, False otherwise
        """
        statement = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.lease_id == lease_id)
            .where(Invoice.period_start == period_start)
        )
        result = await self.session.execute(statement)
        count = result.scalar_one()
        return count > 0

    async def mark_paid(self, invoice_id: int) -> bool:
        statement = (
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(status=InvoiceStatus.PAID, updated_at=datetime.utcnow())
        )
        result = await self.session.execute(statement)
        return result.rowcount > 0

    async def list_created_between(self, start: date, end: date) -> List[Invoice]:
        """
        Retrieve invoices created within [start, end], both days inclusive

        Args:
            start: First day
            end: Last day

        Returns:
            Invoices ordered by creation time
        """
        statement = (
            select(Invoice)
            .where(Invoice.created_at >= datetime.combine(start, time.min))
            .where(Invoice.created_at < datetime.combine(end + timedelta(days=1), time.min))
            .order_by(Invoice.created_at.asc(), Invoice.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
