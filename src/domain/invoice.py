"""Invoice Domain Entity

Monthly rent invoice for a lease.
"""

from datetime import datetime, date
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Date, ForeignKey
from src.domain.base import BaseModel, id_column


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    OPEN = "open"
    PAID = "paid"


class Invoice(BaseModel, table=True):
    """
    Invoice - One billing period of rent for a lease

    Domain Rules:
    - One invoice per lease per billing period
    - Status transitions: open -> paid
    - total_cents equals the lease rent at the time the invoice was generated
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_lease_period', 'lease_id', 'period_start', unique=True),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_created_at', 'created_at'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique invoice identifier (auto-increment)"
    )

    lease_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("leases.id"), nullable=False),
        description="Foreign key to Lease"
    )

    period_start: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Billing period start date"
    )

    period_end: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Billing period end date"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date"
    )

    total_cents: int = Field(
        description="Invoice total in cents"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.OPEN,
        description="Invoice status (open, paid)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )
