"""Lease Domain Entity

Agreement between a tenant and a unit. Rent is billed on the 1st of each month
(the billing anchor); the first month is prorated when the lease starts mid-month.
"""

from datetime import datetime, date
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, Date, ForeignKey, String
from src.domain.base import BaseModel, id_column

BILLING_ANCHOR_DAY = 1


class LeaseStatus(str, Enum):
    """Lease lifecycle status"""
    ACTIVE = "active"
    ENDED = "ended"


class Lease(BaseModel, table=True):
    """
    Lease - Tenant/unit rental agreement

    Domain Rules:
    - Created active; the referenced unit becomes occupied
    - next_due_date is always the 1st of a month once set
    - next_due_date only moves forward, and only after a successful autopay charge
    - Never deleted, only transitioned to ended
    - square_card_id is present only once a card is on file
    """

    __tablename__ = "leases"
    __table_args__ = (
        CheckConstraint('rent_cents >= 0', name='lease_rent_non_negative'),
        CheckConstraint('deposit_cents >= 0', name='lease_deposit_non_negative'),
        Index('ix_leases_autopay_due', 'autopay', 'next_due_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique lease identifier (auto-increment)"
    )

    unit_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("units.id"), nullable=False),
        description="Foreign key to Unit"
    )

    tenant_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("tenants.id"), nullable=False),
        description="Foreign key to Tenant"
    )

    start_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="First day of the rental"
    )

    rent_cents: int = Field(
        description="Monthly rent in cents"
    )

    deposit_cents: int = Field(
        default=0,
        description="Security deposit in cents"
    )

    status: LeaseStatus = Field(
        default=LeaseStatus.ACTIVE,
        description="Lease status (active, ended)"
    )

    autopay: bool = Field(
        default=False,
        description="Charge the saved card automatically on each due date"
    )

    square_card_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Saved Square card id used for autopay"
    )

    billing_anchor_day: int = Field(
        default=BILLING_ANCHOR_DAY,
        description="Day of month rent is due (always 1)"
    )

    next_due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Next recurring due date (1st of a month)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Lease creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )
