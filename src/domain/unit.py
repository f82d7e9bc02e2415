"""Unit Domain Entity

A rentable storage space.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, String, Text
from src.domain.base import BaseModel, id_column


class UnitStatus(str, Enum):
    """Unit occupancy status"""
    VACANT = "vacant"
    OCCUPIED = "occupied"


class Unit(BaseModel, table=True):
    """
    Unit - Rentable storage space

    Domain Rules:
    - number is unique across the facility
    - rate_cents is the advertised monthly rate in cents (>= 0)
    - Status flips to occupied when a lease referencing the unit is created
    """

    __tablename__ = "units"
    __table_args__ = (
        CheckConstraint('rate_cents >= 0', name='unit_rate_non_negative'),
        Index('ix_units_number', 'number', unique=True),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique unit identifier (auto-increment)"
    )

    number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Unit number as painted on the door (e.g., 'A-101')"
    )

    size: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Unit size label (e.g., '10x10')"
    )

    rate_cents: int = Field(
        ge=0,
        description="Monthly rate in cents"
    )

    type: str = Field(
        default="standard",
        sa_column=Column(String(50), nullable=False, default="standard"),
        description="Unit type (e.g., standard, climate, parking)"
    )

    status: UnitStatus = Field(
        default=UnitStatus.VACANT,
        description="Occupancy status (vacant, occupied)"
    )

    property_id: Optional[str] = Field(
        default=None,
        description="Optional property/facility reference"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-text notes"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Unit creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )
