"""Tenant Domain Entity"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, id_column


class Tenant(BaseModel, table=True):
    """
    Tenant - Person or business renting one or more units

    square_customer_id is filled the first time a card is saved for the tenant,
    paypal_payer_id whenever a PayPal order for one of their leases is captured.
    """

    __tablename__ = "tenants"

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique tenant identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Tenant full name or business name"
    )

    email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Contact email"
    )

    phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Contact phone"
    )

    square_customer_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Square customer id (set once a card is on file)"
    )

    paypal_payer_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="PayPal payer id from the latest completed capture"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Tenant creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )
