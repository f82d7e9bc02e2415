"""Payment Domain Entity

Append-only ledger of charge attempts. Every autopay attempt, successful or not,
produces exactly one row.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, String, Text
from src.domain.base import BaseModel, id_column


class PaymentStatus(str, Enum):
    """Outcome of a charge attempt"""
    PAID = "paid"
    FAILED = "failed"


class PaymentGatewayName(str, Enum):
    SQUARE = "square"
    PAYPAL = "paypal"


class PaymentMethod(str, Enum):
    CARD = "card"                  # One-off card nonce
    CARD_ON_FILE = "card_on_file"  # Saved card (autopay)
    PAYPAL = "paypal"


class Payment(BaseModel, table=True):
    """
    Payment - One charge attempt against a lease or invoice

    Domain Rules:
    - Immutable once written (append-only)
    - gateway_payment_id is present only when status is paid
    - idempotency_key is the key sent to the gateway for this attempt
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_created_at', 'created_at'),
        Index('ix_payments_lease_id', 'lease_id'),
        Index('ix_payments_idempotency_key', 'idempotency_key', unique=True),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique ledger entry identifier (auto-increment)"
    )

    lease_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, ForeignKey("leases.id"), nullable=True),
        description="Lease charged (autopay and lease payments)"
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, ForeignKey("invoices.id"), nullable=True),
        description="Invoice paid, if the payment settled one"
    )

    gateway: PaymentGatewayName = Field(
        description="Processor used (square, paypal)"
    )

    gateway_payment_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Processor transaction id (successful payments only)"
    )

    amount_cents: int = Field(
        description="Charged amount in cents"
    )

    method: PaymentMethod = Field(
        description="Payment method (card, card_on_file, paypal)"
    )

    status: PaymentStatus = Field(
        description="Attempt outcome (paid, failed)"
    )

    note: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-text note (failure reason for failed attempts)"
    )

    idempotency_key: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="Idempotency key sent to the processor"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Attempt timestamp (immutable)"
    )
