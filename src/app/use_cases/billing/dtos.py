"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs. Amounts are integer
cents.
"""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from src.domain.payment import PaymentGatewayName, PaymentMethod, PaymentStatus

# Alias so the "date" field below does not shadow the type
RunDate = date


class AutopayLeaseResultDTO(BaseModel):
    """
    Outcome of one lease in an autopay run

    ok=True carries the gateway payment id and the new due date; ok=False
    carries a human-readable error.
    """

    lease_id: int = Field(..., description="Lease charged")
    ok: bool = Field(..., description="Charge succeeded and was recorded")
    payment_id: Optional[str] = Field(default=None, description="Gateway payment id")
    next_due_date: Optional[date] = Field(default=None, description="Advanced due date")
    error: Optional[str] = Field(default=None, description="Failure reason")


class AutopayRunResultDTO(BaseModel):
    """
    Summary of an autopay run

    Returned by RunAutopay use case.
    """

    date: RunDate = Field(..., description="As-of date the run charged for")
    count: int = Field(..., description="Number of leases processed")
    results: List[AutopayLeaseResultDTO] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.count - self.succeeded

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2025-04-01",
                "count": 2,
                "results": [
                    {"lease_id": 1, "ok": True, "payment_id": "sq_pay_1", "next_due_date": "2025-05-01"},
                    {"lease_id": 2, "ok": False, "error": "Card declined"},
                ],
            }
        }


class GenerateInvoicesResultDTO(BaseModel):
    """Summary of a monthly invoice run"""

    created: int = Field(..., description="Invoices created")
    skipped: int = Field(default=0, description="Leases already invoiced for the period")
    period_start: date
    period_end: date


class PaymentDTO(BaseModel):
    """Payment ledger entry"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    lease_id: Optional[int] = None
    invoice_id: Optional[int] = None
    gateway: PaymentGatewayName
    gateway_payment_id: Optional[str] = None
    amount_cents: int
    method: PaymentMethod
    status: PaymentStatus
    note: Optional[str] = None
    created_at: datetime


class ChargeCardCommandDTO(BaseModel):
    """
    Command DTO for a one-off card payment

    Used as input to ChargeCard use case.
    """

    source_id: str = Field(..., min_length=1, description="Card nonce or saved card id")
    amount_cents: int = Field(..., gt=0, description="Amount in cents (must be > 0)")
    invoice_id: Optional[int] = Field(default=None, description="Invoice settled by this payment")
    lease_id: Optional[int] = Field(default=None, description="Lease the payment belongs to")


class ChargeCardResponseDTO(BaseModel):
    payment_id: int = Field(..., description="Ledger entry id")
    gateway_payment_id: str
    status: PaymentStatus
    amount_cents: int
    invoice_id: Optional[int] = None


class PayPalOrderCommandDTO(BaseModel):
    amount_cents: int = Field(..., gt=0)
    invoice_id: Optional[int] = None


class PayPalCaptureCommandDTO(BaseModel):
    order_id: str = Field(..., min_length=1, description="Approved PayPal order id")
    amount_cents: int = Field(..., gt=0)
    invoice_id: Optional[int] = None
    lease_id: Optional[int] = None


class RefundCommandDTO(BaseModel):
    """
    Command DTO for refunding a recorded payment

    amount_cents defaults to the full payment amount.
    """

    payment_id: int = Field(..., description="Ledger entry to refund")
    amount_cents: Optional[int] = Field(default=None, gt=0)
    reason: Optional[str] = None


class RefundResponseDTO(BaseModel):
    payment_id: int
    refund_id: str
    status: str
    amount_cents: int
