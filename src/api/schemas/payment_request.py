"""Request schemas for Payment API

Pydantic models for validating incoming HTTP requests.
"""

from typing import Optional
from pydantic import BaseModel, Field


class SaveCardRequestSchema(BaseModel):
    """
    Request schema for saving a card on a lease

    Used for POST /api/leases/{id}/card endpoint.
    """

    source_id: str = Field(
        ...,
        min_length=1,
        description="Card nonce produced by the Square web payments form"
    )

    class Config:
        json_schema_extra = {"example": {"source_id": "cnon:card-nonce-ok"}}


class SquarePaymentRequestSchema(BaseModel):
    """
    Request schema for a one-off card payment

    Used for POST /pay/square endpoint.
    """

    source_id: str = Field(
        ...,
        min_length=1,
        description="Card nonce or saved card id"
    )

    amount_cents: int = Field(
        ...,
        gt=0,
        description="Amount in cents (must be > 0)"
    )

    invoice_id: Optional[int] = Field(
        default=None,
        description="Invoice settled by this payment"
    )

    lease_id: Optional[int] = Field(
        default=None,
        description="Lease the payment belongs to"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "source_id": "cnon:card-nonce-ok",
                "amount_cents": 12500,
                "invoice_id": 42,
            }
        }


class PayPalOrderRequestSchema(BaseModel):
    amount_cents: int = Field(..., gt=0, description="Amount in cents (must be > 0)")
    invoice_id: Optional[int] = None


class PayPalCaptureRequestSchema(BaseModel):
    order_id: str = Field(..., min_length=1, description="Approved PayPal order id")
    amount_cents: int = Field(..., gt=0, description="Amount in cents (must be > 0)")
    invoice_id: Optional[int] = None
    lease_id: Optional[int] = None


class RefundRequestSchema(BaseModel):
    """Request schema for POST /api/payments/{id}/refund; empty body refunds in full"""

    amount_cents: Optional[int] = Field(
        default=None,
        gt=0,
        description="Amount to refund in cents (defaults to the full payment)"
    )

    reason: Optional[str] = Field(
        default=None,
        max_length=192,
        description="Reason shown on the Square refund"
    )
