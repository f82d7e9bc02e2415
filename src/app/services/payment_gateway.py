"""Payment Gateway Interface

Card processor operations used by the service: customers, saved cards,
charges and refunds. Every mutating call carries an idempotency key so that a
retried request for the same attempt never moves money twice.

Implementations return Result instead of raising; a processor decline, HTTP
error or timeout is an Error with code GATEWAY_ERROR.
"""

from abc import ABC, abstractmethod
from typing import Optional
from pydantic import BaseModel, Field
from libs.result import Result

GATEWAY_ERROR = "GATEWAY_ERROR"


class GatewayCustomer(BaseModel):
    customer_id: str = Field(..., description="Processor customer id")


class GatewayCard(BaseModel):
    card_id: str = Field(..., description="Saved card id usable as a payment source")
    brand: Optional[str] = Field(default=None, description="Card brand (e.g., VISA)")
    last_4: Optional[str] = Field(default=None, description="Last four digits")


class GatewayPayment(BaseModel):
    payment_id: str = Field(..., description="Processor payment id")
    status: str = Field(..., description="Processor payment status (e.g., COMPLETED)")
    amount_cents: int = Field(..., description="Charged amount in cents")


class GatewayRefund(BaseModel):
    refund_id: str = Field(..., description="Processor refund id")
    status: str = Field(..., description="Processor refund status (e.g., PENDING)")
    amount_cents: int = Field(..., description="Refunded amount in cents")


class PaymentGateway(ABC):
    """
    Abstract card payment gateway

    Implementations:
    - SquarePaymentGateway (Square REST API)
    """

    @abstractmethod
    async def create_customer(
        self,
        idempotency_key: str,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        reference_id: Optional[str] = None,
    ) -> Result[GatewayCustomer]:
        pass

    @abstractmethod
    async def save_card(
        self, idempotency_key: str, source_id: str, customer_id: str
    ) -> Result[GatewayCard]:
        """
        Store a card for later charges

        Args:
            idempotency_key: Unique key for this attempt
            source_id: Single-use card nonce from the web payment form
            customer_id: Processor customer owning the card
        """
        pass

    @abstractmethod
    async def create_payment(
        self,
        idempotency_key: str,
        source_id: str,
        amount_cents: int,
        note: Optional[str] = None,
        customer_id: Optional[str] = None,
    ) -> Result[GatewayPayment]:
        """
        Charge a card nonce or saved card

        Args:
            idempotency_key: Unique key for this attempt
            source_id: Card nonce or saved card id
            amount_cents: Amount in cents
            note: Free-text note shown in the processor dashboard
            customer_id: Customer owning a saved card (required by some processors)
        """
        pass

    @abstractmethod
    async def refund_payment(
        self, idempotency_key: str, payment_id: str, amount_cents: int, reason: Optional[str] = None
    ) -> Result[GatewayRefund]:
        pass

    async def aclose(self) -> None:
        """Release network resources"""
        return None
