"""Square Payment Gateway

PaymentGateway implementation over Square's REST API using httpx.
Connect failures are retried by the transport with the same request body, so
the idempotency key of an attempt is reused and Square never charges twice.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from libs.result import Result, Return, Error
from src.app.services.payment_gateway import (
    PaymentGateway,
    GatewayCustomer,
    GatewayCard,
    GatewayPayment,
    GatewayRefund,
    GATEWAY_ERROR,
)

logger = logging.getLogger(__name__)

SQUARE_PRODUCTION_URL = "https://connect.squareup.com"
SQUARE_SANDBOX_URL = "https://connect.squareupsandbox.com"
CURRENCY = "USD"

# Payment states Square reports for a charge that went through
SUCCESSFUL_PAYMENT_STATUSES = {"COMPLETED", "APPROVED"}


class SquarePaymentGateway(PaymentGateway):
    """
    Square card gateway

    Features:
    - Bearer token auth with pinned Square-Version header
    - Bounded timeout per call; a timeout is a failed attempt
    - Transport-level retries for connection failures
    - Square error details surfaced as Error.message, never the access token
    """

    def __init__(
        self,
        access_token: str,
        location_id: str,
        environment: str = "sandbox",
        api_version: str = "2024-10-17",
        timeout: float = 15.0,
        max_retries: int = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the gateway

        Args:
            access_token: Square access token
            location_id: Square location that receives payments
            environment: "production" or "sandbox"
            api_version: Square-Version header value
            timeout: Per-request timeout in seconds
            max_retries: Connection retries (ignored when transport is given)
            transport: Optional transport override (tests)
        """
        self.location_id = location_id
        self.environment = environment
        base_url = SQUARE_PRODUCTION_URL if environment == "production" else SQUARE_SANDBOX_URL

        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport or httpx.AsyncHTTPTransport(retries=max_retries),
            headers={
                "Authorization": f"Bearer {access_token}",
                "Square-Version": api_version,
                "Content-Type": "application/json",
            },
        )

    async def _post(self, path: str, payload: Dict[str, Any]) -> Result[Dict[str, Any]]:
        """
        POST to Square and unwrap its error envelope

        Returns:
            Result with the decoded JSON body, or GATEWAY_ERROR
        """
        try:
            response = await self.client.post(path, json=payload)
        except httpx.TimeoutException as e:
            logger.error(f"Square request {path} timed out: {type(e).__name__}")
            return Return.err(
                Error(code=GATEWAY_ERROR, message="Payment gateway timed out", reason=str(e))
            )
        except httpx.HTTPError as e:
            logger.error(f"Square request {path} failed: {type(e).__name__}")
            return Return.err(
                Error(code=GATEWAY_ERROR, message="Payment gateway unreachable", reason=str(e))
            )

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            message = self._error_detail(body) or f"Square returned HTTP {response.status_code}"
            logger.warning(f"Square request {path} rejected ({response.status_code}): {message}")
            return Return.err(
                Error(code=GATEWAY_ERROR, message=message, reason=f"status={response.status_code}")
            )

        return Return.ok(body)

    @staticmethod
    def _error_detail(body: Dict[str, Any]) -> Optional[str]:
        errors = body.get("errors") if isinstance(body, dict) else None
        if not errors:
            return None
        first = errors[0]
        return first.get("detail") or first.get("code")

    async def create_customer(
        self,
        idempotency_key: str,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        reference_id: Optional[str] = None,
    ) -> Result[GatewayCustomer]:
        payload: Dict[str, Any] = {"idempotency_key": idempotency_key, "given_name": name}
        if email:
            payload["email_address"] = email
        if phone:
            payload["phone_number"] = phone
        if reference_id:
            payload["reference_id"] = reference_id

        result = await self._post("/v2/customers", payload)
        if result.is_err():
            return result

        customer = result.value.get("customer") or {}
        return Return.ok(GatewayCustomer(customer_id=customer["id"]))

    async def save_card(
        self, idempotency_key: str, source_id: str, customer_id: str
    ) -> Result[GatewayCard]:
        payload = {
            "idempotency_key": idempotency_key,
            "source_id": source_id,
            "card": {"customer_id": customer_id},
        }
        result = await self._post("/v2/cards", payload)
        if result.is_err():
            return result

        card = result.value.get("card") or {}
        return Return.ok(
            GatewayCard(card_id=card["id"], brand=card.get("card_brand"), last_4=card.get("last_4"))
        )

    async def create_payment(
        self,
        idempotency_key: str,
        source_id: str,
        amount_cents: int,
        note: Optional[str] = None,
        customer_id: Optional[str] = None,
    ) -> Result[GatewayPayment]:
        payload: Dict[str, Any] = {
            "idempotency_key": idempotency_key,
            "source_id": source_id,
            "location_id": self.location_id,
            "amount_money": {"amount": amount_cents, "currency": CURRENCY},
            "autocomplete": True,
        }
        if note:
            payload["note"] = note
        if customer_id:
            payload["customer_id"] = customer_id

        result = await self._post("/v2/payments", payload)
        if result.is_err():
            return result

        payment = result.value.get("payment") or {}
        status = payment.get("status", "UNKNOWN")
        if status not in SUCCESSFUL_PAYMENT_STATUSES:
            return Return.err(
                Error(
                    code=GATEWAY_ERROR,
                    message=f"Payment not completed (status {status})",
                    reason=f"payment_id={payment.get('id')}",
                )
            )

        return Return.ok(
            GatewayPayment(
                payment_id=payment["id"],
                status=status,
                amount_cents=(payment.get("amount_money") or {}).get("amount", amount_cents),
            )
        )

    async def refund_payment(
        self, idempotency_key: str, payment_id: str, amount_cents: int, reason: Optional[str] = None
    ) -> Result[GatewayRefund]:
        payload: Dict[str, Any] = {
            "idempotency_key": idempotency_key,
            "payment_id": payment_id,
            "amount_money": {"amount": amount_cents, "currency": CURRENCY},
        }
        if reason:
            payload["reason"] = reason

        result = await self._post("/v2/refunds", payload)
        if result.is_err():
            return result

        refund = result.value.get("refund") or {}
        return Return.ok(
            GatewayRefund(
                refund_id=refund["id"],
                status=refund.get("status", "PENDING"),
                amount_cents=(refund.get("amount_money") or {}).get("amount", amount_cents),
            )
        )

    async def aclose(self) -> None:
        await self.client.aclose()
