"""PayPal REST Checkout

PayPalCheckout implementation over PayPal's Orders v2 API using httpx.
An OAuth client-credentials token is fetched for each call.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from libs.result import Result, Return, Error
from src.app.services.payment_gateway import GATEWAY_ERROR
from src.app.services.paypal_checkout import PayPalCheckout

logger = logging.getLogger(__name__)

PAYPAL_PRODUCTION_URL = "https://api-m.paypal.com"
PAYPAL_SANDBOX_URL = "https://api-m.sandbox.paypal.com"


def format_cents(amount_cents: int) -> str:
    """1234 -> '12.34'"""
    return f"{amount_cents // 100}.{amount_cents % 100:02d}"


class PayPalRestCheckout(PayPalCheckout):

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        environment: str = "sandbox",
        timeout: float = 15.0,
        max_retries: int = 2,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        base_url = PAYPAL_PRODUCTION_URL if environment == "production" else PAYPAL_SANDBOX_URL
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport or httpx.AsyncHTTPTransport(retries=max_retries),
        )

    async def _access_token(self) -> Result[str]:
        try:
            response = await self.client.post(
                "/v1/oauth2/token",
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
            )
            response.raise_for_status()
            return Return.ok(response.json()["access_token"])
        except httpx.HTTPError as e:
            logger.error(f"PayPal token request failed: {type(e).__name__}")
            return Return.err(
                Error(code=GATEWAY_ERROR, message="PayPal authentication failed", reason=str(e))
            )

    async def _post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Result[Dict[str, Any]]:
        token_result = await self._access_token()
        if token_result.is_err():
            return token_result

        try:
            response = await self.client.post(
                path,
                json=payload or {},
                headers={"Authorization": f"Bearer {token_result.value}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"PayPal request {path} failed: {type(e).__name__}")
            return Return.err(
                Error(code=GATEWAY_ERROR, message="PayPal unreachable", reason=str(e))
            )

        body = response.json() if response.content else {}
        if response.is_error:
            message = body.get("message") or f"PayPal returned HTTP {response.status_code}"
            logger.warning(f"PayPal request {path} rejected ({response.status_code}): {message}")
            return Return.err(
                Error(code=GATEWAY_ERROR, message=message, reason=f"status={response.status_code}")
            )
        return Return.ok(body)

    async def create_order(self, amount_cents: int, description: str) -> Result[Dict[str, Any]]:
        payload = {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "amount": {"currency_code": "USD", "value": format_cents(amount_cents)},
                    "description": description,
                }
            ],
        }
        return await self._post("/v2/checkout/orders", payload)

    async def capture_order(self, order_id: str) -> Result[Dict[str, Any]]:
        return await self._post(f"/v2/checkout/orders/{order_id}/capture")

    async def aclose(self) -> None:
        await self.client.aclose()
