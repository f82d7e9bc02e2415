"""PayPal Checkout Interface

Two-step PayPal flow: the browser approves an order created here, then the
order is captured.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict
from libs.result import Result


class PayPalCheckout(ABC):

    @abstractmethod
    async def create_order(self, amount_cents: int, description: str) -> Result[Dict[str, Any]]:
        """Create a CAPTURE-intent order; returns PayPal's order body"""
        pass

    @abstractmethod
    async def capture_order(self, order_id: str) -> Result[Dict[str, Any]]:
        """Capture an approved order; returns PayPal's capture body"""
        pass

    async def aclose(self) -> None:
        return None
