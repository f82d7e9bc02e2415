from .unit_of_work import UnitOfWork
from .payment_gateway import (
    PaymentGateway,
    GatewayCustomer,
    GatewayCard,
    GatewayPayment,
    GatewayRefund,
    GATEWAY_ERROR,
)
from .paypal_checkout import PayPalCheckout

__all__ = [
    "UnitOfWork",
    "PaymentGateway",
    "GatewayCustomer",
    "GatewayCard",
    "GatewayPayment",
    "GatewayRefund",
    "GATEWAY_ERROR",
    "PayPalCheckout",
]
