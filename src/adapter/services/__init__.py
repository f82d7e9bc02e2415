from .unit_of_work import SqlAlchemyUnitOfWork
from .square_gateway import SquarePaymentGateway
from .paypal_checkout import PayPalRestCheckout
from .gateway_factory import create_payment_gateway, create_paypal_checkout

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SquarePaymentGateway",
    "PayPalRestCheckout",
    "create_payment_gateway",
    "create_paypal_checkout",
]
