"""Factories for payment processor clients

Return None when the processor is not configured so callers can report a
configuration error instead of failing mid-operation.
"""

import logging
from typing import Optional

from src.app.services.payment_gateway import PaymentGateway
from src.app.services.paypal_checkout import PayPalCheckout
from .square_gateway import SquarePaymentGateway
from .paypal_checkout import PayPalRestCheckout

logger = logging.getLogger(__name__)


def create_payment_gateway(config) -> Optional[PaymentGateway]:
    """
    Build the Square gateway from configuration

    Args:
        config: ApplicationConfig-like object

    Returns:
        SquarePaymentGateway, or None if credentials are missing
    """
    if not config.SQUARE_ACCESS_TOKEN or not config.SQUARE_LOCATION_ID:
        logger.warning("Square is not configured (SQUARE_ACCESS_TOKEN / SQUARE_LOCATION_ID missing)")
        return None

    return SquarePaymentGateway(
        access_token=config.SQUARE_ACCESS_TOKEN,
        location_id=config.SQUARE_LOCATION_ID,
        environment=config.SQUARE_ENV,
        api_version=config.SQUARE_API_VERSION,
        timeout=config.GATEWAY_TIMEOUT_SECONDS,
        max_retries=config.GATEWAY_MAX_RETRIES,
    )


def create_paypal_checkout(config) -> Optional[PayPalCheckout]:
    if not config.PAYPAL_CLIENT_ID or not config.PAYPAL_CLIENT_SECRET:
        logger.warning("PayPal is not configured (PAYPAL_CLIENT_ID / PAYPAL_CLIENT_SECRET missing)")
        return None

    return PayPalRestCheckout(
        client_id=config.PAYPAL_CLIENT_ID,
        client_secret=config.PAYPAL_CLIENT_SECRET,
        environment=config.PAYPAL_ENV,
        timeout=config.GATEWAY_TIMEOUT_SECONDS,
        max_retries=config.GATEWAY_MAX_RETRIES,
    )
