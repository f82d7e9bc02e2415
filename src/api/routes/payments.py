"""Payment API Routes

Checkout endpoints under /pay (Square card, PayPal orders) and the payment
ledger under the API prefix.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.payment_request import (
    SquarePaymentRequestSchema,
    PayPalOrderRequestSchema,
    PayPalCaptureRequestSchema,
    RefundRequestSchema,
)
from src.app.services.payment_gateway import PaymentGateway
from src.app.services.paypal_checkout import PayPalCheckout
from src.app.use_cases.billing import (
    ListPayments,
    ChargeCard,
    RefundPayment,
    CreatePayPalOrder,
    CapturePayPalOrder,
    PaymentDTO,
    ChargeCardCommandDTO,
    ChargeCardResponseDTO,
    PayPalOrderCommandDTO,
    PayPalCaptureCommandDTO,
    RefundCommandDTO,
    RefundResponseDTO,
)
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.lease_repository import SqlAlchemyLeaseRepository
from src.adapter.repositories.tenant_repository import SqlAlchemyTenantRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_payment_gateway, get_paypal_checkout
from src.api.error import ClientError

checkout_router = APIRouter(prefix="/pay", tags=["Checkout"])
router = APIRouter(prefix="/payments", tags=["Payments"])


@checkout_router.post(
    "/square",
    response_model=ChargeCardResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        402: {
            "description": "Card declined or Square unreachable",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "GATEWAY_ERROR",
                            "message": "Card declined"
                        }
                    }
                }
            }
        },
        503: {
            "description": "Square is not configured",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CONFIGURATION_ERROR",
                            "message": "Payment gateway is not configured"
                        }
                    }
                }
            }
        }
    }
)
async def pay_with_square(
    request: SquarePaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    gateway: Optional[PaymentGateway] = Depends(get_payment_gateway),
):
    """
    Take a one-off card payment.

    Every attempt is written to the payment ledger, declined ones included.
    When `invoice_id` is given and the charge succeeds, the invoice is marked
    paid.

    **Example request:**
    ```json
    {
      "source_id": "cnon:card-nonce-ok",
      "amount_cents": 12500,
      "invoice_id": 42
    }
    ```

    **Returns:**
    - 200: Payment captured
    - 400: Invalid request parameters
    - 402: Card declined or Square unreachable
    - 503: Square is not configured
    """
    command = ChargeCardCommandDTO(
        source_id=request.source_id,
        amount_cents=request.amount_cents,
        invoice_id=request.invoice_id,
        lease_id=request.lease_id,
    )

    use_case = ChargeCard(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyInvoiceRepository(session),
        gateway,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@checkout_router.post("/paypal/create-order")
async def create_paypal_order(
    request: PayPalOrderRequestSchema,
    checkout: Optional[PayPalCheckout] = Depends(get_paypal_checkout),
) -> Dict[str, Any]:
    """Create a PayPal order for the browser to approve."""
    command = PayPalOrderCommandDTO(amount_cents=request.amount_cents, invoice_id=request.invoice_id)
    result = await CreatePayPalOrder(checkout).execute(command)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@checkout_router.post("/paypal/capture")
async def capture_paypal_order(
    request: PayPalCaptureRequestSchema,
    session: AsyncSession = Depends(get_session),
    checkout: Optional[PayPalCheckout] = Depends(get_paypal_checkout),
) -> Dict[str, Any]:
    """
    Capture an approved PayPal order.

    Writes a ledger entry for the capture and marks the invoice paid when it
    completed.
    """
    command = PayPalCaptureCommandDTO(
        order_id=request.order_id,
        amount_cents=request.amount_cents,
        invoice_id=request.invoice_id,
        lease_id=request.lease_id,
    )

    use_case = CapturePayPalOrder(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPaymentRepository(session),
        SqlAlchemyInvoiceRepository(session),
        checkout,
        lease_repo=SqlAlchemyLeaseRepository(session),
        tenant_repo=SqlAlchemyTenantRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.get("", response_model=List[PaymentDTO])
async def list_payments(
    limit: int = Query(
        default=ApplicationConfig.PAYMENTS_DEFAULT_LIMIT,
        description="Number of entries to return, clamped to [1, PAYMENTS_MAX_LIMIT]",
    ),
    session: AsyncSession = Depends(get_session)
):
    """List payment ledger entries, most recent first."""
    use_case = ListPayments(
        SqlAlchemyPaymentRepository(session),
        max_limit=ApplicationConfig.PAYMENTS_MAX_LIMIT,
    )
    result = await use_case.execute(limit)
    return result.value


@router.post(
    "/{payment_id}/refund",
    response_model=RefundResponseDTO,
    responses={
        409: {
            "description": "Payment cannot be refunded",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_PAYMENT_STATE",
                            "message": "Only paid Square payments can be refunded"
                        }
                    }
                }
            }
        }
    }
)
async def refund_payment(
    payment_id: int,
    request: Optional[RefundRequestSchema] = None,
    session: AsyncSession = Depends(get_session),
    gateway: Optional[PaymentGateway] = Depends(get_payment_gateway),
):
    """
    Refund a paid Square payment, in full unless `amount_cents` is given.

    **Returns:**
    - 200: Refund accepted by Square
    - 402: Square rejected the refund
    - 404: Payment not found
    - 409: Payment is not a paid Square payment
    - 503: Square is not configured
    """
    request = request or RefundRequestSchema()
    command = RefundCommandDTO(
        payment_id=payment_id,
        amount_cents=request.amount_cents,
        reason=request.reason,
    )

    result = await RefundPayment(SqlAlchemyPaymentRepository(session), gateway).execute(command)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value
