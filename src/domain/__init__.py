from .base import BaseModel, generate_uuid
from .unit import Unit, UnitStatus
from .tenant import Tenant
from .lease import Lease, LeaseStatus, BILLING_ANCHOR_DAY
from .invoice import Invoice, InvoiceStatus
from .payment import Payment, PaymentStatus, PaymentGatewayName, PaymentMethod
from .billing_dates import prorate, next_anchor, days_in_month

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Unit",
    "UnitStatus",
    "Tenant",
    "Lease",
    "LeaseStatus",
    "BILLING_ANCHOR_DAY",
    "Invoice",
    "InvoiceStatus",
    "Payment",
    "PaymentStatus",
    "PaymentGatewayName",
    "PaymentMethod",
    "prorate",
    "next_anchor",
    "days_in_month",
]
