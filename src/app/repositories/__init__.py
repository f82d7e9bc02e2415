from .unit_repository import UnitRepository
from .tenant_repository import TenantRepository
from .lease_repository import LeaseRepository
from .invoice_repository import InvoiceRepository
from .payment_repository import PaymentRepository

__all__ = [
    "UnitRepository",
    "TenantRepository",
    "LeaseRepository",
    "InvoiceRepository",
    "PaymentRepository",
]
