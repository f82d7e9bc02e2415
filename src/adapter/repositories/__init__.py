from .unit_repository import SqlAlchemyUnitRepository
from .tenant_repository import SqlAlchemyTenantRepository
from .lease_repository import SqlAlchemyLeaseRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .payment_repository import SqlAlchemyPaymentRepository

__all__ = [
    "SqlAlchemyUnitRepository",
    "SqlAlchemyTenantRepository",
    "SqlAlchemyLeaseRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyPaymentRepository",
]
