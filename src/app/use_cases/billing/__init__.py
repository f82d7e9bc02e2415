"""Billing domain use cases"""
from .run_autopay import RunAutopay, DueLease
from .generate_invoices import GenerateMonthlyInvoices
from .payments import ListPayments, ChargeCard, RefundPayment
from .paypal import CreatePayPalOrder, CapturePayPalOrder
from .export_invoices import ExportInvoicesCsv
from .dtos import (
    AutopayLeaseResultDTO,
    AutopayRunResultDTO,
    GenerateInvoicesResultDTO,
    PaymentDTO,
    ChargeCardCommandDTO,
    ChargeCardResponseDTO,
    PayPalOrderCommandDTO,
    PayPalCaptureCommandDTO,
    RefundCommandDTO,
    RefundResponseDTO,
)

__all__ = [
    "RunAutopay",
    "DueLease",
    "GenerateMonthlyInvoices",
    "ListPayments",
    "ChargeCard",
    "RefundPayment",
    "CreatePayPalOrder",
    "CapturePayPalOrder",
    "ExportInvoicesCsv",
    "AutopayLeaseResultDTO",
    "AutopayRunResultDTO",
    "GenerateInvoicesResultDTO",
    "PaymentDTO",
    "ChargeCardCommandDTO",
    "ChargeCardResponseDTO",
    "PayPalOrderCommandDTO",
    "PayPalCaptureCommandDTO",
    "RefundCommandDTO",
    "RefundResponseDTO",
]
