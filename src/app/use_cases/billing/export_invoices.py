"""ExportInvoicesCsv Use Case

Bookkeeping export of invoices created in a date range, in a CSV layout that
QuickBooks Online can import.
"""

import csv
import io
from datetime import date
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository

CSV_HEADER = ["Date", "Invoice", "Amount", "Status"]


def format_dollars(amount_cents: int) -> str:
    sign = "-" if amount_cents < 0 else ""
    amount_cents = abs(amount_cents)
    return f"{sign}{amount_cents // 100}.{amount_cents % 100:02d}"


class ExportInvoicesCsv:
    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, start: date, end: date) -> Result[str]:
        if start > end:
            return Return.err(
                Error(code="VALIDATION_ERROR", message="'from' must not be after 'to'")
            )

        invoices = await self.invoice_repo.list_created_between(start, end)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for invoice in invoices:
            writer.writerow(
                [
                    invoice.created_at.date().isoformat(),
                    invoice.id,
                    format_dollars(invoice.total_cents),
                    invoice.status.value,
                ]
            )
        return Return.ok(buffer.getvalue())
