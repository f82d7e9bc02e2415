"""Export API Routes"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.billing import ExportInvoicesCsv
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/exports", tags=["Exports"])


@router.get(
    "/qbo",
    responses={200: {"content": {"text/csv": {}}, "description": "CSV document"}},
)
async def export_invoices_qbo(
    start: date = Query(..., alias="from", description="First creation day (YYYY-MM-DD)"),
    end: date = Query(..., alias="to", description="Last creation day (YYYY-MM-DD)"),
    session: AsyncSession = Depends(get_session)
):
    """
    Download invoices created in [from, to] as a QuickBooks Online CSV.

    Columns: `Date,Invoice,Amount,Status`, amounts in dollars.
    """
    result = await ExportInvoicesCsv(SqlAlchemyInvoiceRepository(session)).execute(start, end)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return Response(
        content=result.value,
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename=invoices_{start.isoformat()}_{end.isoformat()}.csv"
        }
    )
