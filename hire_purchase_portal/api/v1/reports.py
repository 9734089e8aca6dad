"""Report export endpoints - fetch a backend report and render it as PDF, Excel or CSV"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from starlette.responses import Response

from hire_purchase_portal.api.dependencies import get_portal_client, require_admin
from hire_purchase_portal.export.exporter import ExportFormat, export_filename, print_report, render
from hire_purchase_portal.export.reports import DATED_REPORTS, REPORTS, build_report_options
from hire_purchase_portal.domain.exceptions import UnknownReportError
from hire_purchase_portal.infrastructure.clients.portal import PortalClient

router = APIRouter(dependencies=[Depends(require_admin)])


async def _load_options(
    kind: str,
    client: PortalClient,
    start_date: Optional[date],
    end_date: Optional[date],
    status: Optional[str],
    payment_method: Optional[str] = None,
):
    if kind not in REPORTS:
        raise UnknownReportError(f"No export definition for report '{kind}'")

    if kind in DATED_REPORTS:
        # Default period: first of the current month to today
        end_date = end_date or date.today()
        start_date = start_date or end_date.replace(day=1)
        report = await client.get_report(
            kind, start_date, end_date, status=status or "", paymentMethod=payment_method or ""
        )
    else:
        start_date = end_date = None
        report = await client.get_report(kind)

    return build_report_options(kind, report, start_date, end_date)


@router.get("/reports/{kind}/export")
async def export_report(
    kind: str,
    format: ExportFormat = Query(ExportFormat.PDF, description="pdf, xlsx or csv"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    status: Optional[str] = Query(None),
    payment_method: Optional[str] = Query(None, description="Income report only, e.g. MOBILE_MONEY"),
    client: PortalClient = Depends(get_portal_client),
):
    """
    Download a report file.

    Payment, sales and income reports cover a period (default: month to date);
    the others are point-in-time.
    """
    options = await _load_options(kind, client, start_date, end_date, status, payment_method)
    content = render(options, format)
    return Response(
        content=content,
        media_type=format.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(options, format)}"'},
    )


@router.post("/reports/{kind}/print", status_code=202)
async def print_report_endpoint(
    kind: str,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    status: Optional[str] = Query(None),
    payment_method: Optional[str] = Query(None, description="Income report only, e.g. MOBILE_MONEY"),
    client: PortalClient = Depends(get_portal_client),
):
    options = await _load_options(kind, client, start_date, end_date, status, payment_method)
    print_report(options)
    return {"status": "sent", "report": options.filename}
