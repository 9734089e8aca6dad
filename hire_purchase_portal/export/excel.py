"""Excel report rendering with openpyxl"""

import io

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from hire_purchase_portal.config import settings
from hire_purchase_portal.export.columns import ExportOptions, resolve_value, spreadsheet_value

SHEET_TITLE = "Report"


def _append(ws, values) -> None:
    """Append a row; text starting with "=" stays text instead of becoming a formula"""
    ws.append(values)
    for col in range(1, len(values) + 1):
        cell = ws.cell(row=ws.max_row, column=col)
        if isinstance(cell.value, str) and cell.value.startswith("="):
            cell.data_type = "s"


def render_excel(options: ExportOptions, column_width: int | None = None) -> bytes:
    """
    Render the report as a single-sheet workbook.

    Rows, top to bottom: title, blank, optional period + blank, optional
    "Summary" with label/value pairs + blank, header row, data rows.
    """
    rows = [
        [spreadsheet_value(resolve_value(col, row)) for col in options.columns]
        for row in options.data
    ]

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    _append(ws, [options.title])
    ws.cell(row=ws.max_row, column=1).font = Font(bold=True, size=14)
    ws.append([])

    if options.date_range:
        _append(ws, [options.date_range.label])
        ws.append([])

    if options.summary:
        ws.append(["Summary"])
        ws.cell(row=ws.max_row, column=1).font = Font(bold=True)
        for item in options.summary:
            _append(ws, [item.label, spreadsheet_value(item.value)])
        ws.append([])

    _append(ws, options.headers)
    header_row = ws.max_row
    for col in range(1, len(options.columns) + 1):
        ws.cell(row=header_row, column=col).font = Font(bold=True)

    for row in rows:
        _append(ws, row)

    width = column_width or settings.excel_column_width
    for col in range(1, len(options.columns) + 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
