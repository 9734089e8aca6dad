"""PDF report rendering with ReportLab"""

import io
import logging
from datetime import datetime
from functools import lru_cache, partial
from pathlib import Path
from typing import List, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from hire_purchase_portal.config import settings
from hire_purchase_portal.export.columns import ExportOptions, resolve_row, to_text
from hire_purchase_portal.utils.date_utils import utc_now
from hire_purchase_portal.utils.formatting import format_date_time

logger = logging.getLogger(__name__)

HEADER_FILL = colors.Color(66 / 255, 139 / 255, 202 / 255)
ROW_STRIPE = colors.HexColor("#F5F7FA")
GRID_COLOR = colors.HexColor("#D0D7DE")
MARGIN = 14 * mm
WIDE_TABLE_COLUMNS = 7  # Switch to landscape from this many columns

FONT = "PortalSans"
BOLD_FONT = "PortalSans-Bold"

_ALIGN = {"left": TA_LEFT, "center": TA_CENTER, "right": TA_RIGHT}


@lru_cache(maxsize=None)
def report_fonts() -> Tuple[str, str]:
    """
    Register the configured TrueType fonts once and return (regular, bold).

    The built-in Helvetica has no glyph for the cedi sign, so amounts need a
    Unicode font. Without the font files the report falls back to Helvetica.
    """
    regular = Path(settings.pdf_font_path)
    bold = Path(settings.pdf_bold_font_path)
    if not (regular.is_file() and bold.is_file()):
        logger.warning(
            "PDF fonts not found, using Helvetica",
            extra={"font_path": str(regular), "bold_font_path": str(bold)},
        )
        return "Helvetica", "Helvetica-Bold"

    pdfmetrics.registerFont(TTFont(FONT, str(regular)))
    pdfmetrics.registerFont(TTFont(BOLD_FONT, str(bold)))
    pdfmetrics.registerFontFamily(FONT, normal=FONT, bold=BOLD_FONT, italic=FONT, boldItalic=BOLD_FONT)
    return FONT, BOLD_FONT


class _FooterCanvas(canvas.Canvas):
    """Canvas that defers page output so every footer can show the page total"""

    def __init__(self, *args, generated_on: str = "", font: str = "Helvetica", **kwargs):
        super().__init__(*args, **kwargs)
        self._generated_on = generated_on
        self._footer_font = font
        self._page_states: List[dict] = []

    def showPage(self):
        self._page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._page_states)
        for state in self._page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int) -> None:
        width, _ = self._pagesize
        self.setFont(self._footer_font, 8)
        self.drawCentredString(width / 2, 10 * mm, f"Page {self._pageNumber} of {page_count}")
        self.drawString(MARGIN, 10 * mm, f"Generated on {self._generated_on}")


def _styles(font: str, bold: str) -> dict:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ReportTitle", parent=base["Title"], fontName=bold, fontSize=18, alignment=TA_LEFT),
        "period": ParagraphStyle("ReportPeriod", parent=base["Normal"], fontName=font, fontSize=10),
        "heading": ParagraphStyle("SummaryHeading", parent=base["Heading3"], fontName=bold, fontSize=12),
        "body": ParagraphStyle("SummaryLine", parent=base["Normal"], fontName=font, fontSize=10, leading=14),
        "header_cell": ParagraphStyle(
            "HeaderCell", parent=base["Normal"], fontName=bold, fontSize=9, leading=11, textColor=colors.white
        ),
        "cell": ParagraphStyle("Cell", parent=base["Normal"], fontName=font, fontSize=9, leading=11),
    }


def _table(options: ExportOptions, rows: List[List[str]], available_width: float, styles: dict) -> Table:
    # Cells are paragraphs so long values wrap inside their column
    header_styles = []
    cell_styles = []
    for index, col in enumerate(options.columns):
        alignment = _ALIGN.get(col.align or "left", TA_LEFT)
        header_styles.append(ParagraphStyle(f"HeaderCell{index}", parent=styles["header_cell"], alignment=alignment))
        cell_styles.append(ParagraphStyle(f"Cell{index}", parent=styles["cell"], alignment=alignment))

    header = [Paragraph(escape(text), style) for text, style in zip(options.headers, header_styles)]
    body = [[Paragraph(escape(text), style) for text, style in zip(row, cell_styles)] for row in rows]

    col_width = available_width / len(options.columns)
    table = Table([header] + body, colWidths=[col_width] * len(options.columns), repeatRows=1, hAlign="LEFT")

    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("GRID", (0, 0), (-1, -1), 0.25, GRID_COLOR),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]
    if rows:
        commands.append(("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, ROW_STRIPE]))

    table.setStyle(TableStyle(commands))
    return table


def render_pdf(options: ExportOptions, generated_at: datetime | None = None) -> bytes:
    """
    Render the report as a PDF document.

    Layout: title, optional period line, optional summary block, then one
    table row per data item. Every page carries "Page i of N" and the
    generation timestamp in its footer.
    """
    # Accessors run before any layout so their errors surface unchanged
    rows = [resolve_row(options.columns, row) for row in options.data]

    font, bold = report_fonts()
    pagesize = landscape(A4) if len(options.columns) >= WIDE_TABLE_COLUMNS else A4
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=pagesize,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=20 * mm,
        title=options.title,
    )
    styles = _styles(font, bold)

    story = [Paragraph(escape(options.title), styles["title"])]
    if options.date_range:
        story.append(Paragraph(escape(options.date_range.label), styles["period"]))
        story.append(Spacer(1, 4 * mm))

    if options.summary:
        story.append(Paragraph("Summary", styles["heading"]))
        for item in options.summary:
            story.append(Paragraph(escape(f"{item.label}: {to_text(item.value)}"), styles["body"]))
        story.append(Spacer(1, 4 * mm))

    if options.columns:
        story.append(_table(options, rows, doc.width, styles))

    generated_on = format_date_time(generated_at or utc_now())
    doc.build(story, canvasmaker=partial(_FooterCanvas, generated_on=generated_on, font=font))
    return buffer.getvalue()
