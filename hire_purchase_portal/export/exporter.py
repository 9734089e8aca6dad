"""Export dispatch: render a report in the requested format, save it or print it"""

import logging
import shlex
import subprocess
import tempfile
import time
from enum import Enum
from pathlib import Path

from hire_purchase_portal.config import settings
from hire_purchase_portal.domain.exceptions import PrintError
from hire_purchase_portal.export.columns import ExportOptions
from hire_purchase_portal.export.csv_export import render_csv
from hire_purchase_portal.export.excel import render_excel
from hire_purchase_portal.export.pdf import render_pdf
from hire_purchase_portal.infrastructure.observability.logging import log_export
from hire_purchase_portal.infrastructure.observability.metrics import record_export

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    PDF = "pdf"
    XLSX = "xlsx"
    CSV = "csv"

    @property
    def media_type(self) -> str:
        return MEDIA_TYPES[self]


MEDIA_TYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.CSV: "text/csv; charset=utf-8",
}


def render(options: ExportOptions, fmt: ExportFormat) -> bytes:
    """
    Render `options` as file content.

    Errors raised by column accessors are not caught: a broken report
    definition fails the export.
    """
    start_time = time.time()
    try:
        if fmt is ExportFormat.PDF:
            content = render_pdf(options)
        elif fmt is ExportFormat.XLSX:
            content = render_excel(options)
        else:
            content = render_csv(options).encode("utf-8")
    except Exception:
        record_export(fmt.value, len(options.data), succeeded=False)
        raise

    duration_ms = (time.time() - start_time) * 1000
    record_export(fmt.value, len(options.data))
    log_export(options.filename, fmt.value, len(options.data), duration_ms)
    return content


def export_filename(options: ExportOptions, fmt: ExportFormat) -> str:
    return f"{options.filename}.{fmt.value}"


def export_report(options: ExportOptions, fmt: ExportFormat, output_dir: str | Path | None = None) -> Path:
    """Render and write `<filename>.<ext>` into the export directory"""
    directory = Path(output_dir or settings.export_dir)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / export_filename(options, fmt)
    path.write_bytes(render(options, fmt))
    logger.info("Report written", extra={"path": str(path), "format": fmt.value})
    return path


def print_report(options: ExportOptions, print_command: str | None = None) -> None:
    """
    Send the report to the host printer.

    The PDF rendering is handed to `print_command` (default: `lp`) as its
    last argument.
    """
    command = shlex.split(print_command or settings.print_command)
    content = render_pdf(options)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / f"{options.filename}.pdf"
        path.write_bytes(content)
        try:
            subprocess.run([*command, str(path)], check=True, capture_output=True)
        except (OSError, subprocess.CalledProcessError) as e:
            record_export("print", len(options.data), succeeded=False)
            raise PrintError(f"Print command failed: {e}") from e

    record_export("print", len(options.data))
    logger.info("Report sent to printer", extra={"report": options.filename, "command": command[0]})
