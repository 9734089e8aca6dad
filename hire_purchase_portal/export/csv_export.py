"""CSV report rendering"""

import csv
import io

from hire_purchase_portal.export.columns import ExportOptions, resolve_row


def render_csv(options: ExportOptions) -> str:
    """Header line then one line per row; every field quoted, quotes doubled"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(options.headers)
    for row in options.data:
        writer.writerow(resolve_row(options.columns, row))
    return buffer.getvalue()
