"""
Plain table exports: headers plus string rows, minimal styling.

Used for quick dumps where the branded reports are overkill. Unlike the
branded renderers these functions raise ExportError on failure.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Mapping, Sequence
from xml.sax.saxutils import escape

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from pretensa_reports.models import PDF_MIME_TYPE, XLSX_MIME_TYPE, ExportArtifact
from pretensa_reports.services.value_formatter import DATE_FORMAT

logger = logging.getLogger(__name__)

DATA_SHEET_TITLE = "Data"


class ExportError(Exception):
    """Raised when a plain table export cannot be produced."""


@dataclass(slots=True)
class TableExport:
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)
    filename: str = "export"


def _person_name(value: Mapping[str, Any]) -> str | None:
    for first_key, last_key in (("firstName", "lastName"), ("first_name", "last_name")):
        first, last = value.get(first_key), value.get(last_key)
        if first and last:
            return f"{first} {last}"
    return None


def display_text(value: object) -> str:
    """Readable text for any record value."""
    if value is None:
        return ""
    if isinstance(value, Mapping):
        name = _person_name(value)
        if name is not None:
            return name
    if isinstance(value, bool):
        return "Sí" if value else "No"
    if isinstance(value, (datetime, date)):
        return value.strftime(DATE_FORMAT)
    return str(value)


def format_data_for_export(
    data: Sequence[Mapping[str, Any]],
    column_labels: Mapping[str, str],
    filename: str = "export",
) -> TableExport:
    """Headers from the label mapping and one text row per record."""
    keys = list(column_labels)
    rows = [[display_text(record.get(key)) for key in keys] for record in data]
    return TableExport(headers=list(column_labels.values()), rows=rows, filename=filename)


def _style_header(ws) -> None:
    header_fill = PatternFill(fill_type="solid", fgColor="2980B9")
    header_font = Font(bold=True, color="FFFFFF")
    header_alignment = Alignment(horizontal="center", vertical="center")
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment


def export_table_to_excel(table: TableExport) -> ExportArtifact:
    """Single 'Data' sheet with a styled header row and frozen header."""
    try:
        df = pd.DataFrame(table.rows, columns=table.headers)
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=DATA_SHEET_TITLE, index=False)
            ws = writer.sheets[DATA_SHEET_TITLE]
            _style_header(ws)
            ws.freeze_panes = "A2"
    except Exception as exc:
        logger.exception("Failed to export %s to Excel", table.filename)
        raise ExportError("Failed to export to Excel") from exc

    return ExportArtifact(
        filename=f"{table.filename}.xlsx",
        mime_type=XLSX_MIME_TYPE,
        content=buffer.getvalue(),
    )


def export_table_to_pdf(table: TableExport) -> ExportArtifact:
    """Portrait A4 with the filename as heading and a header row repeated per page."""
    try:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=2.0 * cm,
            rightMargin=2.0 * cm,
            topMargin=2.0 * cm,
            bottomMargin=2.0 * cm,
        )
        doc.title = table.filename
        styles = getSampleStyleSheet()

        story = [Paragraph(escape(table.filename), styles["Heading2"]), Spacer(1, 0.3 * cm)]
        data_table = Table([table.headers, *table.rows], repeatRows=1, hAlign="LEFT")
        data_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.Color(41 / 255, 128 / 255, 185 / 255)),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F5F5F5")]),
                    ("GRID", (0, 0), (-1, -1), 0.4, "#BBBBBB"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("TOPPADDING", (0, 0), (-1, -1), 3),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                ]
            )
        )
        story.append(data_table)
        doc.build(story)
    except Exception as exc:
        logger.exception("Failed to export %s to PDF", table.filename)
        raise ExportError("Failed to export to PDF") from exc

    return ExportArtifact(
        filename=f"{table.filename}.pdf",
        mime_type=PDF_MIME_TYPE,
        content=buffer.getvalue(),
    )
