"""
Excel report generation for tabular exports.

Layout, top to bottom: company banner and contact line, report title,
subtitle, generation line, column headers, zebra-striped data rows and a
summary footer. Everything above the first data row stays frozen on scroll.
"""

from __future__ import annotations

import io
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.page import PageMargins

from pretensa_reports.config.limits import SHEET_TITLE_MAX_LEN
from pretensa_reports.config.settings import CORPORATE_COLORS, SPREADSHEET_DEFAULT_PRIMARY, ExportSettings
from pretensa_reports.models import XLSX_MIME_TYPE, ExportArtifact, ExportResult, ReportOptions
from pretensa_reports.services.branding import ResolvedBranding, resolve_branding, to_argb
from pretensa_reports.services.layout import sheet_column_widths
from pretensa_reports.services.value_formatter import (
    format_export_timestamp,
    metadata_line,
    to_cell_value,
)

logger = logging.getLogger(__name__)

SUMMARY_SHEET_TITLE = "Resumen"

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


def _solid(color: str) -> PatternFill:
    return PatternFill(fill_type="solid", fgColor=to_argb(color))


def _thin_border(color: str) -> Border:
    side = Side(style="thin", color=to_argb(color))
    return Border(left=side, right=side, top=side, bottom=side)


def _clean_text(value: object) -> object:
    """Drop control characters openpyxl refuses to write."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _sheet_title(title: str) -> str:
    cleaned = _INVALID_SHEET_CHARS.sub(" ", _clean_text(title)).strip()
    return (cleaned or "Reporte")[:SHEET_TITLE_MAX_LEN]


def _merged_row(ws, row: int, width: int, value: str, *, font: Font, fill: PatternFill | None = None):
    """Write `value` centred across columns 1..width of `row`."""
    if width > 1:
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
    cell = ws.cell(row=row, column=1, value=_clean_text(value))
    cell.font = font
    cell.alignment = Alignment(horizontal="center", vertical="center")
    if fill is not None:
        cell.fill = fill
    return cell


def _naive_utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now
    return now.astimezone(timezone.utc).replace(tzinfo=None)


def _set_properties(wb: Workbook, options: ReportOptions, settings: ExportSettings, now: datetime) -> None:
    meta = options.metadata
    author = (meta.author if meta else None) or settings.spreadsheet_author
    keywords = (meta.keywords if meta else None) or ["reporte", "datos", "sistemas"]

    props = wb.properties
    props.title = options.title
    props.creator = author
    props.lastModifiedBy = author
    props.created = _naive_utc(now)
    props.modified = _naive_utc(now)
    props.description = (meta.description if meta else None) or options.title
    props.subject = options.title
    props.keywords = ", ".join(keywords)
    props.category = (meta.department if meta else None) or settings.default_department


def _setup_page(ws, colors: ResolvedBranding) -> None:
    ws.sheet_properties.tabColor = to_argb(colors.primary)
    ws.page_setup.orientation = ws.ORIENTATION_LANDSCAPE
    ws.page_setup.paperSize = ws.PAPERSIZE_A4
    ws.sheet_properties.pageSetUpPr.fitToPage = True
    ws.page_margins = PageMargins(left=0.7, right=0.7, top=0.75, bottom=0.75, header=0.3, footer=0.3)


def _write_preamble(ws, options: ReportOptions, colors: ResolvedBranding, now: datetime) -> int:
    """Banner, title, subtitle and generation line. Returns the header row index."""
    width = len(options.columns)
    row = 1

    company = options.company_info
    if company is not None:
        _merged_row(
            ws,
            row,
            width,
            company.name,
            font=Font(size=18, bold=True, color=to_argb(colors.primary)),
            fill=_solid(CORPORATE_COLORS["light"]),
        )
        ws.row_dimensions[row].height = 30
        row += 1

        details = company.contact_line()
        if details:
            _merged_row(ws, row, width, details, font=Font(size=10, color=to_argb(CORPORATE_COLORS["muted"])))
            row += 1
        row += 1  # spacer

    _merged_row(
        ws,
        row,
        width,
        options.title,
        font=Font(size=16, bold=True, color=to_argb(CORPORATE_COLORS["dark"])),
        fill=_solid(colors.header),
    )
    ws.row_dimensions[row].height = 25
    row += 1

    if options.subtitle:
        _merged_row(
            ws,
            row,
            width,
            options.subtitle,
            font=Font(size=12, italic=True, color=to_argb(CORPORATE_COLORS["muted"])),
        )
        row += 1

    _merged_row(
        ws,
        row,
        width,
        metadata_line(now, options.record_count),
        font=Font(size=10, color=to_argb(CORPORATE_COLORS["faint"])),
    )
    row += 2  # generation line + spacer
    return row


def _write_table(ws, options: ReportOptions, colors: ResolvedBranding, header_row: int) -> int:
    """Header row plus data rows. Returns the first data row index."""
    widths = sheet_column_widths(options.columns, options.data)

    header_font = Font(bold=True, color=to_argb(CORPORATE_COLORS["white"]), size=11)
    header_fill = _solid(colors.primary)
    header_border = _thin_border(CORPORATE_COLORS["header_border"])
    for col_idx, column in enumerate(options.columns, start=1):
        cell = ws.cell(row=header_row, column=col_idx, value=_clean_text(column.label))
        cell.font = header_font
        cell.fill = header_fill
        cell.border = header_border
        cell.alignment = Alignment(horizontal=column.align.value, vertical="center", wrap_text=True)
        ws.column_dimensions[get_column_letter(col_idx)].width = widths[col_idx - 1]
    ws.row_dimensions[header_row].height = 20

    first_data_row = header_row + 1
    body_font = Font(size=10, color=to_argb(CORPORATE_COLORS["body_text"]))
    body_border = _thin_border(CORPORATE_COLORS["cell_border"])
    even_fill = _solid(CORPORATE_COLORS["white"])
    odd_fill = _solid(CORPORATE_COLORS["zebra"])

    for row_offset, record in enumerate(options.data):
        row_idx = first_data_row + row_offset
        fill = even_fill if row_offset % 2 == 0 else odd_fill
        for col_idx, column in enumerate(options.columns, start=1):
            formatted = to_cell_value(record.get(column.key), column.format)
            cell = ws.cell(row=row_idx, column=col_idx, value=_clean_text(formatted.value))
            if isinstance(cell.value, str) and cell.data_type == "f":
                # Record text is never evaluated as a formula.
                cell.data_type = "s"
            if formatted.number_format:
                cell.number_format = formatted.number_format
            cell.alignment = Alignment(horizontal=column.align.value, vertical="center")
            cell.fill = fill
            cell.border = body_border
            cell.font = body_font
        ws.row_dimensions[row_idx].height = 18

    return first_data_row


def _summary_value(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return value
    return _clean_text(str(value))


def _add_summary_sheet(wb: Workbook, options: ReportOptions, colors: ResolvedBranding, now: datetime) -> None:
    """Second sheet listing applied filters, caller totals and basic statistics."""
    ws = wb.create_sheet(SUMMARY_SHEET_TITLE)
    ws.append(["Concepto", "Valor"])
    section_rows = []

    filters = [f for f in options.filters if f.value not in (None, "")]
    if filters:
        ws.append(["FILTROS APLICADOS", ""])
        section_rows.append(ws.max_row)
        for item in filters:
            ws.append([_summary_value(item.label), _summary_value(item.value)])
        ws.append(["", ""])

    if options.summary:
        ws.append(["RESUMEN", ""])
        section_rows.append(ws.max_row)
        for item in options.summary:
            ws.append([_summary_value(item.label), _summary_value(item.value)])

    ws.append(["", ""])
    ws.append(["ESTADÍSTICAS", ""])
    section_rows.append(ws.max_row)
    ws.append(["Total de registros", options.record_count])
    ws.append(["Fecha de exportación", format_export_timestamp(now)])

    header_fill = _solid(colors.primary)
    header_font = Font(bold=True, color=to_argb(CORPORATE_COLORS["white"]))
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")
    for row_idx in section_rows:
        ws.cell(row=row_idx, column=1).font = Font(bold=True)
    ws.column_dimensions["A"].width = 30
    ws.column_dimensions["B"].width = 40


def build_workbook(
    options: ReportOptions,
    *,
    settings: Optional[ExportSettings] = None,
    now: Optional[datetime] = None,
) -> Workbook:
    """Assemble the styled workbook for `options` (raises on invalid input)."""
    if not options.columns:
        raise ValueError("el reporte no tiene columnas")
    settings = settings or ExportSettings.default()
    now = now or datetime.now()
    colors = resolve_branding(options.branding, SPREADSHEET_DEFAULT_PRIMARY)

    wb = Workbook()
    _set_properties(wb, options, settings, now)

    ws = wb.active
    ws.title = _sheet_title(options.title)
    _setup_page(ws, colors)

    header_row = _write_preamble(ws, options, colors, now)
    first_data_row = _write_table(ws, options, colors, header_row)

    summary_row = first_data_row + options.record_count + 1
    _merged_row(
        ws,
        summary_row,
        len(options.columns),
        f"{options.title} - {options.record_count} registros | {settings.spreadsheet_attribution}",
        font=Font(size=9, italic=True, color=to_argb(CORPORATE_COLORS["faint"])),
    )

    # Everything above the first data row stays visible.
    ws.freeze_panes = f"A{first_data_row}"

    if options.filters or options.summary:
        _add_summary_sheet(wb, options, colors, now)
    return wb


def render_spreadsheet(
    options: ReportOptions,
    *,
    settings: Optional[ExportSettings] = None,
    now: Optional[datetime] = None,
) -> ExportResult:
    """
    Render `options` as an .xlsx artifact.

    Never raises: any failure is logged and returned as an unsuccessful
    result without an artifact.
    """
    try:
        filename = f"{options.filename}.xlsx"
        wb = build_workbook(options, settings=settings, now=now)
        buffer = io.BytesIO()
        wb.save(buffer)
    except Exception as exc:
        logger.exception("Error exporting report to Excel")
        return ExportResult(
            success=False,
            message=f"Error al exportar Excel: {str(exc) or 'Error desconocido'}",
        )

    artifact = ExportArtifact(filename=filename, mime_type=XLSX_MIME_TYPE, content=buffer.getvalue())
    logger.info("Excel report %s built (%d records, %d bytes)", filename, options.record_count, artifact.size)
    return ExportResult(
        success=True,
        message=f"Archivo Excel exportado exitosamente: {filename}",
        artifact=artifact,
    )
