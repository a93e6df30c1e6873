"""
PDF report generation for tabular exports.

The document is drawn directly on a ReportLab canvas (A4 landscape). All
vertical positions below are in millimetres from the top of the page and
are converted to ReportLab's bottom-up points when drawing.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from pretensa_reports.config.limits import (
    CELL_FONT_SIZE,
    CELL_INNER_PADDING_MM,
    DOC_COLUMN_PADDING_MM,
    DOC_CONTENT_SHARE,
    DOC_MIN_COLUMN_WIDTH_MM,
    ELLIPSIS,
    FONT_BOLD,
    FONT_ITALIC,
    FONT_REGULAR,
    FOOTER_FONT_SIZE,
    FOOTER_RESERVE_MM,
    FOOTER_Y_FROM_BOTTOM_MM,
    HEADER_BAND_HEIGHT_MM,
    HEADER_FONT_SIZE,
    META_GAP_MM,
    PAGE_MARGIN_MM,
    ROW_BAND_OFFSET_MM,
    ROW_HEIGHT_MM,
    SUBTITLE_GAP_MM,
    TABLE_GAP_MM,
    TABLE_HEADER_ADVANCE_MM,
    TABLE_HEADER_HEIGHT_MM,
    TABLE_HEADER_OFFSET_MM,
    TITLE_Y_MM,
)
from pretensa_reports.config.settings import CORPORATE_COLORS, ExportSettings
from pretensa_reports.models import PDF_MIME_TYPE, Column, ColumnAlign, ExportArtifact, ExportResult, ReportOptions
from pretensa_reports.services.branding import ResolvedBranding, resolve_branding
from pretensa_reports.services.layout import LayoutMode, LayoutRules, compute_column_widths
from pretensa_reports.services.value_formatter import format_value, metadata_line

logger = logging.getLogger(__name__)

Measure = Callable[[str], float]

DOCUMENT_RULES = LayoutRules(
    min_width=DOC_MIN_COLUMN_WIDTH_MM,
    padding=DOC_COLUMN_PADDING_MM,
    content_share=DOC_CONTENT_SHARE,
)

_LINE_BREAKS_RE = re.compile(r"[\r\n\t]+")


def text_width_mm(text: str, font_name: str, font_size: float) -> float:
    return stringWidth(text, font_name, font_size) / mm


def label_width_mm(text: str) -> float:
    return text_width_mm(text, FONT_BOLD, HEADER_FONT_SIZE)


def cell_width_mm(text: str) -> float:
    return text_width_mm(text, FONT_REGULAR, CELL_FONT_SIZE)


def truncate_text(text: str, max_width: float, measure: Measure, *, word_boundary: bool = True) -> str:
    """
    Shorten `text` to a single line no wider than `max_width`.

    Text that fits is returned unchanged. Otherwise the longest run of whole
    words that fits together with '...' is kept; when there is no usable word
    break, characters are dropped one by one instead. A column too narrow
    for the '...' itself gets an empty string.
    """
    if measure(text) <= max_width:
        return text
    if measure(ELLIPSIS) > max_width:
        return ""

    if word_boundary:
        words = text.split(" ")
        fitted = ""
        for count in range(1, len(words)):
            candidate = " ".join(words[:count]).rstrip()
            if measure(candidate + ELLIPSIS) > max_width:
                break
            fitted = candidate
        if fitted:
            return fitted + ELLIPSIS

    # Longest prefix that still fits with the suffix (width grows with length).
    low, high = 0, len(text)
    while low < high:
        middle = (low + high + 1) // 2
        if measure(text[:middle] + ELLIPSIS) <= max_width:
            low = middle
        else:
            high = middle - 1
    return text[:low].rstrip() + ELLIPSIS


def cell_text(value: object, column: Column, max_width: float) -> str:
    """Formatted, single-line, width-limited text for one cell."""
    text = _LINE_BREAKS_RE.sub(" ", format_value(value, column.format))
    return truncate_text(text, max_width, cell_width_mm)


@dataclass(slots=True)
class PageGeometry:
    width_mm: float
    height_mm: float
    margin_mm: float = PAGE_MARGIN_MM

    @classmethod
    def a4_landscape(cls) -> "PageGeometry":
        width, height = landscape(A4)
        return cls(width_mm=width / mm, height_mm=height / mm)

    @property
    def available_width_mm(self) -> float:
        return self.width_mm - 2 * self.margin_mm

    @property
    def row_limit_mm(self) -> float:
        """A row whose cursor is past this line moves to the next page."""
        return self.height_mm - FOOTER_RESERVE_MM

    @property
    def continuation_row_y_mm(self) -> float:
        """Cursor of the first row on pages after the first."""
        return self.margin_mm + TABLE_HEADER_ADVANCE_MM


@dataclass(slots=True)
class DocumentPlan:
    """What was laid out: widths per column and record indexes per page."""

    column_widths_mm: List[float]
    pages: List[List[int]]
    header_band_pages: List[int] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def plan_pages(row_count: int, first_row_y_mm: float, geometry: PageGeometry) -> List[List[int]]:
    """
    Split record indexes into pages.

    Before each row, a cursor past `geometry.row_limit_mm` starts a new
    page whose rows begin below the repeated table header. There is always
    at least one page.
    """
    pages: List[List[int]] = [[]]
    y = first_row_y_mm
    for index in range(row_count):
        if y > geometry.row_limit_mm:
            pages.append([])
            y = geometry.continuation_row_y_mm
        pages[-1].append(index)
        y += ROW_HEIGHT_MM
    return pages


class _NumberedCanvas(canvas.Canvas):
    """Canvas that stamps 'Página i de N' footers once the page count is known."""

    def __init__(self, *args, footer_text: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states: list[dict] = []
        self._footer_text = footer_text

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        width, _height = self._pagesize
        margin = PAGE_MARGIN_MM * mm
        y = FOOTER_Y_FROM_BOTTOM_MM * mm
        self.saveState()
        self.setFont(FONT_REGULAR, FOOTER_FONT_SIZE)
        self.setFillColor(colors.HexColor(CORPORATE_COLORS["faint"]))
        self.drawRightString(width - margin, y, f"Página {self._pageNumber} de {total}")
        self.drawString(margin, y, self._footer_text)
        self.restoreState()


class _DocumentWriter:
    """Draws one report onto a numbered canvas following a DocumentPlan."""

    def __init__(
        self,
        pdf: canvas.Canvas,
        options: ReportOptions,
        palette: ResolvedBranding,
        geometry: PageGeometry,
        widths_mm: List[float],
    ) -> None:
        self.pdf = pdf
        self.options = options
        self.palette = palette
        self.geometry = geometry
        self.widths_mm = widths_mm
        self.header_band_pages: List[int] = []

    def _y(self, top_mm: float) -> float:
        return (self.geometry.height_mm - top_mm) * mm

    def _fill_rect(self, x_mm: float, top_mm: float, width_mm: float, height_mm: float, color: str) -> None:
        self.pdf.setFillColor(colors.HexColor(color))
        self.pdf.rect(x_mm * mm, self._y(top_mm + height_mm), width_mm * mm, height_mm * mm, stroke=0, fill=1)

    def draw_page_header(self) -> None:
        """Colored band across the top of page 1 with the company details."""
        self._fill_rect(0, 0, self.geometry.width_mm, HEADER_BAND_HEIGHT_MM, self.palette.primary)
        company = self.options.company_info
        if company is None:
            return
        margin = self.geometry.margin_mm
        self.pdf.setFillColor(colors.white)
        self.pdf.setFont(FONT_BOLD, 16)
        self.pdf.drawString(margin * mm, self._y(20), company.name)
        details = company.contact_line()
        if details:
            self.pdf.setFont(FONT_REGULAR, 10)
            self.pdf.drawString(margin * mm, self._y(30), details)

    def draw_title_block(self, now: datetime) -> float:
        """Title, subtitle and generation line. Returns the table cursor."""
        center = self.geometry.width_mm / 2 * mm
        y = TITLE_Y_MM
        self.pdf.setFillColor(colors.HexColor(CORPORATE_COLORS["dark"]))
        self.pdf.setFont(FONT_BOLD, 18)
        self.pdf.drawCentredString(center, self._y(y), self.options.title)

        if self.options.subtitle:
            y += SUBTITLE_GAP_MM
            self.pdf.setFont(FONT_ITALIC, 12)
            self.pdf.setFillColor(colors.HexColor(CORPORATE_COLORS["muted"]))
            self.pdf.drawCentredString(center, self._y(y), self.options.subtitle)

        y += META_GAP_MM
        self.pdf.setFont(FONT_REGULAR, 10)
        self.pdf.setFillColor(colors.HexColor(CORPORATE_COLORS["faint"]))
        self.pdf.drawCentredString(center, self._y(y), metadata_line(now, self.options.record_count))
        return y + TABLE_GAP_MM

    def draw_table_header(self, y_mm: float) -> float:
        """Primary-colored label band at `y_mm`. Returns the first row cursor."""
        margin = self.geometry.margin_mm
        self._fill_rect(
            margin,
            y_mm - TABLE_HEADER_OFFSET_MM,
            self.geometry.available_width_mm,
            TABLE_HEADER_HEIGHT_MM,
            self.palette.primary,
        )
        self.pdf.setFillColor(colors.white)
        self.pdf.setFont(FONT_BOLD, HEADER_FONT_SIZE)
        x = margin
        for column, width in zip(self.options.columns, self.widths_mm):
            label = truncate_text(column.label, width - CELL_INNER_PADDING_MM, label_width_mm, word_boundary=False)
            self.pdf.drawString((x + CELL_INNER_PADDING_MM / 2) * mm, self._y(y_mm + 3), label)
            x += width
        self.header_band_pages.append(self.pdf.getPageNumber())
        return y_mm + TABLE_HEADER_ADVANCE_MM

    def draw_row(self, index: int, y_mm: float) -> None:
        margin = self.geometry.margin_mm
        if index % 2 == 0:
            self._fill_rect(
                margin,
                y_mm - ROW_BAND_OFFSET_MM,
                self.geometry.available_width_mm,
                ROW_HEIGHT_MM,
                CORPORATE_COLORS["zebra"],
            )

        record = self.options.data[index]
        self.pdf.setFont(FONT_REGULAR, CELL_FONT_SIZE)
        self.pdf.setFillColor(colors.HexColor(CORPORATE_COLORS["dark"]))
        pad = CELL_INNER_PADDING_MM / 2
        x = margin
        baseline = self._y(y_mm + 2)
        for column, width in zip(self.options.columns, self.widths_mm):
            text = cell_text(record.get(column.key), column, width - CELL_INNER_PADDING_MM)
            if column.align is ColumnAlign.RIGHT:
                self.pdf.drawRightString((x + width - pad) * mm, baseline, text)
            elif column.align is ColumnAlign.CENTER:
                self.pdf.drawCentredString((x + width / 2) * mm, baseline, text)
            else:
                self.pdf.drawString((x + pad) * mm, baseline, text)
            x += width

    def draw(self, now: datetime) -> List[List[int]]:
        self.draw_page_header()
        table_y = self.draw_title_block(now)
        first_row_y = table_y + TABLE_HEADER_ADVANCE_MM
        pages = plan_pages(self.options.record_count, first_row_y, self.geometry)

        for page_index, rows in enumerate(pages):
            if page_index == 0:
                y = self.draw_table_header(table_y)
            else:
                self.pdf.showPage()
                y = self.draw_table_header(self.geometry.margin_mm)
            for index in rows:
                self.draw_row(index, y)
                y += ROW_HEIGHT_MM
        self.pdf.showPage()
        return pages


def document_column_widths(options: ReportOptions, geometry: PageGeometry) -> List[float]:
    """Document widths in mm, always summing to the drawable width."""
    return compute_column_widths(
        options.columns,
        options.data,
        mode=LayoutMode.FIT_TO_WIDTH,
        rules=DOCUMENT_RULES,
        measure_label=label_width_mm,
        measure_content=cell_width_mm,
        available_width=geometry.available_width_mm,
    )


def build_document(
    options: ReportOptions,
    *,
    settings: Optional[ExportSettings] = None,
    now: Optional[datetime] = None,
) -> tuple[bytes, DocumentPlan]:
    """Draw the PDF for `options` (raises on invalid input)."""
    if not options.columns:
        raise ValueError("el reporte no tiene columnas")
    settings = settings or ExportSettings.default()
    now = now or datetime.now()
    palette = resolve_branding(options.branding)
    geometry = PageGeometry.a4_landscape()
    widths = document_column_widths(options, geometry)

    meta = options.metadata
    buffer = io.BytesIO()
    pdf = _NumberedCanvas(
        buffer,
        pagesize=landscape(A4),
        pageCompression=1,
        footer_text=f"{options.title} - {settings.document_attribution}",
    )
    pdf.setTitle(options.title)
    pdf.setSubject(options.title)
    pdf.setAuthor((meta.author if meta else None) or settings.document_author)
    pdf.setCreator(settings.document_author)
    pdf.setKeywords(", ".join((meta.keywords if meta else None) or ["reporte", "datos", "sistemas"]))

    writer = _DocumentWriter(pdf, options, palette, geometry, widths)
    pages = writer.draw(now)
    pdf.save()

    plan = DocumentPlan(column_widths_mm=widths, pages=pages, header_band_pages=writer.header_band_pages)
    return buffer.getvalue(), plan


def render_document(
    options: ReportOptions,
    *,
    settings: Optional[ExportSettings] = None,
    now: Optional[datetime] = None,
) -> ExportResult:
    """
    Render `options` as a paginated .pdf artifact.

    Never raises: any failure is logged and returned as an unsuccessful
    result without an artifact.
    """
    try:
        filename = f"{options.filename}.pdf"
        content, plan = build_document(options, settings=settings, now=now)
    except Exception as exc:
        logger.exception("Error exporting report to PDF")
        return ExportResult(
            success=False,
            message=f"Error al exportar PDF: {str(exc) or 'Error desconocido'}",
        )

    artifact = ExportArtifact(filename=filename, mime_type=PDF_MIME_TYPE, content=content)
    logger.info("PDF report %s built (%d records, %d pages)", filename, options.record_count, plan.page_count)
    return ExportResult(
        success=True,
        message=f"Archivo PDF exportado exitosamente: {filename}",
        artifact=artifact,
    )
