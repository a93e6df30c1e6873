"""
Report renderers (Excel/PDF) for tabular exports.
"""

from pretensa_reports.reports.excel_report import build_workbook, render_spreadsheet
from pretensa_reports.reports.pdf_report import DocumentPlan, build_document, render_document
from pretensa_reports.reports.simple_export import (
    ExportError,
    TableExport,
    export_table_to_excel,
    export_table_to_pdf,
    format_data_for_export,
)

__all__ = [
    "build_workbook",
    "render_spreadsheet",
    "DocumentPlan",
    "build_document",
    "render_document",
    "ExportError",
    "TableExport",
    "export_table_to_excel",
    "export_table_to_pdf",
    "format_data_for_export",
]
