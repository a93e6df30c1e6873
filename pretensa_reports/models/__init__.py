"""
Domain models for the report export engine.

These are plain dataclasses; records themselves stay as caller-owned mappings.
"""

from pretensa_reports.models.column import Column, ColumnAlign, ColumnFormat, default_align
from pretensa_reports.models.report import (
    PDF_MIME_TYPE,
    XLSX_MIME_TYPE,
    Branding,
    CompanyInfo,
    ExportArtifact,
    ExportResult,
    ReportMetadata,
    ReportOptions,
    SummaryItem,
)

__all__ = [
    "Column",
    "ColumnAlign",
    "ColumnFormat",
    "default_align",
    "Branding",
    "CompanyInfo",
    "ExportArtifact",
    "ExportResult",
    "ReportMetadata",
    "ReportOptions",
    "SummaryItem",
    "PDF_MIME_TYPE",
    "XLSX_MIME_TYPE",
]
