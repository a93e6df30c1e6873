"""
Tabular report export engine.

Feature pages hand over a list of records and a {key: label} mapping;
`prepare_options` infers typed columns and attaches corporate branding, and
`render_spreadsheet` / `render_document` turn the options into .xlsx / .pdf
artifacts returned in memory.
"""

from pretensa_reports.models import (
    Branding,
    Column,
    ColumnAlign,
    ColumnFormat,
    CompanyInfo,
    ExportArtifact,
    ExportResult,
    ReportMetadata,
    ReportOptions,
    SummaryItem,
)
from pretensa_reports.reports import render_document, render_spreadsheet
from pretensa_reports.services.options_service import prepare_options

__all__ = [
    "Branding",
    "Column",
    "ColumnAlign",
    "ColumnFormat",
    "CompanyInfo",
    "ExportArtifact",
    "ExportResult",
    "ReportMetadata",
    "ReportOptions",
    "SummaryItem",
    "prepare_options",
    "render_document",
    "render_spreadsheet",
]
