"""
File helpers for callers that deliver reports to disk.

The renderers only produce in-memory artifacts; writing them out, and
reading report descriptions from JSON, happens here at the boundary.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from pretensa_reports.models import (
    Branding,
    Column,
    CompanyInfo,
    ExportArtifact,
    ReportMetadata,
    ReportOptions,
    SummaryItem,
)


def save_artifact(artifact: ExportArtifact, directory: Path) -> Path:
    """
    Write an artifact into `directory` under its own filename.

    Args:
        artifact: The rendered report
        directory: Target folder (created if missing)
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / Path(artifact.filename).name
    path.write_bytes(artifact.content)
    return path


def _summary_items(raw: Any) -> List[SummaryItem]:
    if not isinstance(raw, list):
        return []
    items: List[SummaryItem] = []
    for entry in raw:
        if isinstance(entry, dict) and "label" in entry:
            items.append(SummaryItem(label=str(entry["label"]), value=entry.get("value")))
    return items


def report_options_from_dict(data: Dict[str, Any]) -> ReportOptions:
    """Build ReportOptions from a JSON-style dict (camelCase or snake_case keys)."""
    columns = [
        Column(
            key=col["key"],
            label=col.get("label", col["key"]),
            format=col.get("format") or "text",
            align=col.get("align"),
            width=col.get("width"),
        )
        for col in data.get("columns") or []
    ]

    company_raw = data.get("company_info") or data.get("companyInfo")
    company = CompanyInfo(**company_raw) if isinstance(company_raw, dict) else None

    branding_raw = data.get("branding")
    branding = None
    if isinstance(branding_raw, dict):
        branding = Branding(
            primary_color=branding_raw.get("primary_color") or branding_raw.get("primaryColor"),
            secondary_color=branding_raw.get("secondary_color") or branding_raw.get("secondaryColor"),
            header_color=branding_raw.get("header_color") or branding_raw.get("headerColor"),
        )

    meta_raw = data.get("metadata")
    metadata = None
    if isinstance(meta_raw, dict):
        metadata = ReportMetadata(
            author=meta_raw.get("author"),
            department=meta_raw.get("department"),
            description=meta_raw.get("description"),
            keywords=list(meta_raw.get("keywords") or []),
        )

    title = data.get("title") or "Reporte de Datos"
    return ReportOptions(
        title=title,
        subtitle=data.get("subtitle"),
        filename=data.get("filename") or "reporte",
        columns=columns,
        data=list(data.get("data") or []),
        company_info=company,
        metadata=metadata,
        branding=branding,
        filters=_summary_items(data.get("filters")),
        summary=_summary_items(data.get("summary")),
    )


def load_report_options(filepath: Path) -> ReportOptions:
    """Load a report description (title, columns, data, ...) from a JSON file."""
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    return report_options_from_dict(data)
