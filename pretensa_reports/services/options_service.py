"""
Builds ReportOptions for feature pages that only have records and labels.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from pretensa_reports.config.settings import ExportSettings
from pretensa_reports.models import Branding, CompanyInfo, ReportMetadata, ReportOptions
from pretensa_reports.services.column_inference import infer_columns

_WHITESPACE_RE = re.compile(r"\s+")


def slugify_title(title: str) -> str:
    """Lowercase and replace whitespace runs with '_'."""
    return _WHITESPACE_RE.sub("_", title.lower())


def build_filename(title: Optional[str], now: datetime) -> str:
    """'{slug}_{YYYY-MM-DD}' using the UTC date of `now`."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    stem = slugify_title(title) if title else "reporte"
    return f"{stem}_{now.date().isoformat()}"


def prepare_options(
    data: Sequence[Mapping[str, Any]],
    column_labels: Mapping[str, str],
    report_meta: Optional[Mapping[str, Any]] = None,
    *,
    settings: Optional[ExportSettings] = None,
    now: Optional[datetime] = None,
) -> ReportOptions:
    """
    Infer columns and attach corporate branding.

    `report_meta` may carry title, subtitle, department and author. The
    records are referenced, not copied.
    """
    settings = settings or ExportSettings.default()
    meta = dict(report_meta or {})
    now = now or datetime.now(timezone.utc)

    title = meta.get("title")
    company = settings.company
    branding = settings.branding

    return ReportOptions(
        title=title or settings.default_title,
        subtitle=meta.get("subtitle"),
        filename=build_filename(title, now),
        columns=infer_columns(data, column_labels),
        data=list(data),
        company_info=CompanyInfo(
            name=company.name,
            address=company.address,
            phone=company.phone,
            email=company.email,
            website=company.website,
            logo=company.logo,
        ),
        metadata=ReportMetadata(
            author=meta.get("author") or settings.default_author,
            department=meta.get("department") or settings.default_department,
            description=f"Reporte de {title or 'datos'} generado automáticamente",
            keywords=list(settings.keywords),
        ),
        branding=Branding(
            primary_color=branding.primary_color,
            secondary_color=branding.secondary_color,
            header_color=branding.header_color,
        ),
    )
