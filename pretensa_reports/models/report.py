from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from pretensa_reports.models.column import Column

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIME_TYPE = "application/pdf"


@dataclass(slots=True)
class CompanyInfo:
    """Static branding text printed on every report."""

    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None

    def contact_line(self) -> str:
        """Address, phone, email and website joined by ' | ' (blank parts skipped)."""
        parts = [self.address, self.phone, self.email, self.website]
        return " | ".join(p for p in parts if p)


@dataclass(slots=True)
class Branding:
    """Hex colors (#RRGGBB); invalid or missing values fall back to defaults."""

    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    header_color: Optional[str] = None


@dataclass(slots=True)
class ReportMetadata:
    author: Optional[str] = None
    department: Optional[str] = None
    description: Optional[str] = None
    keywords: List[str] = field(default_factory=list)


@dataclass(slots=True)
class SummaryItem:
    """A label/value pair listed on the summary sheet (filters or totals)."""

    label: str
    value: Any = None


@dataclass(slots=True)
class ReportOptions:
    """Everything a renderer needs to produce one report."""

    title: str
    filename: str
    columns: List[Column]
    data: List[Mapping[str, Any]] = field(default_factory=list)
    subtitle: Optional[str] = None
    company_info: Optional[CompanyInfo] = None
    metadata: Optional[ReportMetadata] = None
    branding: Optional[Branding] = None
    filters: List[SummaryItem] = field(default_factory=list)
    summary: List[SummaryItem] = field(default_factory=list)

    @property
    def record_count(self) -> int:
        return len(self.data)


@dataclass(slots=True)
class ExportArtifact:
    """Finished report bytes; delivery (download, HTTP, disk) is up to the caller."""

    filename: str
    mime_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(slots=True)
class ExportResult:
    success: bool
    message: str
    artifact: Optional[ExportArtifact] = None
