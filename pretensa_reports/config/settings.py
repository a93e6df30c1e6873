"""
Corporate defaults and logging configuration for report exports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pretensa_reports.models import Branding, CompanyInfo

# Corporate colors matching the Pretensa logo
CORPORATE_COLORS = {
    "primary": "#1E5AA8",
    "secondary": "#DC2626",
    "accent": "#059669",
    "light": "#F8FAFC",
    "dark": "#1F2937",
    "white": "#FFFFFF",
    "header": "#E5E7EB",
    "muted": "#6B7280",
    "faint": "#9CA3AF",
    "body_text": "#374151",
    "zebra": "#F9FAFB",
    "header_border": "#D1D5DB",
    "cell_border": "#E5E7EB",
}

# Spreadsheet primary color when the caller supplies none (or an invalid one).
SPREADSHEET_DEFAULT_PRIMARY = "#1E40AF"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


@dataclass(slots=True)
class ExportSettings:
    """Static texts and defaults stamped on every report."""

    company: CompanyInfo
    branding: Branding
    default_title: str = "Reporte de Datos"
    default_author: str = "Sistema de Gestión"
    default_department: str = "Sistemas"
    keywords: List[str] = field(default_factory=lambda: ["reporte", "datos", "sistemas", "pretensa", "paschini"])
    spreadsheet_author: str = "Sistema Pretensa & Paschini"
    spreadsheet_attribution: str = "Exportado por Sistema Pretensa & Paschini"
    document_author: str = "Sistema Estructuras Pretensa"
    document_attribution: str = "Sistema Estructuras Pretensa"

    @classmethod
    def default(cls) -> "ExportSettings":
        company = CompanyInfo(
            name="Estructuras Pretensa",
            address="Avenida La Voz del Interior 5500, Córdoba, Argentina",
            email="sistemas@pretensa.com.ar",
            website="www.pretensa.com.ar",
            logo="/logo.png",
        )
        branding = Branding(
            primary_color=CORPORATE_COLORS["primary"],
            secondary_color=CORPORATE_COLORS["secondary"],
            header_color=CORPORATE_COLORS["header"],
        )
        return cls(company=company, branding=branding)


def init_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Configure basic logging to console and an optional file."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    logging.getLogger(__name__).info("Logging initialized for report exports")
