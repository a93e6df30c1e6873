"""
Branding color resolution.

Colors arrive from callers as free text; anything that is not a 6-digit hex
color is replaced by the corporate default so a typo never breaks an export.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pretensa_reports.config.settings import CORPORATE_COLORS
from pretensa_reports.models import Branding

logger = logging.getLogger(__name__)

_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


@dataclass(slots=True)
class ResolvedBranding:
    """Validated colors, always in '#RRGGBB' form."""

    primary: str
    secondary: str
    header: str


def resolve_color(value: str | None, default: str) -> str:
    """Return `value` normalised to '#RRGGBB', or `default` when it does not parse."""
    if value is None:
        return default
    match = _HEX_COLOR_RE.match(str(value).strip())
    if not match:
        logger.warning("Invalid branding color %r, using %s", value, default)
        return default
    return "#" + match.group(1).upper()


def resolve_branding(
    branding: Branding | None,
    default_primary: str = CORPORATE_COLORS["primary"],
) -> ResolvedBranding:
    """
    Resolve every color of `branding`.

    A primary color that is missing (no branding, or no primary_color) or
    invalid becomes `default_primary`; each renderer passes its own.
    """
    branding = branding or Branding()
    return ResolvedBranding(
        primary=resolve_color(branding.primary_color, default_primary),
        secondary=resolve_color(branding.secondary_color, CORPORATE_COLORS["secondary"]),
        header=resolve_color(branding.header_color, CORPORATE_COLORS["header"]),
    )


def to_argb(color: str) -> str:
    """'#1E5AA8' -> 'FF1E5AA8' (openpyxl aRGB)."""
    return "FF" + color.lstrip("#").upper()
