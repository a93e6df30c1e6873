"""
Cell value formatting for report exports.

Every function here is pure and never raises: unparsable dates pass through
as text and non-numeric values in numeric columns render as 0.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import pandas as pd

from pretensa_reports.models import ColumnFormat

NUMBER_FORMAT_INTEGER = "#,##0"
NUMBER_FORMAT_CURRENCY = '"$"#,##0.00'
NUMBER_FORMAT_PERCENTAGE = "0.00%"

DATE_FORMAT = "%d/%m/%Y"

# Text is only read as a date when it carries day, month and year:
# YYYY-MM-DD[...] or DD/MM/YYYY (also with '-' or '.').
_DATE_TEXT_RE = re.compile(r"^(\d{4}-\d{1,2}-\d{1,2}|\d{1,2}[/.-]\d{1,2}[/.-]\d{4})(\b|T)")

MONTHS_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


@dataclass(slots=True)
class CellValue:
    """Typed spreadsheet value plus the Excel number format to apply (if any)."""

    value: Any
    number_format: str | None = None


def _is_blank(value: object) -> bool:
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def _parse_date_text(text: str) -> pd.Timestamp | None:
    # Words like "now" or bare times ("10:30") would parse relative to today.
    if not _DATE_TEXT_RE.match(text):
        return None
    try:
        return pd.to_datetime(text, format="ISO8601", utc=True)
    except ValueError:
        return pd.to_datetime(text, dayfirst=True, utc=True)


def parse_date(value: object) -> pd.Timestamp | None:
    """
    Parse a raw value into a UTC timestamp.

    Numbers are read as epoch milliseconds; naive datetimes and strings are
    taken as UTC. Returns None when the value is blank or not a date.
    """
    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float, Decimal)):
            if not math.isfinite(float(value)):
                return None
            ts = pd.to_datetime(float(value), unit="ms", utc=True)
        elif isinstance(value, str):
            ts = _parse_date_text(value.strip())
        elif isinstance(value, (datetime, date, pd.Timestamp)):
            ts = pd.to_datetime(value, utc=True)
        else:
            return None
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts


def to_number(value: object) -> float:
    """Coerce to float; anything that is not a finite number becomes 0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def group_number(number: float, decimals: int, *, strip_zeros: bool = False) -> str:
    """Render with ',' thousands separator and '.' decimal separator."""
    if round(number, decimals) == 0:
        number = 0.0  # avoid "-0.00"
    text = f"{number:,.{decimals}f}"
    if strip_zeros and "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_date(value: object) -> str:
    if _is_blank(value):
        return ""
    ts = parse_date(value)
    if ts is None:
        return str(value)
    return ts.strftime(DATE_FORMAT)


def format_value(value: object, fmt: ColumnFormat | str) -> str:
    """Display string for a raw value under the given column format."""
    if not isinstance(fmt, ColumnFormat):
        try:
            fmt = ColumnFormat(str(fmt).lower())
        except ValueError:
            fmt = ColumnFormat.TEXT

    if fmt is ColumnFormat.DATE:
        return format_date(value)
    if fmt is ColumnFormat.NUMBER:
        return group_number(to_number(value), 3, strip_zeros=True)
    if fmt is ColumnFormat.CURRENCY:
        return "$" + group_number(to_number(value), 2)
    if fmt is ColumnFormat.PERCENTAGE:
        return f"{group_number(to_number(value) * 100, 2)}%"
    return "" if value is None else str(value)


def to_cell_value(value: object, fmt: ColumnFormat) -> CellValue:
    """
    Native spreadsheet value for a raw value.

    Numeric formats keep a real number so Excel can sum and sort it; dates are
    written as DD/MM/YYYY text so every viewer shows the same thing.
    """
    if fmt is ColumnFormat.NUMBER:
        number = to_number(value)
        return CellValue(int(number) if number.is_integer() else number, NUMBER_FORMAT_INTEGER)
    if fmt is ColumnFormat.CURRENCY:
        return CellValue(to_number(value), NUMBER_FORMAT_CURRENCY)
    if fmt is ColumnFormat.PERCENTAGE:
        return CellValue(to_number(value), NUMBER_FORMAT_PERCENTAGE)
    return CellValue(format_value(value, fmt))


def format_generated_at(now: datetime) -> str:
    """Long-form timestamp, e.g. '19 de octubre de 2026, 14:30'."""
    return f"{now.day} de {MONTHS_ES[now.month - 1]} de {now.year}, {now:%H:%M}"


def format_export_timestamp(now: datetime) -> str:
    """Short timestamp, e.g. '19/10/2026, 14:30:00'."""
    return now.strftime("%d/%m/%Y, %H:%M:%S")


def metadata_line(now: datetime, record_count: int) -> str:
    return f"Generado el {format_generated_at(now)} | Total de registros: {record_count}"
