"""
Column inference for the convenience entry point.

Only the first record is sampled; a None there means the column is exported
as plain text even if later records hold numbers.
"""

from __future__ import annotations

import numbers
from typing import Any, List, Mapping, Sequence

from pretensa_reports.models import Column, ColumnFormat

DATE_TOKENS = ("date", "fecha")
MONEY_TOKENS = ("cost", "price", "amount")

DEFAULT_WIDTH = 15
DATE_WIDTH = 18
CURRENCY_WIDTH = 20
LONG_TEXT_WIDTH = 25
LONG_TEXT_THRESHOLD = 30


def _is_numeric(value: object) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def infer_column(key: str, label: str, sample: object) -> Column:
    """Build one column from its key, label and a sample value."""
    fmt = ColumnFormat.TEXT
    width = DEFAULT_WIDTH

    if sample is not None:
        lowered = key.lower()
        if any(token in lowered for token in DATE_TOKENS):
            fmt, width = ColumnFormat.DATE, DATE_WIDTH
        elif any(token in lowered for token in MONEY_TOKENS):
            fmt, width = ColumnFormat.CURRENCY, CURRENCY_WIDTH
        elif _is_numeric(sample):
            fmt = ColumnFormat.NUMBER
        elif isinstance(sample, str) and len(sample) > LONG_TEXT_THRESHOLD:
            width = LONG_TEXT_WIDTH

    return Column(key=key, label=label, format=fmt, width=width)


def infer_columns(
    data: Sequence[Mapping[str, Any]],
    column_labels: Mapping[str, str],
) -> List[Column]:
    """Columns in `column_labels` order, typed from the first record."""
    first = data[0] if data else {}
    return [infer_column(key, label, first.get(key)) for key, label in column_labels.items()]
