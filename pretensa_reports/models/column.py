from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ColumnFormat(Enum):
    TEXT = "text"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    PERCENTAGE = "percentage"


class ColumnAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def default_align(fmt: ColumnFormat) -> ColumnAlign:
    """Numbers and amounts read right-aligned, everything else left."""
    if fmt in (ColumnFormat.NUMBER, ColumnFormat.CURRENCY):
        return ColumnAlign.RIGHT
    return ColumnAlign.LEFT


@dataclass(slots=True)
class Column:
    """
    One exported column.

    `key` is read from every record (a missing key reads as None), `label`
    is the header text and `format` drives both value rendering and layout.
    `width` is an optional hint in spreadsheet character widths.
    """

    key: str
    label: str
    format: ColumnFormat = ColumnFormat.TEXT
    align: ColumnAlign | None = None
    width: float | None = None

    def __post_init__(self) -> None:
        # Accept plain strings ("currency", "right") from JSON or callers.
        if not isinstance(self.format, ColumnFormat):
            self.format = ColumnFormat(str(self.format).lower())
        if self.align is None:
            self.align = default_align(self.format)
        elif not isinstance(self.align, ColumnAlign):
            self.align = ColumnAlign(str(self.align).lower())
