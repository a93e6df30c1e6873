"""
Column width computation shared by the spreadsheet and document renderers.

Both outputs size a column from the larger of its label and its widest
formatted value, plus padding, never below a floor. They differ only in the
final step:

- UNCONSTRAINED (spreadsheet): each column is clamped on its own to
  [min_width, max_width]; a sheet has no page width to respect.
- FIT_TO_WIDTH (document): all candidates are scaled by a common ratio so
  the row fills the drawable width exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence

from pretensa_reports.config.limits import (
    EPS,
    SHEET_COLUMN_PADDING,
    SHEET_MAX_COLUMN_WIDTH,
    SHEET_MIN_COLUMN_WIDTH,
)
from pretensa_reports.models import Column
from pretensa_reports.services.value_formatter import format_value

Measure = Callable[[str], float]


class LayoutMode(Enum):
    UNCONSTRAINED = "unconstrained"
    FIT_TO_WIDTH = "fit_to_width"


@dataclass(slots=True)
class LayoutRules:
    min_width: float
    padding: float
    max_width: Optional[float] = None
    # Cap on the content contribution, as a share of the available width.
    content_share: Optional[float] = None


SHEET_RULES = LayoutRules(
    min_width=SHEET_MIN_COLUMN_WIDTH,
    padding=SHEET_COLUMN_PADDING,
    max_width=SHEET_MAX_COLUMN_WIDTH,
)


def character_width(text: str) -> float:
    """Spreadsheet measure: one unit per character."""
    return float(len(text))


def max_content_width(
    column: Column,
    data: Sequence[Mapping[str, Any]],
    measure: Measure,
) -> float:
    """Widest formatted value of `column` across all records (0 for no data)."""
    widest = 0.0
    for record in data:
        text = format_value(record.get(column.key), column.format)
        widest = max(widest, measure(text))
    return widest


def fit_to_width(candidates: Sequence[float], available: float, floor: float) -> List[float]:
    """
    Scale `candidates` so they sum to `available`.

    When shrinking would push a column under `floor`, that column is pinned
    at the floor and the remaining width is shared proportionally among the
    others. If the floor itself cannot be honoured for every column, the
    width is split evenly.
    """
    count = len(candidates)
    if count == 0:
        return []
    if floor * count >= available - EPS:
        return [available / count] * count

    pinned: set[int] = set()
    widths = list(candidates)
    while True:
        free = [i for i in range(count) if i not in pinned]
        remaining = available - floor * len(pinned)
        free_total = sum(candidates[i] for i in free)
        if free_total <= EPS:
            share = remaining / len(free)
            for i in free:
                widths[i] = share
        else:
            ratio = remaining / free_total
            for i in free:
                widths[i] = candidates[i] * ratio
        for i in pinned:
            widths[i] = floor

        undersized = [i for i in free if widths[i] < floor - EPS]
        if not undersized:
            return widths
        pinned.update(undersized)


def compute_column_widths(
    columns: Sequence[Column],
    data: Sequence[Mapping[str, Any]],
    *,
    mode: LayoutMode,
    rules: LayoutRules,
    measure_label: Measure,
    measure_content: Optional[Measure] = None,
    available_width: Optional[float] = None,
) -> List[float]:
    """Width per column, in the unit `measure_*` and `rules` are expressed in."""
    measure_content = measure_content or measure_label

    content_cap: Optional[float] = None
    if mode is LayoutMode.FIT_TO_WIDTH:
        if available_width is None:
            raise ValueError("available_width is required in FIT_TO_WIDTH mode")
        if rules.content_share is not None:
            content_cap = available_width * rules.content_share

    candidates: List[float] = []
    for column in columns:
        label_width = measure_label(column.label) + rules.padding
        content_width = max_content_width(column, data, measure_content) + rules.padding
        if content_cap is not None:
            content_width = min(content_width, content_cap)
        candidate = max(label_width, content_width, rules.min_width)

        if mode is LayoutMode.UNCONSTRAINED:
            if column.width:
                candidate = max(candidate, float(column.width))
            if rules.max_width is not None:
                candidate = min(candidate, rules.max_width)
            candidate = max(candidate, rules.min_width)
        candidates.append(candidate)

    if mode is LayoutMode.FIT_TO_WIDTH:
        return fit_to_width(candidates, float(available_width), rules.min_width)
    return candidates


def sheet_column_widths(columns: Sequence[Column], data: Sequence[Mapping[str, Any]]) -> List[float]:
    """Spreadsheet widths in character units."""
    return compute_column_widths(
        columns,
        data,
        mode=LayoutMode.UNCONSTRAINED,
        rules=SHEET_RULES,
        measure_label=character_width,
    )
