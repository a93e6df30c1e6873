"""Tests for column width computation."""

import pytest

from pretensa_reports.models import Column, ColumnFormat
from pretensa_reports.services.layout import (
    LayoutMode,
    LayoutRules,
    character_width,
    compute_column_widths,
    fit_to_width,
    sheet_column_widths,
)


def test_sheet_width_has_a_floor() -> None:
    widths = sheet_column_widths([Column(key="a", label="Id")], [{"a": 1}])
    assert widths == [12]


def test_sheet_width_grows_with_content() -> None:
    data = [{"name": "x" * 20}]
    assert sheet_column_widths([Column(key="name", label="Nombre")], data) == [24]


def test_sheet_width_uses_formatted_value() -> None:
    # "$1,234.56" is 9 characters
    column = Column(key="cost", label="Costo", format=ColumnFormat.CURRENCY)
    assert sheet_column_widths([column], [{"cost": 1234.56}]) == [13]


def test_sheet_width_is_capped() -> None:
    assert sheet_column_widths([Column(key="n", label="Notas")], [{"n": "x" * 200}]) == [60]


def test_sheet_width_hint_is_a_lower_bound() -> None:
    assert sheet_column_widths([Column(key="n", label="N", width=18)], [{"n": "ab"}]) == [18]
    assert sheet_column_widths([Column(key="n", label="N", width=18)], [{"n": "x" * 30}]) == [34]


def test_sheet_width_without_data_uses_label() -> None:
    assert sheet_column_widths([Column(key="n", label="Descripción larga")], []) == [21]


@pytest.mark.parametrize(
    "candidates",
    [
        [30.0, 40.0, 50.0],
        [10.0, 10.0, 400.0],
        [25.0, 25.0, 25.0, 25.0],
        [100.0, 200.0, 300.0, 5.0, 5.0],
    ],
)
def test_fit_to_width_fills_available_width(candidates) -> None:
    widths = fit_to_width(candidates, 257.0, 25.0)
    assert sum(widths) == pytest.approx(257.0)
    assert all(w >= 25.0 - 1e-6 for w in widths)


def test_fit_to_width_keeps_proportions_when_unpinned() -> None:
    widths = fit_to_width([30.0, 60.0], 180.0, 25.0)
    assert widths == pytest.approx([60.0, 120.0])


def test_fit_to_width_splits_evenly_when_floor_cannot_hold() -> None:
    widths = fit_to_width([50.0] * 12, 257.0, 25.0)
    assert widths == pytest.approx([257.0 / 12] * 12)


def test_fit_to_width_empty() -> None:
    assert fit_to_width([], 100.0, 10.0) == []


def test_fit_mode_caps_content_share() -> None:
    rules = LayoutRules(min_width=10.0, padding=2.0, content_share=0.4)
    columns = [Column(key="a", label="A"), Column(key="b", label="B")]
    data = [{"a": "x" * 500, "b": "y"}]
    widths = compute_column_widths(
        columns,
        data,
        mode=LayoutMode.FIT_TO_WIDTH,
        rules=rules,
        measure_label=character_width,
        available_width=100.0,
    )
    assert sum(widths) == pytest.approx(100.0)
    # 40 (capped content) vs 10 (floor): 80/20 split
    assert widths == pytest.approx([80.0, 20.0])


def test_fit_mode_requires_available_width() -> None:
    with pytest.raises(ValueError):
        compute_column_widths(
            [Column(key="a", label="A")],
            [],
            mode=LayoutMode.FIT_TO_WIDTH,
            rules=LayoutRules(min_width=10.0, padding=2.0),
            measure_label=character_width,
        )
